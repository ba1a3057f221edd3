import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .banner import POSITIONS, BannerOptions
from .errors import IconwolfError
from .generator import DEFAULT_BG_COLOR, GeneratorOptions, generate
from .log import log_update_notice, setup_logging
from .paths import resolve_default_output_dir
from .types import VariantFlags
from .updates import read_cached_update_info, refresh_cache_in_background


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='iconwolf',
        description='Generate all necessary icon variants for cross-platform Expo/React Native '
                    'projects from a single source icon.',
    )
    parser.add_argument('input', help='Path to an Apple Icon Composer .icon folder or a source PNG')
    parser.add_argument('-o', '--output', default=None,
                        help='Output directory; a path ending in .icon writes an Icon Composer bundle '
                             '(default: ./src/assets/images if ./src exists, else ./assets/images)')
    parser.add_argument('--android', action='store_true', help='Generate Android adaptive icon variants only')
    parser.add_argument('--favicon', action='store_true', help='Generate web favicon only')
    parser.add_argument('--splash', action='store_true', help='Generate splash screen icon only')
    parser.add_argument('--icon', action='store_true', help='Generate standard icon.png only')
    parser.add_argument('--splash-input', help='Use a separate image for the splash screen icon')
    parser.add_argument('--bg-color', default=DEFAULT_BG_COLOR,
                        help='Background color for Android adaptive icon (default: %(default)s)')
    parser.add_argument('--dark-bg-color', help='Dark mode background color when writing a .icon bundle')
    parser.add_argument('--banner', help='Diagonal ribbon banner text (e.g. DEV, BETA, STAGING)')
    parser.add_argument('--banner-color', help='Ribbon color (default: auto from text)')
    parser.add_argument('--banner-position', default='top-left', choices=POSITIONS,
                        help='Banner position (default: %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log layer placement details')
    parser.add_argument('--log-file', type=Path, help='Also write the log to this file')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def options_from_args(args: argparse.Namespace) -> GeneratorOptions:
    banner = None
    if args.banner:
        banner = BannerOptions(args.banner, args.banner_color, args.banner_position)
    return GeneratorOptions(
        input_path=args.input,
        output_dir=args.output or resolve_default_output_dir(),
        variants=VariantFlags(
            android=args.android,
            favicon=args.favicon,
            splash=args.splash,
            icon=args.icon,
        ),
        bg_color=args.bg_color,
        splash_input_path=args.splash_input,
        banner=banner,
        dark_bg_color=args.dark_bg_color,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log = setup_logging(verbose=args.verbose, log_file=args.log_file)
    log.info('iconwolf %s - app icon generator', __version__)

    update_info = read_cached_update_info(__version__)
    refresh_cache_in_background()

    try:
        generate(options_from_args(args))
    except (IconwolfError, OSError, ValueError) as e:
        log.error('%s', e)
        return 1

    if update_info is not None and update_info.update_available:
        log_update_notice(update_info.current_version, update_info.latest_version)
    return 0


if __name__ == '__main__':
    sys.exit(main())
