import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .banner import BannerOptions, apply_banner, should_apply_banner
from .bundle import BUNDLE_EXTENSION, is_bundle, read_bundle, write_bundle
from .errors import NotFoundError
from .image import validate_source_image
from .log import log_generated, log_summary
from .paths import DEFAULT_OUTPUT_DIR
from .types import GenerationResult, VariantFlags
from .variants import (
    generate_android_icons,
    generate_favicon,
    generate_splash_icon,
    generate_standard_icon,
)


log = logging.getLogger(__name__)

DEFAULT_BG_COLOR = '#FFFFFF'


@dataclass
class GeneratorOptions:
    input_path: str
    output_dir: str = DEFAULT_OUTPUT_DIR
    variants: VariantFlags = field(default_factory=VariantFlags)
    bg_color: str = DEFAULT_BG_COLOR
    splash_input_path: Optional[str] = None
    banner: Optional[BannerOptions] = None
    dark_bg_color: Optional[str] = None


@dataclass
class ResolvedInput:
    input_path: Path
    bg_color: str
    foreground_path: Optional[Path] = None
    cleanup_path: Optional[Path] = None


def resolve_input(path: Path, bg_color: str) -> ResolvedInput:
    """Flatten ``.icon`` bundles to PNG; plain images pass through unchanged.

    A bundle's fill color replaces ``bg_color`` only while it is still the default.
    """
    if not is_bundle(path):
        return ResolvedInput(path, bg_color)

    log.info('Apple Icon Composer file: %s', path)
    result = read_bundle(path)
    if bg_color.upper() == DEFAULT_BG_COLOR:
        bg_color = result.extracted_bg_color
        log.info('Extracted background color: %s', bg_color)
    return ResolvedInput(result.composed_image_path, bg_color,
                         result.foreground_image_path, result.cleanup_dir)


def _validate(path: Path, label: str) -> None:
    log.info('Validating %s image: %s', label, path)
    meta = validate_source_image(path)
    log.info('%s: %dx%d %s', label.capitalize(), meta.width, meta.height, meta.format.upper())


def generate(options: GeneratorOptions) -> List[GenerationResult]:
    source = Path(options.input_path).resolve()
    output_dir = Path(options.output_dir or DEFAULT_OUTPUT_DIR).resolve()
    variants = options.variants

    if not source.exists():
        raise NotFoundError(f'Source not found: {source}')

    if str(output_dir).endswith(BUNDLE_EXTENSION):
        _validate(source, 'source')
        result = write_bundle(source, output_dir, options.bg_color,
                              dark_bg_color=options.dark_bg_color, banner=options.banner)
        log_generated(result)
        log_summary([result])
        return [result]

    cleanup: List[Path] = []
    try:
        main = resolve_input(source, options.bg_color)
        if main.cleanup_path:
            cleanup.append(main.cleanup_path)
        bg_color = main.bg_color

        splash_path = None
        if options.splash_input_path:
            splash_source = Path(options.splash_input_path).resolve()
            if not splash_source.exists():
                raise NotFoundError(f'Splash source not found: {splash_source}')
            splash = resolve_input(splash_source, bg_color)
            if splash.cleanup_path:
                cleanup.append(splash.cleanup_path)
            splash_path = splash.foreground_path or splash.input_path

        _validate(main.input_path, 'source')
        if splash_path:
            _validate(splash_path, 'splash source')

        output_dir.mkdir(parents=True, exist_ok=True)
        log.info('Output directory: %s', output_dir)

        generate_all = not variants.any_set()
        results: List[GenerationResult] = []

        if generate_all or variants.icon:
            results.append(generate_standard_icon(main.input_path, output_dir))
        if generate_all or variants.android:
            # Background and monochrome layers only when --android is explicit.
            results.extend(generate_android_icons(main.input_path, output_dir, bg_color,
                                                  include_background=variants.android))
        if generate_all or variants.favicon:
            results.append(generate_favicon(main.input_path, output_dir))
        if generate_all or variants.splash:
            results.append(generate_splash_icon(
                splash_path or main.foreground_path or main.input_path, output_dir))

        if options.banner is not None:
            for result in results:
                if should_apply_banner(result.file_path):
                    apply_banner(result, options.banner)

        for result in results:
            log_generated(result)
        log_summary(results)
        return results
    finally:
        for path in cleanup:
            shutil.rmtree(path, ignore_errors=True)
