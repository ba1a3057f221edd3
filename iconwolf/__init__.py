"""Generate app icon assets from a square PNG or an Apple Icon Composer ``.icon`` bundle."""

from .banner import BannerOptions, apply_banner, create_banner_svg, should_apply_banner
from .bundle import BundleResult, is_bundle, read_bundle, write_bundle
from .colors import color_to_hex, hex_to_color_string, parse_color
from .errors import FormatError, IconwolfError, NotFoundError, ValidationError
from .generator import GeneratorOptions, generate
from .image import validate_source_image
from .paths import OUTPUT_FILES, resolve_output_path
from .types import GenerationResult, VariantFlags
from .variants import (
    generate_android_icons,
    generate_favicon,
    generate_splash_icon,
    generate_standard_icon,
)

__version__ = '0.1.0'
