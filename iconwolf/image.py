from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageChops, ImageDraw, ImageOps, UnidentifiedImageError

from .colors import parse_hex_color, round_half_up
from .errors import FormatError, NotFoundError, ValidationError
from .types import GenerationResult


ADAPTIVE_ICON_SIZE = 1024
# Android keeps the inner 66dp of a 108dp adaptive icon unmasked.
SAFE_ZONE_RATIO = 66 / 108
SAFE_ZONE_PX = round_half_up(ADAPTIVE_ICON_SIZE * SAFE_ZONE_RATIO)
CORNER_RADIUS_RATIO = 0.2237
TRANSPARENT = (0, 0, 0, 0)


@dataclass(frozen=True)
class SourceImageMeta:
    width: int
    height: int
    format: str


def open_image(path) -> Image.Image:
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f'Image not found: {path}')
    try:
        image = Image.open(path)
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise FormatError(f'Could not read image: {path}') from e
    return image


def validate_source_image(path) -> SourceImageMeta:
    """Check that ``path`` is a square PNG."""
    image = open_image(path)
    fmt = (image.format or 'unknown').lower()
    if fmt != 'png':
        raise ValidationError(f'Source image must be a PNG file (got {fmt})')
    if image.width != image.height:
        raise ValidationError(f'Source image must be square (got {image.width}x{image.height})')
    return SourceImageMeta(image.width, image.height, fmt)


def contain(image: Image.Image, width: int, height: int) -> Image.Image:
    """Fit inside ``width`` x ``height`` keeping aspect, padding with transparency."""
    return ImageOps.pad(image.convert('RGBA'), (width, height),
                        method=Image.Resampling.LANCZOS, color=TRANSPARENT)


def save_png(image: Image.Image, output_path) -> GenerationResult:
    output_path = Path(output_path)
    image.save(output_path, format='PNG')
    return GenerationResult(output_path, image.width, image.height, output_path.stat().st_size)


def resize_image(input_path, width: int, height: int, output_path) -> GenerationResult:
    return save_png(contain(open_image(input_path), width, height), output_path)


def _safe_zone_canvas(artwork: Image.Image, target_size: int) -> Image.Image:
    canvas = Image.new('RGBA', (target_size, target_size), TRANSPARENT)
    margin = round_half_up((target_size - SAFE_ZONE_PX) / 2)
    canvas.alpha_composite(artwork, dest=(max(0, margin), max(0, margin)))
    return canvas


def create_adaptive_foreground(input_path, target_size: int, output_path) -> GenerationResult:
    artwork = contain(open_image(input_path), SAFE_ZONE_PX, SAFE_ZONE_PX)
    return save_png(_safe_zone_canvas(artwork, target_size), output_path)


def create_solid_background(hex_color: str, size: int, output_path) -> GenerationResult:
    r, g, b = parse_hex_color(hex_color)
    return save_png(Image.new('RGBA', (size, size), (r, g, b, 255)), output_path)


def create_monochrome_icon(input_path, target_size: int, output_path) -> GenerationResult:
    artwork = contain(open_image(input_path), SAFE_ZONE_PX, SAFE_ZONE_PX)
    gray = artwork.convert('L')
    mono = Image.merge('RGBA', (gray, gray, gray, artwork.getchannel('A')))
    return save_png(_safe_zone_canvas(mono, target_size), output_path)


def apply_rounded_corners(image: Image.Image, size: int) -> Image.Image:
    """Resize to ``size`` and clip to Apple's rounded-square shape (~22.37% radius)."""
    rounded = image.convert('RGBA').resize((size, size), Image.Resampling.LANCZOS)
    mask = Image.new('L', (size, size), 0)
    ImageDraw.Draw(mask).rounded_rectangle(
        (0, 0, size - 1, size - 1), radius=round_half_up(size * CORNER_RADIUS_RATIO), fill=255)
    rounded.putalpha(ImageChops.multiply(rounded.getchannel('A'), mask))
    return rounded
