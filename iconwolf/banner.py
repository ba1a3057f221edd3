"""Diagonal corner ribbons ("DEV", "BETA", ...) drawn over generated icons."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Optional
from xml.sax.saxutils import escape

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .colors import round_half_up
from .types import GenerationResult


log = logging.getLogger(__name__)

POSITIONS = ('top-left', 'top-right', 'bottom-left', 'bottom-right')

DEFAULT_COLORS = {
    'DEV': '#4CAF50',
    'BETA': '#FF9800',
    'STAGING': '#2196F3',
    'ALPHA': '#9C27B0',
}
FALLBACK_COLOR = '#F44336'

FONT_CANDIDATES = (
    'Arial Bold.ttf',
    'arialbd.ttf',
    '/System/Library/Fonts/Supplemental/Arial Bold.ttf',
    'DejaVuSans-Bold.ttf',
    'LiberationSans-Bold.ttf',
)

# Outputs where a ribbon would be illegible or meaningless.
SKIP_FILES = {'favicon.png', 'android-icon-background.png', 'monochrome-icon.png'}


@dataclass(frozen=True)
class BannerOptions:
    text: str
    color: Optional[str] = None
    position: str = 'top-left'

    def __post_init__(self):
        if self.position not in POSITIONS:
            raise ValueError(f'Invalid banner position: {self.position}. Use one of: {", ".join(POSITIONS)}')


class RibbonGeometry(NamedTuple):
    cx: float
    cy: float
    angle: int  # degrees, clockwise positive as in SVG
    width: int
    height: int
    font_size: int


def resolve_color(text: str, color: Optional[str] = None) -> str:
    if color:
        return color
    return DEFAULT_COLORS.get(text.upper(), FALLBACK_COLOR)


def ribbon_geometry(size: int, position: str) -> RibbonGeometry:
    width = round_half_up(size * 0.42)
    height = round_half_up(size * 0.08)
    font_size = round_half_up(height * 0.6)
    near, far = size * 0.2, size * 0.8
    if position == 'top-left':
        return RibbonGeometry(near, near, -45, width, height, font_size)
    if position == 'top-right':
        return RibbonGeometry(far, near, 45, width, height, font_size)
    if position == 'bottom-left':
        return RibbonGeometry(near, far, 45, width, height, font_size)
    if position == 'bottom-right':
        return RibbonGeometry(far, far, -45, width, height, font_size)
    raise ValueError(f'Invalid banner position: {position}')


def _load_font(size: int) -> ImageFont.ImageFont:
    for candidate in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def render_banner(size: int, text: str, color: str, position: str) -> Image.Image:
    """Return a transparent ``size`` x ``size`` image holding only the ribbon."""
    geometry = ribbon_geometry(size, position)
    ribbon = Image.new('RGBA', (geometry.width, geometry.height), ImageColor.getcolor(color, 'RGBA'))
    draw = ImageDraw.Draw(ribbon)
    font = _load_font(max(1, geometry.font_size))
    draw.text((geometry.width / 2, geometry.height / 2), text, fill=(255, 255, 255, 255),
              font=font, anchor='mm')

    # PIL rotates counter-clockwise, SVG clockwise.
    rotated = ribbon.rotate(-geometry.angle, resample=Image.Resampling.BICUBIC, expand=True)
    overlay = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    left = round(geometry.cx - rotated.width / 2)
    top = round(geometry.cy - rotated.height / 2)
    overlay.paste(rotated, (left, top), rotated)
    return overlay


def create_banner_svg(size: int, text: str, color: str, position: str) -> str:
    """The same ribbon as ``render_banner``, as standalone SVG markup."""
    geometry = ribbon_geometry(size, position)
    half = geometry.width / 2
    label = escape(text, {'"': '&quot;'})
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}">\n'
        f'  <g transform="translate({geometry.cx:g}, {geometry.cy:g}) rotate({geometry.angle})">\n'
        f'    <rect x="{-half:g}" y="{-geometry.height / 2:g}" width="{geometry.width}" '
        f'height="{geometry.height}" fill="{color}"/>\n'
        f'    <text x="0" y="0" text-anchor="middle" dominant-baseline="central"\n'
        f'      font-family="Arial, Helvetica, sans-serif" font-weight="bold"\n'
        f'      font-size="{geometry.font_size}" fill="white">{label}</text>\n'
        f'  </g>\n'
        f'</svg>'
    )


def apply_banner(result: GenerationResult, banner: BannerOptions) -> GenerationResult:
    """Overlay the ribbon onto ``result.file_path`` in place.

    The new image goes to a sibling temp file that replaces the original only
    once it is fully written.
    """
    color = resolve_color(banner.text, banner.color)
    path = Path(result.file_path)

    with Image.open(path) as source:
        base = source.convert('RGBA')
    overlay = render_banner(base.width, banner.text, color, banner.position)
    composed = Image.alpha_composite(base, overlay)

    tmp_path = path.with_name(path.name + '.tmp')
    try:
        composed.save(tmp_path, format='PNG')
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise

    result.size = path.stat().st_size
    log.debug('Applied %s banner to %s', banner.text, path)
    return result


def should_apply_banner(file_path) -> bool:
    return Path(file_path).name not in SKIP_FILES
