import math
import re
from typing import NamedTuple, Tuple

from .errors import FormatError


COLOR_PATTERN = re.compile(r'^[\w-]+:([\d.]+),([\d.]+),([\d.]+),([\d.]+)$')
HEX_DIGITS = re.compile(r'^[0-9a-fA-F]+$')


class RGBA(NamedTuple):
    r: int
    g: int
    b: int
    a: float


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; pixel math rounds .5 up.
    return int(math.floor(value + 0.5))


def parse_color(color: str) -> RGBA:
    """Parse an icon.json color such as ``display-p3:0.5,0.5,0.5,1`` to 8-bit RGB + alpha.

    The color space tag is accepted but not converted: display-p3 values are
    used as if they were sRGB.
    """
    match = COLOR_PATTERN.match(color) if isinstance(color, str) else None
    if not match:
        raise FormatError(f'Unsupported color format: {color}')
    try:
        r, g, b, a = (float(part) for part in match.groups())
    except ValueError:
        raise FormatError(f'Unsupported color format: {color}') from None
    return RGBA(round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255), a)


def color_to_hex(r: int, g: int, b: int) -> str:
    return '#' + ''.join(f'{c:02X}' for c in (r, g, b))


def parse_hex_color(hex_color: str) -> Tuple[int, int, int]:
    cleaned = re.sub(r'^#', '', hex_color)
    if len(cleaned) == 3:
        cleaned = ''.join(c * 2 for c in cleaned)
    elif len(cleaned) != 6:
        raise FormatError(f'Invalid hex color: {hex_color}. Use #RGB or #RRGGBB format.')
    if not HEX_DIGITS.match(cleaned):
        raise FormatError(f'Invalid hex color: {hex_color}. Contains non-hex characters.')
    return int(cleaned[0:2], 16), int(cleaned[2:4], 16), int(cleaned[4:6], 16)


def hex_to_color_string(hex_color: str, space: str = 'srgb') -> str:
    """Convert ``#RRGGBB`` / ``#RGB`` to the icon.json format, e.g. ``srgb:0.03529,0.08235,0.20000,1.00000``."""
    r, g, b = parse_hex_color(hex_color)
    return f'{space}:{r / 255:.5f},{g / 255:.5f},{b / 255:.5f},1.00000'
