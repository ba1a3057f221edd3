from typing import List, Sequence, Tuple

from PIL import Image

from .colors import RGBA, color_to_hex, parse_color, round_half_up
from .manifest import Fill, GradientFill, SolidFill, UnitPoint


CANVAS_SIZE = 1024
WHITE = (255, 255, 255, 255)


def render_fill(fill: Fill, size: int = CANVAS_SIZE) -> Tuple[Image.Image, str]:
    """Return the background canvas for ``fill`` and its representative hex color.

    The representative color is what Android adaptive icons use as their
    background: the solid color, or the first gradient stop. Without a fill the
    canvas is opaque white.
    """
    if isinstance(fill, GradientFill):
        colors = [parse_color(stop) for stop in fill.stops]
        image = linear_gradient(colors, fill.start, fill.stop, size)
        first = colors[0]
        return image, color_to_hex(first.r, first.g, first.b)

    if isinstance(fill, SolidFill):
        color = parse_color(fill.color)
        image = Image.new('RGBA', (size, size), _rgba_tuple(color))
        return image, color_to_hex(color.r, color.g, color.b)

    return Image.new('RGBA', (size, size), WHITE), '#FFFFFF'


def _rgba_tuple(color: RGBA) -> Tuple[int, int, int, int]:
    return color.r, color.g, color.b, round_half_up(color.a * 255)


def _color_at(colors: Sequence[RGBA], t: float) -> Tuple[int, int, int, int]:
    # Stops sit at i / (n - 1); a single stop covers everything.
    if len(colors) == 1:
        return _rgba_tuple(colors[0])
    position = t * (len(colors) - 1)
    index = min(int(position), len(colors) - 2)
    local = position - index
    lo, hi = _rgba_tuple(colors[index]), _rgba_tuple(colors[index + 1])
    return tuple(round_half_up(a + (b - a) * local) for a, b in zip(lo, hi))


def linear_gradient(colors: Sequence[RGBA], start: UnitPoint, stop: UnitPoint,
                    size: int = CANVAS_SIZE) -> Image.Image:
    """Render a padded linear gradient running from ``start`` to ``stop``.

    Points are fractions of the canvas with 0,0 at the top-left. The position
    along the axis is quantized to 256 steps and mapped through a per-channel
    lookup table.
    """
    if not colors:
        return Image.new('RGBA', (size, size), WHITE)

    lut: List[Tuple[int, int, int, int]] = [_color_at(colors, i / 255) for i in range(256)]

    sx, sy = start.x * size, start.y * size
    dx, dy = (stop.x - start.x) * size, (stop.y - start.y) * size
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        # Zero-length vector paints the last stop.
        return Image.new('RGBA', (size, size), lut[255])

    # t(x, y) is linear, so split it into a per-column and a per-row term.
    column_terms = [(x + 0.5 - sx) * dx / length_sq * 255 for x in range(size)]
    data = bytearray()
    for y in range(size):
        row_term = (y + 0.5 - sy) * dy / length_sq * 255
        data.extend(min(255, max(0, int(c + row_term + 0.5))) for c in column_terms)

    index = Image.frombytes('L', (size, size), bytes(data))
    bands = [index.point([entry[channel] for entry in lut]) for channel in range(4)]
    return Image.merge('RGBA', bands)
