import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .colors import round_half_up
from .errors import FormatError, NotFoundError
from .image import contain
from .manifest import Layer


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Where a scaled layer lands on the canvas.

    ``crop`` is the visible box inside the scaled image (left, top, right,
    bottom), or None when the layer fits entirely on the canvas.
    """

    width: int
    height: int
    left: int
    top: int
    crop: Optional[Tuple[int, int, int, int]] = None


@dataclass(frozen=True)
class PreparedLayer:
    image: Image.Image
    left: int
    top: int


def place_layer(width: int, height: int, scale: float, translation: Tuple[float, float],
                canvas: int) -> Optional[Placement]:
    """Center a ``width`` x ``height`` image scaled by ``scale`` and shift it by ``translation``.

    Positive translation moves right and down. Returns None when nothing of the
    layer remains visible.
    """
    scaled_width = round_half_up(width * scale)
    scaled_height = round_half_up(height * scale)
    if scaled_width <= 0 or scaled_height <= 0:
        return None

    dx, dy = translation
    left = round_half_up((canvas - scaled_width) / 2 + dx)
    top = round_half_up((canvas - scaled_height) / 2 + dy)

    if left >= 0 and top >= 0 and left + scaled_width <= canvas and top + scaled_height <= canvas:
        return Placement(scaled_width, scaled_height, left, top)

    crop_left = max(0, -left)
    crop_top = max(0, -top)
    crop_right = min(scaled_width, canvas - left)
    crop_bottom = min(scaled_height, canvas - top)
    if crop_right - crop_left <= 0 or crop_bottom - crop_top <= 0:
        return None

    return Placement(scaled_width, scaled_height, max(0, left), max(0, top),
                     (crop_left, crop_top, crop_right, crop_bottom))


def prepare_layer(assets_dir: Path, layer: Layer, canvas: int) -> Optional[PreparedLayer]:
    image_path = Path(assets_dir) / layer.image_name
    if not image_path.is_file():
        raise NotFoundError(f'Layer image not found: {image_path}')

    try:
        source = Image.open(image_path)
        source.load()
    except (UnidentifiedImageError, OSError) as e:
        raise FormatError(f'Cannot read dimensions of layer: {layer.image_name}') from e

    placement = place_layer(source.width, source.height, layer.scale, layer.translation, canvas)
    if placement is None:
        log.debug('Layer %s is entirely off-canvas, skipping', layer.image_name)
        return None

    resized = contain(source, placement.width, placement.height)
    if placement.crop is not None:
        resized = resized.crop(placement.crop)
    log.debug('Layer %s placed at %d,%d (%dx%d)', layer.image_name, placement.left,
              placement.top, resized.width, resized.height)
    return PreparedLayer(resized, placement.left, placement.top)


def prepare_layers(assets_dir: Path, layers: Iterable[Layer], canvas: int) -> List[PreparedLayer]:
    """Load and position ``layers`` in order, dropping the ones that end up off-canvas."""
    prepared = []
    for layer in layers:
        item = prepare_layer(assets_dir, layer, canvas)
        if item is not None:
            prepared.append(item)
    return prepared


def composite(background: Image.Image, layers: Iterable[PreparedLayer]) -> Image.Image:
    """Draw ``layers`` over a copy of ``background``; later layers end up on top."""
    canvas = background.convert('RGBA')
    for layer in layers:
        canvas.alpha_composite(layer.image, dest=(layer.left, layer.top))
    return canvas
