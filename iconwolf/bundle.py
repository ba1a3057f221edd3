"""Read and write Apple Icon Composer ``.icon`` bundles.

A bundle is a directory ending in ``.icon`` that holds an ``icon.json``
manifest and an ``Assets/`` folder with the layer images.
"""
import json
import logging
import os
import shutil
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image, ImageColor

from .banner import BannerOptions, render_banner, resolve_color
from .colors import hex_to_color_string
from .compositor import composite, prepare_layers
from .errors import FormatError, NotFoundError
from .fill import CANVAS_SIZE, render_fill
from .image import TRANSPARENT
from .manifest import FillSpecialization, Group, Layer, Manifest, SolidFill
from .types import GenerationResult


log = logging.getLogger(__name__)

BUNDLE_EXTENSION = '.icon'
MANIFEST_NAME = 'icon.json'
ASSETS_DIR = 'Assets'
COMPOSED_NAME = 'composed-icon.png'
FOREGROUND_NAME = 'foreground-icon.png'


@dataclass(frozen=True)
class BundleResult:
    composed_image_path: Path
    foreground_image_path: Path
    extracted_bg_color: str

    @property
    def cleanup_dir(self) -> Path:
        """Temp directory holding both images; the caller removes it."""
        return self.composed_image_path.parent


def is_bundle(path) -> bool:
    if not str(path).endswith(BUNDLE_EXTENSION):
        return False
    try:
        path = Path(path)
        return path.is_dir() and (path / MANIFEST_NAME).is_file()
    except OSError:
        return False


def load_manifest(bundle_path) -> Manifest:
    manifest_path = Path(bundle_path) / MANIFEST_NAME
    if not manifest_path.is_file():
        raise NotFoundError(f'{MANIFEST_NAME} not found in {bundle_path}')
    try:
        with manifest_path.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise FormatError(f'Invalid {MANIFEST_NAME} in {bundle_path}: {e}') from e
    return Manifest.from_dict(data)


def read_bundle(bundle_path) -> BundleResult:
    """Flatten a bundle into a composed 1024x1024 PNG plus a foreground-only PNG.

    The foreground image has a transparent background so gradients do not
    bleed into splash icons. Both files live in a fresh temp directory that the
    caller owns (see ``BundleResult.cleanup_dir``).
    """
    bundle_path = Path(bundle_path)
    manifest = load_manifest(bundle_path)

    background, bg_color = render_fill(manifest.resolve_fill(), CANVAS_SIZE)
    layers = prepare_layers(bundle_path / ASSETS_DIR, manifest.layers(), CANVAS_SIZE)
    transparent = Image.new('RGBA', (CANVAS_SIZE, CANVAS_SIZE), TRANSPARENT)

    tmp_dir = Path(tempfile.mkdtemp(prefix='iconwolf-compose-'))
    composed_path = tmp_dir / COMPOSED_NAME
    foreground_path = tmp_dir / FOREGROUND_NAME

    def render(base: Image.Image, out: Path) -> None:
        composite(base, layers).save(out, format='PNG')

    try:
        with ThreadPoolExecutor(max_workers=2) as pool:
            passes = [
                pool.submit(render, background, composed_path),
                pool.submit(render, transparent, foreground_path),
            ]
            for future in passes:
                future.result()
    except Exception:
        shutil.rmtree(tmp_dir, ignore_errors=True)
        raise

    log.info('Rendered %s (%d layers, background %s)', bundle_path.name, len(layers), bg_color)
    return BundleResult(composed_path, foreground_path, bg_color)


def write_bundle(source_path, output_path, bg_color: str, dark_bg_color: Optional[str] = None,
                 banner: Optional[BannerOptions] = None) -> GenerationResult:
    """Create a ``.icon`` bundle around ``source_path`` (a square PNG, copied as-is).

    With ``dark_bg_color`` the manifest carries light and dark
    ``fill-specializations`` instead of a single ``fill``. A banner becomes a
    second layer drawn above the foreground.

    The bundle is assembled in a sibling ``<name>.tmp`` directory and moved
    into place at the end, so a failure leaves no partial bundle behind.
    """
    light = SolidFill(hex_to_color_string(bg_color))
    dark = SolidFill(hex_to_color_string(dark_bg_color)) if dark_bg_color else None
    banner_color = None
    if banner is not None:
        banner_color = resolve_color(banner.text, banner.color)
        try:
            ImageColor.getcolor(banner_color, 'RGBA')
        except ValueError as e:
            raise FormatError(f'Invalid banner color: {banner_color}') from e

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    staging = output_path.with_name(output_path.name + '.tmp')
    shutil.rmtree(staging, ignore_errors=True)

    try:
        assets_dir = staging / ASSETS_DIR
        assets_dir.mkdir(parents=True)
        shutil.copyfile(source_path, assets_dir / 'foreground.png')
        layers = [Layer('foreground.png', 'foreground')]

        if banner is not None:
            render_banner(CANVAS_SIZE, banner.text, banner_color, banner.position).save(
                assets_dir / 'banner.png', format='PNG')
            layers.append(Layer('banner.png', 'banner'))

        if dark is not None:
            manifest = Manifest(
                fill_specializations=(
                    FillSpecialization(light),
                    FillSpecialization(dark, appearance='dark'),
                ),
                groups=(Group(tuple(layers)),),
                supported_platforms={'squares': 'shared'},
            )
        else:
            manifest = Manifest(fill=light, groups=(Group(tuple(layers)),),
                                supported_platforms={'squares': 'shared'})

        with (staging / MANIFEST_NAME).open('w', encoding='utf-8') as f:
            json.dump(manifest.to_dict(), f, indent=2)
            f.write('\n')

        if output_path.exists():
            shutil.rmtree(output_path)
        os.replace(staging, output_path)
    except Exception:
        shutil.rmtree(staging, ignore_errors=True)
        raise

    log.info('Wrote %s', output_path)
    size = sum(p.stat().st_size for p in (output_path / ASSETS_DIR).iterdir())
    return GenerationResult(
        file_path=output_path,
        width=CANVAS_SIZE,
        height=CANVAS_SIZE,
        size=size + (output_path / MANIFEST_NAME).stat().st_size,
    )
