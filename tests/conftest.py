import json
from pathlib import Path

import pytest
from PIL import Image


GRADIENT_FILL = {
    'linear-gradient': [
        'display-p3:0.00000,0.67451,0.92941,1.00000',
        'display-p3:0.03529,0.08235,0.20000,1.00000',
    ],
    'orientation': {'start': {'x': 0.5, 'y': 0}, 'stop': {'x': 0.5, 'y': 0.7}},
}


def write_png(path: Path, width: int, height: int, color=(255, 107, 53, 255)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new('RGBA', (width, height), color).save(path, format='PNG')
    return path


def make_bundle(root: Path, fill=None, layers=None, manifest=None, name='TestIcon.icon') -> Path:
    """Write a .icon folder with a 200x200 white layer unless told otherwise."""
    bundle = root / name
    assets = bundle / 'Assets'
    assets.mkdir(parents=True, exist_ok=True)
    write_png(assets / 'layer.png', 200, 200, (255, 255, 255, 255))
    if manifest is None:
        if layers is None:
            layers = [{
                'image-name': 'layer.png',
                'name': 'layer',
                'position': {'scale': 1.0, 'translation-in-points': [0, 0]},
            }]
        manifest = {'fill': GRADIENT_FILL if fill is None else fill, 'groups': [{'layers': layers}]}
    (bundle / 'icon.json').write_text(json.dumps(manifest, indent=2), encoding='utf-8')
    return bundle


@pytest.fixture
def square_png(tmp_path):
    return write_png(tmp_path / 'source' / 'test-icon.png', 1024, 1024)
