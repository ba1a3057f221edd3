from pathlib import Path


DEFAULT_OUTPUT_DIR = './assets/images'
SRC_OUTPUT_DIR = './src/assets/images'

OUTPUT_FILES = {
    'icon': 'icon.png',
    'android_foreground': 'adaptive-icon.png',
    'android_background': 'android-icon-background.png',
    'android_monochrome': 'monochrome-icon.png',
    'favicon': 'favicon.png',
    'splash_icon': 'splash-icon.png',
}


def resolve_default_output_dir(cwd=None) -> str:
    """``./src/assets/images`` when the project has a ``src/`` directory (Expo layout), else ``./assets/images``."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    if (base / 'src').is_dir():
        return SRC_OUTPUT_DIR
    return DEFAULT_OUTPUT_DIR


def resolve_output_path(output_dir, file_name: str) -> Path:
    return Path(output_dir).resolve() / file_name
