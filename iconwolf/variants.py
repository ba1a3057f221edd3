"""Output variants generated from a square source PNG."""
from concurrent.futures import ThreadPoolExecutor
from typing import List

from .image import (
    ADAPTIVE_ICON_SIZE,
    apply_rounded_corners,
    contain,
    create_adaptive_foreground,
    create_monochrome_icon,
    create_solid_background,
    open_image,
    resize_image,
    save_png,
)
from .paths import OUTPUT_FILES, resolve_output_path
from .types import GenerationResult


ICON_SIZE = 1024
FAVICON_SIZE = 48
SPLASH_SIZE = 1024


def generate_standard_icon(input_path, output_dir) -> GenerationResult:
    output_path = resolve_output_path(output_dir, OUTPUT_FILES['icon'])
    return resize_image(input_path, ICON_SIZE, ICON_SIZE, output_path)


def generate_favicon(input_path, output_dir) -> GenerationResult:
    output_path = resolve_output_path(output_dir, OUTPUT_FILES['favicon'])
    resized = contain(open_image(input_path), FAVICON_SIZE, FAVICON_SIZE)
    return save_png(apply_rounded_corners(resized, FAVICON_SIZE), output_path)


def generate_splash_icon(input_path, output_dir) -> GenerationResult:
    output_path = resolve_output_path(output_dir, OUTPUT_FILES['splash_icon'])
    return resize_image(input_path, SPLASH_SIZE, SPLASH_SIZE, output_path)


def generate_android_icons(input_path, output_dir, bg_color: str,
                           include_background: bool = False) -> List[GenerationResult]:
    """Adaptive icon foreground, plus background and monochrome layers when requested.

    The three layers only read the source, so they are rendered concurrently.
    """
    foreground_path = resolve_output_path(output_dir, OUTPUT_FILES['android_foreground'])
    if not include_background:
        return [create_adaptive_foreground(input_path, ADAPTIVE_ICON_SIZE, foreground_path)]

    with ThreadPoolExecutor(max_workers=3) as pool:
        futures = [
            pool.submit(create_adaptive_foreground, input_path, ADAPTIVE_ICON_SIZE, foreground_path),
            pool.submit(create_solid_background, bg_color, ADAPTIVE_ICON_SIZE,
                        resolve_output_path(output_dir, OUTPUT_FILES['android_background'])),
            pool.submit(create_monochrome_icon, input_path, ADAPTIVE_ICON_SIZE,
                        resolve_output_path(output_dir, OUTPUT_FILES['android_monochrome'])),
        ]
        return [future.result() for future in futures]
