import json

import pytest
from PIL import Image

from conftest import make_bundle, write_png
from iconwolf import generator
from iconwolf.banner import BannerOptions
from iconwolf.errors import NotFoundError, ValidationError
from iconwolf.generator import GeneratorOptions, generate
from iconwolf.types import VariantFlags


ALL_FILES = {
    'icon.png',
    'adaptive-icon.png',
    'favicon.png',
    'splash-icon.png',
}


def _names(results):
    return {r.file_path.name for r in results}


def test_generates_all_variants_without_flags(tmp_path, square_png):
    out = tmp_path / 'out'
    results = generate(GeneratorOptions(str(square_png), str(out)))
    assert _names(results) == ALL_FILES
    for name in ALL_FILES:
        assert (out / name).is_file()


def test_android_flag_adds_background_and_monochrome(tmp_path, square_png):
    results = generate(GeneratorOptions(str(square_png), str(tmp_path), VariantFlags(android=True)))
    assert _names(results) == {'adaptive-icon.png', 'android-icon-background.png', 'monochrome-icon.png'}


def test_single_flags(tmp_path, square_png):
    assert _names(generate(GeneratorOptions(str(square_png), str(tmp_path / 'a'), VariantFlags(icon=True)))) == {'icon.png'}
    assert _names(generate(GeneratorOptions(str(square_png), str(tmp_path / 'b'), VariantFlags(favicon=True)))) == {'favicon.png'}
    assert _names(generate(GeneratorOptions(str(square_png), str(tmp_path / 'c'), VariantFlags(splash=True)))) == {'splash-icon.png'}


def test_missing_source(tmp_path):
    with pytest.raises(NotFoundError, match='Source not found'):
        generate(GeneratorOptions(str(tmp_path / 'nope.png'), str(tmp_path)))


def test_missing_splash_source(tmp_path, square_png):
    options = GeneratorOptions(str(square_png), str(tmp_path), splash_input_path=str(tmp_path / 'nope.png'))
    with pytest.raises(NotFoundError, match='Splash source not found'):
        generate(options)


def test_rejects_non_square_source(tmp_path):
    source = write_png(tmp_path / 'wide.png', 200, 100)
    with pytest.raises(ValidationError):
        generate(GeneratorOptions(str(source), str(tmp_path / 'out')))
    assert not (tmp_path / 'out').exists()


def test_bundle_input_uses_extracted_color_and_cleans_up(tmp_path, monkeypatch):
    read_results = []
    real_read = generator.read_bundle

    def spy(path):
        result = real_read(path)
        read_results.append(result)
        return result

    monkeypatch.setattr(generator, 'read_bundle', spy)
    folder = make_bundle(tmp_path, fill={'solid': 'srgb:1,0,0,1'})
    out = tmp_path / 'out'
    generate(GeneratorOptions(str(folder), str(out), VariantFlags(android=True, splash=True)))

    with Image.open(out / 'android-icon-background.png') as img:
        assert img.convert('RGBA').getpixel((0, 0)) == (255, 0, 0, 255)
    # Splash comes from the foreground-only render, so its corners stay transparent.
    with Image.open(out / 'splash-icon.png') as img:
        assert img.convert('RGBA').getpixel((0, 0))[3] == 0
    assert len(read_results) == 1
    assert not read_results[0].cleanup_dir.exists()


def test_explicit_bg_color_beats_bundle_fill(tmp_path):
    folder = make_bundle(tmp_path, fill={'solid': 'srgb:1,0,0,1'})
    generate(GeneratorOptions(str(folder), str(tmp_path / 'out'), VariantFlags(android=True), bg_color='#00FF00'))
    with Image.open(tmp_path / 'out' / 'android-icon-background.png') as img:
        assert img.convert('RGBA').getpixel((0, 0)) == (0, 255, 0, 255)


def test_temp_dirs_removed_on_failure(tmp_path, monkeypatch):
    read_results = []
    real_read = generator.read_bundle

    def spy(path):
        result = real_read(path)
        read_results.append(result)
        return result

    def fail(*args, **kwargs):
        raise OSError('disk full')

    monkeypatch.setattr(generator, 'read_bundle', spy)
    monkeypatch.setattr(generator, 'generate_standard_icon', fail)
    with pytest.raises(OSError):
        generate(GeneratorOptions(str(make_bundle(tmp_path)), str(tmp_path / 'out')))
    assert not read_results[0].cleanup_dir.exists()


def test_separate_splash_input(tmp_path, square_png):
    splash = write_png(tmp_path / 'splash.png', 512, 512, (0, 0, 255, 255))
    out = tmp_path / 'out'
    generate(GeneratorOptions(str(square_png), str(out), VariantFlags(splash=True), splash_input_path=str(splash)))
    with Image.open(out / 'splash-icon.png') as img:
        assert img.convert('RGBA').getpixel((512, 512)) == (0, 0, 255, 255)


def test_banner_skips_favicon_and_android_layers(tmp_path, square_png):
    plain = tmp_path / 'plain'
    bannered = tmp_path / 'bannered'
    flags = VariantFlags(icon=True, favicon=True, android=True)
    generate(GeneratorOptions(str(square_png), str(plain), flags))
    generate(GeneratorOptions(str(square_png), str(bannered), flags, banner=BannerOptions('DEV')))

    assert (plain / 'icon.png').read_bytes() != (bannered / 'icon.png').read_bytes()
    assert (plain / 'adaptive-icon.png').read_bytes() != (bannered / 'adaptive-icon.png').read_bytes()
    for name in ('favicon.png', 'android-icon-background.png', 'monochrome-icon.png'):
        assert (plain / name).read_bytes() == (bannered / name).read_bytes()


def test_icon_output_writes_bundle(tmp_path, square_png):
    out = tmp_path / 'AppIcon.icon'
    results = generate(GeneratorOptions(str(square_png), str(out), bg_color='#091533', dark_bg_color='#000000',
                                        banner=BannerOptions('BETA')))
    assert len(results) == 1
    assert results[0].file_path == out
    manifest = json.loads((out / 'icon.json').read_text(encoding='utf-8'))
    assert manifest['fill-specializations'][0]['value']['solid'] == 'srgb:0.03529,0.08235,0.20000,1.00000'
    assert [layer['name'] for layer in manifest['groups'][0]['layers']] == ['foreground', 'banner']
