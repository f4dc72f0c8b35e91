"""
test_presets.py
"""
import pytest

from escapetime import PRESET_NAMES, PRESETS, VariantKind, preset_scenes


def test_seven_presets_in_order():
    assert PRESET_NAMES == (
        'mandelbrot',
        'seahorse_valley',
        'elephant_valley',
        'julia',
        'julia_dendrite',
        'burning_ship',
        'deep_zoom',
    )
    kinds = {preset.variant.kind for preset in PRESETS}
    assert kinds == {VariantKind.MANDELBROT, VariantKind.JULIA, VariantKind.BURNING_SHIP}


def test_julia_preset_constant():
    julia_preset = dict((preset.name, preset) for preset in PRESETS)['julia']
    assert julia_preset.variant.constant == complex(-0.7, 0.27015)
    assert julia_preset.view.zoom == 1.0


def test_preset_scenes_carry_configuration():
    scenes = preset_scenes(64, 48, 250)
    assert [name for name, _ in scenes] == list(PRESET_NAMES)
    for _, scene in scenes:
        assert (scene.width, scene.height, scene.max_iter) == (64, 48, 250)


def test_preset_selection_keeps_requested_order_without_duplicates():
    scenes = preset_scenes(8, 8, 10, names=['julia', 'mandelbrot', 'julia'])
    assert [name for name, _ in scenes] == ['julia', 'mandelbrot']


def test_unknown_preset():
    with pytest.raises(KeyError):
        preset_scenes(8, 8, 10, names=['nope'])
