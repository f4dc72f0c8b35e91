"""
test_coloring.py
"""
import math

import numpy as np
import pytest

from escapetime import EscapeField, EscapeResult, colorize, smooth_color

MAX_ITER = 1000


def _reference_color(iterations, final_magnitude_sq):
    """
    Plain float64 rendition of the sine palette, used as an oracle.
    """
    smooth = math.log(math.log(math.sqrt(final_magnitude_sq))) / math.log(2)
    t = (iterations + smooth) * 0.05
    brightness = 1 - math.exp(-0.1 * iterations)
    return tuple(
        (0.5 + 0.5 * math.sin(t + phase)) * brightness * 255
        for phase in (0.0, 2 * math.pi / 3, 4 * math.pi / 3)
    )


def test_inside_points_are_black():
    assert smooth_color(EscapeResult(MAX_ITER, np.float32(3.0)), MAX_ITER) == (0, 0, 0)
    assert smooth_color(EscapeResult(MAX_ITER, np.float32(1e6)), MAX_ITER) == (0, 0, 0)


@pytest.mark.parametrize('iterations, final_magnitude_sq', [
    (1, 18.0),
    (3, 25.0),
    (17, 120.5),
    (250, 16.0),
    (999, 4096.0),
])
def test_matches_reference_palette(iterations, final_magnitude_sq):
    color = smooth_color(EscapeResult(iterations, np.float32(final_magnitude_sq)), MAX_ITER)
    expected = _reference_color(iterations, final_magnitude_sq)
    for channel, reference in zip(color, expected):
        assert 0 <= channel <= 255
        assert abs(channel - reference) < 1.01


def test_quick_escapes_are_dim():
    fast = smooth_color(EscapeResult(1, np.float32(100.0)), MAX_ITER)
    assert max(fast) < 0.1 * 255


def test_adjacent_iterations_change_smoothly():
    """
    One extra iteration at the same magnitude never jumps a channel by 40 or more.
    """
    iterations = np.arange(0, MAX_ITER, dtype=np.int32)
    magnitudes = np.full(iterations.shape, 100.0, dtype=np.float32)
    colors = colorize(EscapeField(iterations, magnitudes), MAX_ITER).astype(np.int32)
    deltas = np.abs(np.diff(colors, axis=0))
    assert deltas.max() < 40


def test_colorize_shape_and_dtype():
    field = EscapeField(
        iterations=np.array([[5, MAX_ITER], [12, 40]], dtype=np.int32),
        final_magnitude_sq=np.array([[20.0, 2.0], [300.0, 17.0]], dtype=np.float32),
    )
    rgb = colorize(field, MAX_ITER)
    assert rgb.shape == (2, 2, 3)
    assert rgb.dtype == np.uint8
    np.testing.assert_array_equal(rgb[0, 1], [0, 0, 0])
    assert tuple(rgb[1, 0]) == smooth_color(field.at(1, 0), MAX_ITER)


def test_color_does_not_depend_on_batching():
    """
    Coloring results in small slices gives exactly the colors of one full batch.
    """
    rng = np.random.default_rng(4099)
    field = EscapeField(
        iterations=rng.integers(0, MAX_ITER + 1, size=4099).astype(np.int32),
        final_magnitude_sq=rng.uniform(16.0, 1e4, size=4099).astype(np.float32),
    )
    whole = colorize(field, MAX_ITER)
    sliced = np.concatenate([
        colorize(EscapeField(field.iterations[start:start + 7], field.final_magnitude_sq[start:start + 7]), MAX_ITER)
        for start in range(0, 4099, 7)
    ])
    np.testing.assert_array_equal(sliced, whole)
