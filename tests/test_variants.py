"""
test_variants.py
"""
import numpy as np
import pytest

from escapetime import FractalVariant, VariantKind, burning_ship, julia, mandelbrot


def test_mandelbrot_starts_at_origin_and_adds_point():
    re = np.array([0.5, -1.25])
    im = np.array([0.25, 2.0])
    z_re, z_im, c_re, c_im = mandelbrot().initial_state(re, im)
    np.testing.assert_array_equal(z_re, [0.0, 0.0])
    np.testing.assert_array_equal(z_im, [0.0, 0.0])
    np.testing.assert_array_equal(c_re, re.astype(np.float32))
    np.testing.assert_array_equal(c_im, im.astype(np.float32))
    assert c_re.dtype == np.float32


def test_julia_starts_at_point_and_adds_constant():
    re = np.array([0.5, -1.25])
    im = np.array([0.25, 2.0])
    z_re, z_im, c_re, c_im = julia(complex(-0.7, 0.27015)).initial_state(re, im)
    np.testing.assert_array_equal(z_re, re.astype(np.float32))
    np.testing.assert_array_equal(z_im, im.astype(np.float32))
    np.testing.assert_array_equal(c_re, np.float32(-0.7))
    np.testing.assert_array_equal(c_im, np.float32(0.27015))


def test_hooks():
    assert burning_ship().folds and burning_ship().flips_imaginary
    assert not mandelbrot().folds and not mandelbrot().flips_imaginary
    assert not julia(1j).folds and not julia(1j).flips_imaginary


def test_julia_requires_constant():
    with pytest.raises(ValueError):
        FractalVariant(VariantKind.JULIA)


def test_mandelbrot_rejects_constant():
    with pytest.raises(ValueError):
        FractalVariant(VariantKind.MANDELBROT, 1j)


def test_str():
    assert str(mandelbrot()) == 'mandelbrot'
    assert str(julia(complex(-0.7, 0.27015))) == 'julia(-0.7+0.27015i)'
