"""Fractal variant tags and their per-variant iteration hooks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np


class VariantKind(Enum):
    MANDELBROT = "mandelbrot"
    JULIA = "julia"
    BURNING_SHIP = "burning_ship"


@dataclass(frozen=True)
class FractalVariant:
    """Select the recurrence and how a mapped point seeds it.

    Mandelbrot and Burning Ship start at ``z = 0`` and add the mapped point;
    Julia starts at the mapped point and adds ``constant``. Burning Ship
    folds ``z`` onto the first quadrant before squaring and flips the
    imaginary axis of the plane mapping.
    """

    kind: VariantKind
    constant: Optional[complex] = None

    def __post_init__(self) -> None:
        if self.kind is VariantKind.JULIA:
            if self.constant is None:
                raise ValueError("Julia variants require a constant.")
            object.__setattr__(self, "constant", complex(self.constant))
        elif self.constant is not None:
            raise ValueError(f"{self.kind.value} variants do not take a constant.")

    @property
    def flips_imaginary(self) -> bool:
        return self.kind is VariantKind.BURNING_SHIP

    @property
    def folds(self) -> bool:
        return self.kind is VariantKind.BURNING_SHIP

    def initial_state(self, re: np.ndarray, im: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(z_re, z_im, c_re, c_im)`` in float32 for the mapped points."""

        re = np.asarray(re, dtype=np.float32)
        im = np.asarray(im, dtype=np.float32)
        if self.kind is VariantKind.JULIA:
            c_re = np.full_like(re, np.float32(self.constant.real))
            c_im = np.full_like(im, np.float32(self.constant.imag))
            return re, im, c_re, c_im
        return np.zeros_like(re), np.zeros_like(im), re, im

    def __str__(self) -> str:
        if self.kind is VariantKind.JULIA:
            return f"julia({self.constant.real:+g}{self.constant.imag:+g}i)"
        return self.kind.value


def mandelbrot() -> FractalVariant:
    return FractalVariant(VariantKind.MANDELBROT)


def julia(c: complex) -> FractalVariant:
    return FractalVariant(VariantKind.JULIA, complex(c))


def burning_ship() -> FractalVariant:
    return FractalVariant(VariantKind.BURNING_SHIP)
