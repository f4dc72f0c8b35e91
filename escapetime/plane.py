"""Mapping between pixel coordinates and the complex plane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .variants import FractalVariant

PLANE_SPAN = 4.0


@dataclass(frozen=True)
class View:
    """Center and zoom of the visible region of the complex plane."""

    center_x: float
    center_y: float
    zoom: float = 1.0

    def __post_init__(self) -> None:
        if not self.zoom > 0:
            raise ValueError(f"zoom must be positive, got {self.zoom!r}.")

    def scale(self, width: int, height: int) -> np.float64:
        """Size of one pixel in plane units; the shorter side spans ``4 / zoom``."""

        return np.float64(PLANE_SPAN) / (np.float64(self.zoom) * np.float64(min(width, height)))


def pixel_to_plane(
    x: int,
    y: int,
    view: View,
    width: int,
    height: int,
    variant: FractalVariant,
) -> tuple[np.float64, np.float64]:
    """Map pixel ``(x, y)`` to a point of the complex plane in float64."""

    scale = view.scale(width, height)
    sign = np.float64(-1.0) if variant.flips_imaginary else np.float64(1.0)
    re = np.float64(view.center_x) + (np.float64(x) - np.float64(width) / 2.0) * scale
    im = np.float64(view.center_y) + sign * ((np.float64(y) - np.float64(height) / 2.0) * scale)
    return np.float64(re), np.float64(im)


def plane_grid(
    view: View,
    width: int,
    height: int,
    *,
    flip_imaginary: bool,
    row_start: int = 0,
    row_stop: Optional[int] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Return float64 ``(re, im)`` grids for rows ``[row_start, row_stop)``.

    Each entry equals :func:`pixel_to_plane` for the same pixel, so any band
    of rows maps exactly as it would inside a full-image grid.
    """

    if row_stop is None:
        row_stop = height
    scale = view.scale(width, height)
    sign = np.float64(-1.0) if flip_imaginary else np.float64(1.0)

    xs = np.arange(width, dtype=np.float64)
    ys = np.arange(row_start, row_stop, dtype=np.float64)
    re_axis = np.float64(view.center_x) + (xs - np.float64(width) / 2.0) * scale
    im_axis = np.float64(view.center_y) + sign * ((ys - np.float64(height) / 2.0) * scale)

    re, im = np.meshgrid(re_axis, im_axis)
    return re, im
