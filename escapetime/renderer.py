"""Rendering primitives for escape-time fractal scenes."""

from __future__ import annotations

from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .coloring import colorize
from .escape import evaluate_escape
from .plane import View, plane_grid
from .variants import FractalVariant

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080
DEFAULT_MAX_ITER = 1000


@dataclass(frozen=True)
class Scene:
    """Everything needed to render a single image."""

    variant: FractalVariant
    view: View
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    max_iter: int = DEFAULT_MAX_ITER

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}.")
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be non-negative, got {self.max_iter!r}.")

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.height, self.width, 3)


def allocate_buffer(scene: Scene) -> np.ndarray:
    return np.zeros(scene.shape, dtype=np.uint8)


def _band_bounds(height: int, band_height: Optional[int]) -> list[tuple[int, int]]:
    if band_height is None or band_height >= height:
        return [(0, height)]
    if band_height < 1:
        raise ValueError(f"band_height must be positive, got {band_height!r}.")
    return [(start, min(start + band_height, height)) for start in range(0, height, band_height)]


def _render_band(scene: Scene, out: np.ndarray, row_start: int, row_stop: int, device: Optional[str]) -> None:
    re, im = plane_grid(
        scene.view,
        scene.width,
        scene.height,
        flip_imaginary=scene.variant.flips_imaginary,
        row_start=row_start,
        row_stop=row_stop,
    )
    field = evaluate_escape(scene.variant, re, im, scene.max_iter, device=device)
    out[row_start:row_stop] = colorize(field, scene.max_iter, device=device)


def render_scene(
    scene: Scene,
    *,
    device: Optional[str] = None,
    band_height: Optional[int] = None,
    max_workers: Optional[int] = None,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Render ``scene`` into a ``(height, width, 3)`` ``uint8`` pixel buffer.

    The image is split into horizontal bands of ``band_height`` rows (one
    band by default). Bands are independent and each writes only its own
    rows of the buffer, so they run concurrently without locking. The call
    returns once every band has finished; a failing band is re-raised and no
    buffer is returned.

    ``out`` may be a previously returned buffer of the same shape; it is
    overwritten completely.
    """

    if out is None:
        out = allocate_buffer(scene)
    elif out.shape != scene.shape or out.dtype != np.uint8:
        raise ValueError(
            f"Output buffer must be uint8 with shape {scene.shape}, got {out.dtype} {out.shape}."
        )

    bands = _band_bounds(scene.height, band_height)
    if len(bands) == 1:
        _render_band(scene, out, 0, scene.height, device)
        return out

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_render_band, scene, out, row_start, row_stop, device)
            for row_start, row_stop in bands
        ]
        wait(futures, return_when=ALL_COMPLETED)

    for future in futures:
        future.result()
    return out
