"""The fixed set of preset scenes rendered by the command line driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .plane import View
from .renderer import DEFAULT_HEIGHT, DEFAULT_MAX_ITER, DEFAULT_WIDTH, Scene
from .variants import FractalVariant, burning_ship, julia, mandelbrot


@dataclass(frozen=True)
class PresetScene:
    name: str
    variant: FractalVariant
    view: View

    def scene(self, width: int, height: int, max_iter: int) -> Scene:
        return Scene(self.variant, self.view, width=width, height=height, max_iter=max_iter)


PRESETS: tuple[PresetScene, ...] = (
    PresetScene("mandelbrot", mandelbrot(), View(-0.5, 0.0, 1.0)),
    PresetScene("seahorse_valley", mandelbrot(), View(-0.745, 0.1, 40.0)),
    PresetScene("elephant_valley", mandelbrot(), View(0.285, 0.01, 30.0)),
    PresetScene("julia", julia(complex(-0.7, 0.27015)), View(0.0, 0.0, 1.0)),
    PresetScene("julia_dendrite", julia(complex(0.0, 1.0)), View(0.0, 0.0, 1.0)),
    PresetScene("burning_ship", burning_ship(), View(-0.5, -0.5, 1.0)),
    # Iteration runs in float32, which cannot resolve neighbouring pixels at
    # this zoom; the image comes out blocky or flat.
    PresetScene("deep_zoom", mandelbrot(), View(-0.743643887037151, 0.131825904205330, 10000.0)),
)

PRESET_NAMES = tuple(preset.name for preset in PRESETS)


def preset_scenes(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    max_iter: int = DEFAULT_MAX_ITER,
    names: Optional[Iterable[str]] = None,
) -> list[tuple[str, Scene]]:
    """Build ``(name, Scene)`` pairs in preset order, optionally filtered by ``names``."""

    by_name = {preset.name: preset for preset in PRESETS}
    if names is None:
        selected = list(PRESETS)
    else:
        selected = []
        for name in names:
            if name not in by_name:
                raise KeyError(f"Unknown scene '{name}'. Valid choices: {', '.join(PRESET_NAMES)}.")
            if by_name[name] not in selected:
                selected.append(by_name[name])
    return [(preset.name, preset.scene(width, height, max_iter)) for preset in selected]
