"""Public API for escape-time fractal rendering."""

from .coloring import colorize, smooth_color
from .escape import BAILOUT_SQ, EscapeField, EscapeResult, escape_point, evaluate_escape
from .imaging import ppm_header, write_ppm
from .plane import View, pixel_to_plane, plane_grid
from .presets import PRESET_NAMES, PRESETS, PresetScene, preset_scenes
from .renderer import (
    DEFAULT_HEIGHT,
    DEFAULT_MAX_ITER,
    DEFAULT_WIDTH,
    Scene,
    allocate_buffer,
    render_scene,
)
from .variants import FractalVariant, VariantKind, burning_ship, julia, mandelbrot

__all__ = [
    "BAILOUT_SQ",
    "DEFAULT_HEIGHT",
    "DEFAULT_MAX_ITER",
    "DEFAULT_WIDTH",
    "EscapeField",
    "EscapeResult",
    "FractalVariant",
    "PRESETS",
    "PRESET_NAMES",
    "PresetScene",
    "Scene",
    "VariantKind",
    "View",
    "allocate_buffer",
    "burning_ship",
    "colorize",
    "escape_point",
    "evaluate_escape",
    "julia",
    "mandelbrot",
    "pixel_to_plane",
    "plane_grid",
    "ppm_header",
    "preset_scenes",
    "render_scene",
    "smooth_color",
    "write_ppm",
]
