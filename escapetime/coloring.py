"""Continuous (band-free) coloring of escape results."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
import tensorflow as tf

from .escape import BAILOUT_SQ, EscapeField, EscapeResult

PALETTE_FREQUENCY = 0.05
BRIGHTNESS_DECAY = 0.1
PHASES = (0.0, 2.0 * math.pi / 3.0, 4.0 * math.pi / 3.0)


@tf.function
def _smooth_rgb(ns: tf.Tensor, mag_sq: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Map iteration counts and final ``|z|^2`` to ``uint8`` RGB."""

    max_iterations = tf.cast(max_iterations, ns.dtype)
    escaped = tf.less(ns, max_iterations)

    # Points still inside carry arbitrary magnitudes; keep the logs finite.
    mag_sq = tf.maximum(mag_sq, tf.cast(BAILOUT_SQ, mag_sq.dtype))
    log2 = tf.math.log(tf.constant(2.0, dtype=mag_sq.dtype))
    smooth = tf.math.log(tf.math.log(tf.sqrt(mag_sq))) / log2

    ns_float = tf.cast(ns, mag_sq.dtype)
    t = (ns_float + smooth) * PALETTE_FREQUENCY
    brightness = 1.0 - tf.exp(-BRIGHTNESS_DECAY * ns_float)

    channels = tf.stack([0.5 + 0.5 * tf.sin(t + phase) for phase in PHASES], axis=-1)
    values = channels * brightness[..., tf.newaxis] * 255.0
    values = tf.where(escaped[..., tf.newaxis], values, tf.zeros_like(values))
    return tf.cast(values, tf.uint8)


def colorize(field: EscapeField, max_iter: int, *, device: Optional[str] = None) -> np.ndarray:
    """Color a grid of escape results into a ``uint8`` array of shape ``(..., 3)``."""

    max_iterations = tf.constant(max_iter, dtype=tf.int32)
    with tf.device(device if device is not None else "/CPU:0"):
        rgb = _smooth_rgb(
            tf.convert_to_tensor(field.iterations, dtype=tf.int32),
            tf.convert_to_tensor(field.final_magnitude_sq, dtype=tf.float32),
            max_iterations,
        )
    return rgb.numpy()


def smooth_color(result: EscapeResult, max_iter: int) -> tuple[int, int, int]:
    """Color a single escape result; points inside the set are black."""

    field = EscapeField(
        iterations=np.array([result.iterations], dtype=np.int32),
        final_magnitude_sq=np.array([result.final_magnitude_sq], dtype=np.float32),
    )
    r, g, b = colorize(field, max_iter)[0]
    return int(r), int(g), int(b)
