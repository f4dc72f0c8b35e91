"""Escape-time iteration kernel shared by every fractal variant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import tensorflow as tf

from .variants import FractalVariant

# Squared bailout radius (radius 4).
BAILOUT_SQ = 16.0


@dataclass(frozen=True)
class EscapeResult:
    """Outcome of iterating a single point.

    ``final_magnitude_sq`` is ``|z|^2`` when iteration stopped and is only
    meaningful when ``iterations`` is below the iteration cap.
    """

    iterations: int
    final_magnitude_sq: np.float32


@dataclass(frozen=True)
class EscapeField:
    """Escape results for a whole grid of points."""

    iterations: np.ndarray
    final_magnitude_sq: np.ndarray

    @property
    def shape(self) -> tuple[int, ...]:
        return self.iterations.shape

    def at(self, *index: int) -> EscapeResult:
        return EscapeResult(
            iterations=int(self.iterations[index]),
            final_magnitude_sq=np.float32(self.final_magnitude_sq[index]),
        )


@tf.function
def _escape_step(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    ns: tf.Tensor,
    mag_sq: tf.Tensor,
    active: tf.Tensor,
    fold: bool,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Perform a single iteration for points that have not escaped."""

    if fold:
        ar, ai = tf.abs(zr), tf.abs(zi)
    else:
        ar, ai = zr, zi
    zr_new = ar * ar - ai * ai + cr
    zi_new = 2.0 * ar * ai + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    mag_sq = tf.where(active, zr * zr + zi * zi, mag_sq)
    ns = ns + tf.cast(active, tf.int32)
    bailout = tf.cast(BAILOUT_SQ, mag_sq.dtype)
    new_active = tf.logical_and(active, mag_sq < bailout)
    return zr, zi, ns, mag_sq, new_active


@tf.function
def _escape_run(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    max_iterations: tf.Tensor,
    fold: bool,
) -> tuple[tf.Tensor, ...]:
    """Iterate until every point escaped or the iteration cap is reached."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(zr, tf.int32)
    mag_sq = zr * zr + zi * zi
    active = tf.ones_like(ns, tf.bool)

    def cond(i, zr, zi, ns, mag_sq, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zr, zi, ns, mag_sq, active):
        zr, zi, ns, mag_sq, active = _escape_step(zr, zi, cr, ci, ns, mag_sq, active, fold)
        return i + 1, zr, zi, ns, mag_sq, active

    return tf.while_loop(cond, body, (i, zr, zi, ns, mag_sq, active))


def evaluate_escape(
    variant: FractalVariant,
    re: np.ndarray,
    im: np.ndarray,
    max_iter: int,
    *,
    device: Optional[str] = None,
) -> EscapeField:
    """Iterate every plane point in ``(re, im)`` under ``variant``.

    Coordinates arrive in float64 and are narrowed to float32 here, at the
    entry of the iteration loop.
    """

    if max_iter < 0:
        raise ValueError(f"max_iter must be non-negative, got {max_iter!r}.")

    z_re, z_im, c_re, c_im = variant.initial_state(re, im)
    max_iterations = tf.constant(max_iter, dtype=tf.int32)

    with tf.device(device if device is not None else "/CPU:0"):
        _, _, _, ns, mag_sq, _ = _escape_run(
            tf.convert_to_tensor(z_re, dtype=tf.float32),
            tf.convert_to_tensor(z_im, dtype=tf.float32),
            tf.convert_to_tensor(c_re, dtype=tf.float32),
            tf.convert_to_tensor(c_im, dtype=tf.float32),
            max_iterations,
            variant.folds,
        )

    return EscapeField(iterations=ns.numpy(), final_magnitude_sq=mag_sq.numpy())


def escape_point(
    variant: FractalVariant,
    point: Union[complex, tuple[float, float]],
    max_iter: int,
    *,
    device: Optional[str] = None,
) -> EscapeResult:
    """Iterate a single plane point; see :func:`evaluate_escape`."""

    if isinstance(point, tuple):
        re, im = point
    else:
        point = complex(point)
        re, im = point.real, point.imag
    field = evaluate_escape(
        variant,
        np.array([re], dtype=np.float64),
        np.array([im], dtype=np.float64),
        max_iter,
        device=device,
    )
    return field.at(0)
