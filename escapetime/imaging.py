"""Binary PPM output for rendered pixel buffers."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import PIL.Image

MAX_CHANNEL_VALUE = 255


def ppm_header(width: int, height: int) -> bytes:
    """Header that starts every file written by :func:`write_ppm`."""

    return b"P6\n%d %d\n%d\n" % (width, height, MAX_CHANNEL_VALUE)


def write_ppm(buffer: np.ndarray, output_path: Union[str, Path]) -> Path:
    """Write ``buffer`` (``uint8``, shape ``(height, width, 3)``) as a binary PPM.

    The file holds :func:`ppm_header` followed by the raw RGB bytes, top row
    first. An ``OSError`` is raised when the destination cannot be opened.
    """

    if buffer.dtype != np.uint8 or buffer.ndim != 3 or buffer.shape[2] != 3:
        raise ValueError(f"Expected a uint8 (height, width, 3) buffer, got {buffer.dtype} {buffer.shape}.")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image = PIL.Image.fromarray(np.ascontiguousarray(buffer))
    image.save(str(output_path), format="PPM")
    return output_path
