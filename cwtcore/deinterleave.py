from __future__ import annotations
from typing import Any, Tuple

import numpy as np

from cwtcore.errors import InvalidLayout
from cwtcore.grid import as_grid, require_same_shape


def expected_buffer_size(signal_length: int, octaves: int, voices: int) -> int:
    """Number of floats the transform writes for one signal."""
    return 2 * int(voices) * int(octaves) * int(signal_length)


def deinterleave(buffer: Any, signal_length: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split the flat transform output into (real, imag) matrices.

    Layout: per row, `signal_length` (re, im) pairs back to back, so even
    positions are real parts and odd positions imaginary parts. Row i of
    each matrix is the slice [i*L, (i+1)*L) of the corresponding linear
    buffer. Returns float64 matrices of shape (rows, signal_length).
    """
    flat = np.asarray(buffer)
    if flat.ndim != 1:
        raise InvalidLayout("transform buffer must be flat", param="buffer.ndim", value=flat.ndim)

    L = int(signal_length)
    if L <= 0:
        raise InvalidLayout("signal length must be positive", param="signal_length", value=signal_length)
    if flat.size % (2 * L) != 0:
        raise InvalidLayout(
            f"buffer of {flat.size} values is not a whole number of rows of {L} complex samples",
            param="buffer.size",
            value=flat.size,
        )

    flat = flat.astype(np.float64)
    rows = flat.size // (2 * L)

    real_1d = flat[0::2]
    imag_1d = flat[1::2]
    # copies so the matrices own their memory and do not pin the raw buffer
    real = np.ascontiguousarray(real_1d.reshape(rows, L))
    imag = np.ascontiguousarray(imag_1d.reshape(rows, L))
    return real, imag


def interleave(real: Any, imag: Any) -> np.ndarray:
    """Inverse of `deinterleave`: pack two matrices into one flat buffer."""
    re = as_grid(real, "real")
    im = as_grid(imag, "imag")
    require_same_shape(re, im)

    out = np.empty(re.size * 2, dtype=np.float64)
    out[0::2] = re.ravel()
    out[1::2] = im.ravel()
    return out
