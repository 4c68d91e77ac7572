from __future__ import annotations
from typing import Any, Sequence, Tuple

import numpy as np

from cwtcore.errors import DimensionMismatch


def as_grid(values: Any, name: str = "matrix") -> np.ndarray:
    """Coerce `values` into a rectangular 2D float64 array (rows x cols).

    Ragged nested sequences are rejected instead of padded.
    """
    if isinstance(values, np.ndarray):
        if values.ndim != 2:
            raise DimensionMismatch(f"{name} must be 2D", param=f"{name}.ndim", value=values.ndim)
        return values.astype(np.float64, copy=False)

    rows = list(values)
    if not rows:
        raise DimensionMismatch(f"{name} has no rows", param=f"{name}.rows", value=0)

    for i, row in enumerate(rows):
        if np.ndim(row) != 1:
            raise DimensionMismatch(f"{name} must be 2D; row {i} is not a 1D sequence",
                                    param=f"{name}[{i}]", value=row)

    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise DimensionMismatch(
                f"{name} row {i} has {len(row)} columns, expected {width}",
                param=f"{name}[{i}]",
                value=len(row),
            )
    return np.asarray(rows, dtype=np.float64).reshape(len(rows), width)


def as_axis(values: Any, name: str = "axis") -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionMismatch(f"{name} must be 1D", param=f"{name}.ndim", value=arr.ndim)
    return arr


def require_same_shape(a: np.ndarray, b: np.ndarray, names: Sequence[str] = ("real", "imag")) -> Tuple[int, int]:
    if a.shape != b.shape:
        raise DimensionMismatch(
            f"{names[0]} has shape {a.shape} but {names[1]} has shape {b.shape}",
            param=f"{names[1]}.shape",
            value=b.shape,
        )
    return a.shape


def frozen(arr: np.ndarray) -> np.ndarray:
    """Return `arr` with the writeable flag cleared (no copy)."""
    arr.flags.writeable = False
    return arr
