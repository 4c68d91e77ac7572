from __future__ import annotations
import math
from typing import Any, Tuple

import numpy as np

from cwtcore.errors import AxisLengthMismatch, InvalidWidth, InvertedWindow, OutOfRange
from cwtcore.grid import as_axis, as_grid
from cwtcore.search import ceil_search, floor_search


def _block_starts(cols: int, width: int) -> np.ndarray:
    """
    First column of each of `width` averaging blocks.

    Blocks are ceil(cols/width) wide; the last block takes whatever is left.
    Starts are pulled back where needed so that no block ends up empty.
    """
    if width <= 0:
        raise InvalidWidth("compressed width must be positive", param="width", value=width)
    if width > cols:
        raise InvalidWidth(f"compressed width cannot exceed the {cols} available columns",
                           param="width", value=width)

    block = int(math.ceil(cols / width))
    k = np.arange(width)
    return np.minimum(k * block, cols - (width - k))


def compress_matrix(matrix: Any, width: int) -> np.ndarray:
    """Average contiguous column blocks so the result has `width` columns."""
    data = as_grid(matrix)
    cols = data.shape[1]
    starts = _block_starts(cols, int(width))
    counts = np.diff(np.append(starts, cols))
    return np.add.reduceat(data, starts, axis=1) / counts


def compress_axis(axis: Any, width: int) -> np.ndarray:
    """Same block averaging as `compress_matrix`, applied to a time axis."""
    t = as_axis(axis, "time_axis")
    starts = _block_starts(t.size, int(width))
    counts = np.diff(np.append(starts, t.size))
    return np.add.reduceat(t, starts) / counts


def time_window(start_time: float, end_time: float, time_axis: Any,
                matrix: Any) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cut the columns covering [start_time, end_time].

    The window runs from the last sample at or before start_time to the
    first sample at or after end_time, both included.
    """
    # negated comparisons so NaN fails every check
    if not start_time < end_time:
        raise InvertedWindow(f"window end must be after window start {start_time:g}",
                             param="end_time", value=end_time)

    t = as_axis(time_axis, "time_axis")
    data = as_grid(matrix)
    if t.size != data.shape[1]:
        raise AxisLengthMismatch(f"time axis has {t.size} entries but the matrix has {data.shape[1]} columns",
                                 param="len(time_axis)", value=t.size)
    if t.size == 0 or not start_time >= t[0]:
        raise OutOfRange("window starts before the time axis", param="start_time", value=start_time)
    if not end_time <= t[-1]:
        raise OutOfRange(f"window ends after the time axis ({t[-1]:g})", param="end_time", value=end_time)

    i0 = floor_search(t, start_time)
    i1 = ceil_search(t, end_time)
    return t[i0:i1 + 1].copy(), data[:, i0:i1 + 1].copy()
