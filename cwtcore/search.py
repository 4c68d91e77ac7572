from __future__ import annotations

import numpy as np


def floor_search(axis: np.ndarray, value: float) -> int:
    """
    Index of the last entry of the ascending `axis` that is <= value.

    An exact hit returns its own index; otherwise the insertion point minus
    one. Returns -1 when value lies below axis[0].
    """
    return int(np.searchsorted(axis, value, side="right")) - 1


def ceil_search(axis: np.ndarray, value: float) -> int:
    """Index of the first entry >= value; len(axis) when value is above the axis."""
    return int(np.searchsorted(axis, value, side="left"))
