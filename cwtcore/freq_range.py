from __future__ import annotations
import math
from typing import List, Tuple

import numpy as np

from cwtcore.axes import FrequencyAxis
from cwtcore.errors import AboveRange, BelowRange, InvalidParameters, InvertedRange
from cwtcore.search import floor_search


def _ascending(axis: FrequencyAxis) -> np.ndarray:
    return axis.frequencies if axis.ascending else axis.frequencies[::-1]


def indices_for_frequency_range(axis: FrequencyAxis, start_frequency: float,
                                end_frequency: float) -> Tuple[int, int]:
    """
    Inclusive (start_index, end_index) of the rows spanning
    [start_frequency, end_frequency).

    The start row is the last one at or below start_frequency. Rows are
    spaced 1/voices octaves apart, so the end row is found from the
    log2 ratio instead of a second search. On a descending axis the pair
    is mirrored back to row positions, start_index < end_index.
    """
    freqs = _ascending(axis)
    n = len(axis)
    if n < 2:
        raise InvalidParameters("frequency axis needs at least two entries", param="len(axis)", value=n)
    # negated comparisons so NaN fails every check
    if not start_frequency >= freqs[0]:
        raise BelowRange(f"start frequency is below the axis minimum {freqs[0]:g}",
                         param="start_frequency", value=start_frequency)
    if not start_frequency < end_frequency:
        raise InvertedRange(f"end frequency must be greater than start frequency {start_frequency:g}",
                            param="end_frequency", value=end_frequency)
    if not end_frequency <= freqs[-1]:
        raise AboveRange(f"end frequency is above the axis maximum {freqs[-1]:g}",
                         param="end_frequency", value=end_frequency)

    if start_frequency >= freqs[-2]:
        lo, hi = n - 2, n - 1
    else:
        lo = floor_search(freqs, start_frequency)
        axis_start_frequency = float(freqs[lo])

        # round first: log2 of an exact octave multiple can land a hair above the integer
        octaves = round(math.log2(end_frequency / axis_start_frequency) / axis.delta_a, 9)
        hi = lo + int(math.ceil(octaves))

    if axis.ascending:
        return lo, hi
    return n - 1 - hi, n - 1 - lo


def index_for_frequency(axis: FrequencyAxis, frequency: float) -> int:
    """Row whose centre frequency is the closest one at or below `frequency`."""
    freqs = _ascending(axis)
    if not frequency >= freqs[0]:
        raise BelowRange(f"frequency is below the axis minimum {freqs[0]:g}",
                         param="frequency", value=frequency)
    if not frequency <= freqs[-1]:
        raise AboveRange(f"frequency is above the axis maximum {freqs[-1]:g}",
                         param="frequency", value=frequency)
    idx = floor_search(freqs, frequency)
    return idx if axis.ascending else len(axis) - 1 - idx


def sample_band_indices(start_index: int, end_index: int, sample_count: int) -> List[int]:
    """
    Pick `sample_count` rows from a resolved range for per-band traces.

    When the range has more rows than requested, rows are spread evenly
    (floored positions) and the last pick is pinned to `end_index`.
    Otherwise every row from start_index up to end_index - 1 is returned.
    """
    if sample_count < 1:
        raise InvalidParameters("at least one band must be sampled", param="sample_count", value=sample_count)
    if end_index < start_index:
        raise InvertedRange("end index precedes start index", param="end_index", value=end_index)

    available = end_index - start_index
    if sample_count >= available:
        return list(range(start_index, end_index))
    if sample_count == 1:
        return [end_index]

    step = (available - 1) / (sample_count - 1)
    out = [start_index + int(math.floor(k * step)) for k in range(sample_count - 1)]
    out.append(end_index)
    return out
