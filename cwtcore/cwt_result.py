from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np

from cwtcore.errors import DimensionMismatch
from cwtcore.grid import as_grid, frozen, require_same_shape


@dataclass(frozen=True)
class TransformResult:
    real: np.ndarray   # 2D (rows=voice/octave, cols=time), read-only
    imag: np.ndarray   # same shape as real

    def __post_init__(self):
        re = np.array(as_grid(self.real, "real"), dtype=np.float64)
        im = np.array(as_grid(self.imag, "imag"), dtype=np.float64)
        require_same_shape(re, im)
        object.__setattr__(self, "real", frozen(re))
        object.__setattr__(self, "imag", frozen(im))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.real.shape

    @property
    def rows(self) -> int:
        return int(self.real.shape[0])

    @property
    def cols(self) -> int:
        return int(self.real.shape[1])


@dataclass
class Scalogram:
    """What a plotting/export consumer receives: one feature plus its axes."""
    image: np.ndarray        # 2D (rows=frequency, cols=time)
    y_axis: np.ndarray       # wavelet centre frequencies
    x_axis: np.ndarray       # time axis (sec)
    label_y: str             # "frequency"
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        rows, cols = self.image.shape
        if len(self.y_axis) != rows:
            raise DimensionMismatch(f"y axis must have {rows} entries", param="len(y_axis)", value=len(self.y_axis))
        if len(self.x_axis) != cols:
            raise DimensionMismatch(f"x axis must have {cols} entries", param="len(x_axis)", value=len(self.x_axis))
