from __future__ import annotations
from typing import Dict, Any
import numpy as np
from cwtcore.schema import Schema


class ITransformBackend:
    """
    Computes the raw transform. `compute` returns a flat buffer of
    2 * octaves * voices * len(x) floats: for each row, (re, im) pairs for
    every sample, rows ordered like the frequency axis (lowest first).
    """
    BACKEND_META: dict

    def get_parameters_schema(self) -> Schema:
        raise NotImplementedError

    def compute(self, x: np.ndarray, params: Dict[str, Any]) -> np.ndarray:
        raise NotImplementedError
