from __future__ import annotations
from enum import Enum
from typing import Any, Tuple, Union

import numpy as np

from cwtcore.grid import as_grid, require_same_shape


class Feature(str, Enum):
    REAL = "real"
    IMAGINARY = "imaginary"
    MODULUS = "modulus"
    PHASE = "phase"


class Component(str, Enum):
    REAL = "real"
    IMAGINARY = "imaginary"
    BOTH = "both"


def modulus(real: Any, imag: Any) -> np.ndarray:
    re = as_grid(real, "real")
    im = as_grid(imag, "imag")
    require_same_shape(re, im)
    return np.sqrt(re ** 2 + im ** 2)


def phase(real: Any, imag: Any) -> np.ndarray:
    """
    Elementwise atan(real / imag).

    The ratio is real over imaginary, not the usual imag/real, and is kept
    that way on purpose. imag == 0 gives +-pi/2 or NaN (0/0) following
    IEEE division.
    """
    re = as_grid(real, "real")
    im = as_grid(imag, "imag")
    require_same_shape(re, im)
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.arctan(re / im)


def select_component(real: np.ndarray, imag: np.ndarray,
                     component: Union[Component, str]) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    component = Component(component)
    if component is Component.REAL:
        return real.copy()
    if component is Component.IMAGINARY:
        return imag.copy()
    return real.copy(), imag.copy()


def compute_feature(real: np.ndarray, imag: np.ndarray, feature: Union[Feature, str]) -> np.ndarray:
    feature = Feature(feature)
    if feature is Feature.REAL:
        return real.copy()
    if feature is Feature.IMAGINARY:
        return imag.copy()
    if feature is Feature.MODULUS:
        return modulus(real, imag)
    return phase(real, imag)
