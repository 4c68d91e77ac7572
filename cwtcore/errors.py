from __future__ import annotations
from typing import Any, Optional


class CWTError(Exception):
    """Base class for every failure raised by the CWT post-processing core.

    `param` names the violated input, `value` is what the caller passed.
    """

    def __init__(self, message: str, param: Optional[str] = None, value: Any = None):
        self.param = param
        self.value = value
        if param is not None:
            message = f"{message} ({param}={value!r})"
        super().__init__(message)


# --- artifact requested before it was computed ---

class MissingPrerequisite(CWTError, LookupError):
    pass


class NotComputed(MissingPrerequisite):
    pass


class ResultNotReady(MissingPrerequisite):
    pass


class AxisNotReady(MissingPrerequisite):
    pass


class MissingSamplingRate(MissingPrerequisite):
    pass


# --- caller supplied numbers that violate a precondition ---

class InvalidParameters(CWTError, ValueError):
    pass


class InvalidSamplingRate(InvalidParameters):
    pass


class BelowRange(InvalidParameters):
    pass


class AboveRange(InvalidParameters):
    pass


class InvertedRange(InvalidParameters):
    pass


class InvalidWidth(InvalidParameters):
    pass


class InvertedWindow(InvalidParameters):
    pass


class OutOfRange(InvalidParameters):
    pass


# --- shapes that should agree but do not ---

class DimensionMismatch(CWTError, ValueError):
    pass


class AxisLengthMismatch(DimensionMismatch):
    pass


class InvalidLayout(CWTError, ValueError):
    """Flat transform buffer does not fit the declared dimensions."""
