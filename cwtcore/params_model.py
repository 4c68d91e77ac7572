import threading
from typing import Any, Dict
from PySide6.QtCore import QObject, Signal

from cwtcore.params import TRANSFORM_SCHEMA, TransformParams
from cwtcore.schema import coerce_value


class ParamsModel(QObject):
    """Observable store for transform parameters; values are checked against the schema on set."""
    changed = Signal(str)  # key changed

    def __init__(self, initial: Dict[str, Any] | None = None):
        super().__init__()
        self._lock = threading.Lock()
        self._specs = {s.key: s for s in TRANSFORM_SCHEMA}
        self._data: Dict[str, Any] = {s.key: s.default for s in TRANSFORM_SCHEMA}
        for k, v in (initial or {}).items():
            self._data[k] = self._coerce(k, v)

    def _coerce(self, key: str, value: Any) -> Any:
        spec = self._specs.get(key)
        return coerce_value(spec, value) if spec is not None else value

    def get(self, key: str, default=None):
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any):
        value = self._coerce(key, value)
        with self._lock:
            self._data[key] = value
        self.changed.emit(key)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            # shallow copy ok (we store primitives only)
            return dict(self._data)

    def transform_params(self) -> TransformParams:
        return TransformParams.from_dict(self.snapshot())
