from dataclasses import dataclass
from typing import Any, Optional, List, Dict

from cwtcore.errors import InvalidParameters

_TYPES = ("float", "int", "bool", "str", "enum")


@dataclass
class ParamSpec:
    key: str
    label: str
    type: str  # "float","int","bool","str","enum"
    default: Any
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    choices: Optional[List[str]] = None
    optional: bool = False  # None is an accepted value

    description: str = ""
    examples: Optional[List[str]] = None

    def __post_init__(self) -> None:
        if self.type not in _TYPES:
            raise ValueError(f"Unknown parameter type {self.type!r} for {self.key}")


Schema = List[ParamSpec]


def coerce_value(spec: ParamSpec, value: Any) -> Any:
    """Convert `value` to the schema type and check bounds/choices."""
    if value is None:
        if spec.optional:
            return None
        raise InvalidParameters(f"{spec.label} is required", param=spec.key, value=value)

    try:
        if spec.type == "int":
            if isinstance(value, float) and not value.is_integer():
                raise ValueError
            out: Any = int(value)
        elif spec.type == "float":
            out = float(value)
        elif spec.type == "bool":
            if isinstance(value, str):
                out = value.strip().lower() in ("1", "true", "yes", "on")
            else:
                out = bool(value)
        else:
            out = str(value)
    except (TypeError, ValueError):
        raise InvalidParameters(f"{spec.label} must be of type {spec.type}", param=spec.key, value=value) from None

    if spec.type in ("int", "float"):
        if spec.min is not None and out < spec.min:
            raise InvalidParameters(f"{spec.label} must be >= {spec.min:g}", param=spec.key, value=value)
        if spec.max is not None and out > spec.max:
            raise InvalidParameters(f"{spec.label} must be <= {spec.max:g}", param=spec.key, value=value)
    if spec.type == "enum" and spec.choices and out not in spec.choices:
        raise InvalidParameters(f"{spec.label} must be one of {spec.choices}", param=spec.key, value=value)
    return out


def apply_schema(schema: Schema, params: Dict[str, Any]) -> Dict[str, Any]:
    """Defaults for missing keys, coercion for present ones. Unknown keys are kept as-is."""
    out = dict(params)
    for s in schema:
        out[s.key] = coerce_value(s, params.get(s.key, s.default))
    return out


def schema_to_dict(schema: Schema) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for s in schema:
        out.append({
            "key": s.key,
            "label": s.label,
            "type": s.type,
            "default": s.default,
            "min": s.min,
            "max": s.max,
            "step": s.step,
            "choices": s.choices,
            "optional": s.optional,
            "description": s.description,
            "examples": s.examples,
        })
    return out
