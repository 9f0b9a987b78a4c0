"""
Single-pass coercion of loosely typed parameter values.

CLI flags arrive as strings and schema files as YAML scalars; each is
converted to the declared ParamType here. Nothing recurses: a list of lists
is not flattened, a JSON string is not decoded.
"""

from __future__ import annotations

import math
from typing import Any, List

from mocksmith.errors import CoercionError
from mocksmith.models import ParamType

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}


def to_text(value: Any) -> str:
    """Textual representation used for string and select parameters."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError(f"cannot truncate {value} to an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        return int(text)
    raise TypeError


def _coerce_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        return float(text)
    raise TypeError


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"{value!r} is not one of true/false/1/0")
    raise TypeError


def _coerce_string_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [item if isinstance(item, str) else to_text(item) for item in value]
    if isinstance(value, str):
        if not value.strip():
            return []
        return [part.strip() for part in value.split(",")]
    raise TypeError


_COERCERS = {
    ParamType.INT: _coerce_int,
    ParamType.FLOAT: _coerce_float,
    ParamType.BOOL: _coerce_bool,
    ParamType.STRING: to_text,
    ParamType.SELECT: to_text,
    ParamType.STRING_LIST: _coerce_string_list,
}


def coerce_value(param_type: ParamType, value: Any, *, name: str = "") -> Any:
    """
    Convert ``value`` to ``param_type``.

    Raises:
        CoercionError: if the combination is unsupported or parsing fails
    """
    coercer = _COERCERS[param_type]
    try:
        return coercer(value)
    except TypeError as exc:
        raise CoercionError(
            f"cannot convert {type(value).__name__} to {param_type.value}",
            parameter=name or None,
        ) from exc
    except ValueError as exc:
        raise CoercionError(
            f"invalid {param_type.value} value {value!r}: {exc}",
            parameter=name or None,
        ) from exc
