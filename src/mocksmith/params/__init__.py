"""Parameter declarations, coercion and validation."""

from mocksmith.params.coercion import coerce_value, to_text
from mocksmith.params.schema import ParameterSchema

__all__ = [
    "ParameterSchema",
    "coerce_value",
    "to_text",
]
