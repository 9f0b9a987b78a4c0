"""Schema file loading and validation."""

from mocksmith.schema.loader import SchemaLoader, default_generator, load_schema, parse_schema
from mocksmith.schema.validation import validate_schema

__all__ = [
    "SchemaLoader",
    "default_generator",
    "load_schema",
    "parse_schema",
    "validate_schema",
]
