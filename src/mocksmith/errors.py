"""
Error taxonomy for mocksmith.

Every failure surfaced by the engine, the seeder or the emitters is a
subclass of MocksmithError carrying a short ``kind`` string and, where known,
the structured location it happened at.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class MocksmithError(Exception):
    """Base class for all mocksmith errors."""

    kind = "internal"
    exit_code = 1
    http_status = 500

    def __init__(
        self,
        message: str,
        *,
        industry: Optional[str] = None,
        generator: Optional[str] = None,
        parameter: Optional[str] = None,
        table: Optional[str] = None,
        column: Optional[str] = None,
        row_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.industry = industry
        self.generator = generator
        self.parameter = parameter
        self.table = table
        self.column = column
        self.row_index = row_index

    @property
    def location(self) -> str:
        """Human-readable location, e.g. ``orders.user_id[3]`` or ``base/enum:values``."""
        if self.table:
            loc = self.table
            if self.column:
                loc += f".{self.column}"
            if self.row_index is not None:
                loc += f"[{self.row_index}]"
            return loc
        if self.industry or self.generator:
            loc = f"{self.industry or '?'}/{self.generator or '?'}"
            if self.parameter:
                loc += f":{self.parameter}"
            return loc
        return self.parameter or ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind,
            "message": self.message,
            "location": self.location,
            "industry": self.industry,
            "generator": self.generator,
            "parameter": self.parameter,
            "table": self.table,
            "column": self.column,
            "row_index": self.row_index,
        }

    def __str__(self) -> str:
        loc = self.location
        return f"{loc}: {self.message}" if loc else self.message


class NotFoundError(MocksmithError):
    """Unknown industry or generator."""

    kind = "not-found"
    exit_code = 2
    http_status = 404


class ValidationError(MocksmithError):
    """Parameter failed coercion, range, enumeration or presence checks."""

    kind = "validation"
    exit_code = 2
    http_status = 400


class CoercionError(ValidationError):
    """Raw parameter value cannot be converted to the declared type."""


class SchemaError(MocksmithError):
    """Schema is malformed: duplicate names, dangling references or FK cycles."""

    kind = "schema"
    exit_code = 2
    http_status = 400


class MissingReferenceError(MocksmithError):
    """A foreign-key column has no parent values to sample from."""

    kind = "missing-reference"
    exit_code = 2
    http_status = 400


class GenerationError(MocksmithError):
    """A producer failed while building a row."""

    kind = "generation"


class CancelledError(MocksmithError):
    """A seeder run was cancelled between rows."""

    kind = "cancelled"
    http_status = 499


class OutputError(MocksmithError):
    """An emitter could not write its file."""

    kind = "io"


class InternalError(MocksmithError):
    """An invariant was broken (programming error)."""

    kind = "internal"
