"""
Emitter contract and value formatting shared by the output sinks.

An emitter writes ``{table}.{ext}`` under a directory from a stream of row
mappings and reports what it wrote.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from mocksmith.errors import CancelledError, OutputError

logger = logging.getLogger(__name__)


@dataclass
class EmitResult:
    """What an emitter wrote for one table."""
    table: str
    path: Path
    rows: int = 0
    columns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "columns": list(self.columns),
            "file": self.path.name,
        }


def json_default(value: Any) -> Any:
    """``json.dump`` hook for values outside the JSON data model."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return str(value)


def stable_json(value: Any) -> str:
    """Compact JSON with sorted keys."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=json_default)


def format_csv_value(value: Any) -> str:
    """Render one cell for CSV output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, (dict, list, tuple)):
        return stable_json(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def format_sql_value(value: Any) -> str:
    """Render one value as a SQL literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return f"X'{bytes(value).hex()}'"
    if isinstance(value, (dict, list, tuple)):
        text = stable_json(value)
    elif isinstance(value, (datetime, date, time)):
        text = value.isoformat()
    else:
        text = str(value)
    return "'" + text.replace("'", "''") + "'"


class Emitter(ABC):
    """Writes one table's rows to a file."""

    extension = ""

    def __init__(self, batch_size: int = 1000):
        self.batch_size = batch_size

    def path_for(self, directory: Path, table: str) -> Path:
        return Path(directory) / f"{table}.{self.extension}"

    def emit(self, directory: Path, table: str, rows: Iterable[Dict[str, Any]]) -> EmitResult:
        """
        Write ``rows`` to ``{directory}/{table}.{ext}``.

        Rows are consumed lazily. A cancelled stream keeps the rows written
        so far in a well-formed file. Any other failure removes the partial
        file before the error propagates; filesystem failures become
        OutputError.
        """
        path = self.path_for(directory, table)
        try:
            count, columns = self._write(path, rows)
        except CancelledError:
            raise
        except OSError as exc:
            self._discard(path)
            raise OutputError(f"cannot write {path}: {exc}", table=table) from exc
        except Exception:
            self._discard(path)
            raise

        logger.info(f"Wrote {count} rows to {path}")
        return EmitResult(table=table, path=path, rows=count, columns=columns)

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(f"Could not remove partial file {path}: {exc}")
        else:
            logger.debug(f"Removed partial file {path}")

    @abstractmethod
    def _write(self, path: Path, rows: Iterable[Dict[str, Any]]) -> Tuple[int, List[str]]:
        """Write rows to ``path``; return the row count and the column list."""
