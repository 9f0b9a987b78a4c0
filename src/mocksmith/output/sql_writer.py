"""SQL sink: one INSERT statement per row."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from mocksmith.output.base import Emitter, format_sql_value, quote_identifier


def insert_statement(table: str, row: Dict[str, Any]) -> str:
    """
    Render ``INSERT INTO "table" ("a", "b") VALUES (...);``.

    Identifiers are double-quoted and string literals have embedded single
    quotes doubled.
    """
    names = ", ".join(quote_identifier(name) for name in row)
    values = ", ".join(format_sql_value(value) for value in row.values())
    return f"INSERT INTO {quote_identifier(table)} ({names}) VALUES ({values});"


class SqlEmitter(Emitter):
    extension = "sql"

    def _write(self, path: Path, rows: Iterable[Dict[str, Any]]) -> Tuple[int, List[str]]:
        table = path.stem
        columns: List[str] = []
        count = 0

        with open(path, "w", encoding="utf-8") as f:
            for row in rows:
                if not columns:
                    columns = list(row.keys())
                f.write(insert_statement(table, row))
                f.write("\n")
                count += 1

        return count, columns
