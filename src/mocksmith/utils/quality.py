"""
Seed run reporting: per-table stats and referential integrity.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Hashable, List, Mapping, Optional, Set

from mocksmith.models import Relationship, Schema
from mocksmith.output.base import EmitResult, stable_json

logger = logging.getLogger(__name__)

MAX_SAMPLE_ORPHANS = 5


def _hashable(value: Any) -> Hashable:
    try:
        hash(value)
    except TypeError:
        return stable_json(value)
    return value


class _ForeignKeyCheck:
    def __init__(self, rel: Relationship):
        self.rel = rel
        self.checked = 0
        self.satisfied = 0
        self.orphans: List[Any] = []

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.rel.to_dict(),
            "checked": self.checked,
            "satisfied": self.satisfied,
            "orphan_count": self.checked - self.satisfied,
            "sample_orphans": list(self.orphans),
        }


class SeedReport:
    """
    Collects what a seeder run produced.

    Reports include:
    - Row and column counts per table
    - The file each table was written to
    - FK referential integrity, checking every child value against the
      parent values produced earlier in the same run
    """

    def __init__(self, schema: Schema, seed: Optional[int] = None, run_id: Optional[str] = None):
        self.schema = schema
        self.seed = seed
        self.run_id = run_id
        self.generated_at = datetime.now().isoformat()
        self.tables: Dict[str, Dict[str, Any]] = {}

        self._parent_values: Dict[str, Set[Hashable]] = {}
        self._checks: Dict[str, List[_ForeignKeyCheck]] = {}
        for rel in schema.foreign_keys():
            self._parent_values.setdefault(f"{rel.parent_table}.{rel.parent_column}", set())
            self._checks.setdefault(rel.child_table, []).append(_ForeignKeyCheck(rel))

    def record_row(self, table: str, row: Mapping[str, Any]) -> None:
        """Check a completed row's foreign keys and remember its referenced values."""
        for check in self._checks.get(table, []):
            rel = check.rel
            if rel.child_column not in row:
                continue
            value = row[rel.child_column]
            check.checked += 1
            if _hashable(value) in self._parent_values[f"{rel.parent_table}.{rel.parent_column}"]:
                check.satisfied += 1
            elif len(check.orphans) < MAX_SAMPLE_ORPHANS:
                check.orphans.append(value)

        for column, value in row.items():
            values = self._parent_values.get(f"{table}.{column}")
            if values is not None:
                values.add(_hashable(value))

    def record_table(self, result: EmitResult) -> None:
        self.tables[result.table] = {
            "rows": result.rows,
            "columns": list(result.columns),
            "file": str(result.path),
        }

    @property
    def total_rows(self) -> int:
        return sum(t["rows"] for t in self.tables.values())

    @property
    def integrity_score(self) -> float:
        """Satisfied FK values over checked FK values; 1.0 when nothing was checked."""
        checks = [c for group in self._checks.values() for c in group]
        checked = sum(c.checked for c in checks)
        if checked == 0:
            return 1.0
        return sum(c.satisfied for c in checks) / checked

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "generated_at": self.generated_at,
            "run_id": self.run_id,
            "seed": self.seed,
            "summary": {
                "total_tables": len(self.tables),
                "total_rows": self.total_rows,
                "integrity_score": self.integrity_score,
            },
            "tables": {name: dict(stats) for name, stats in self.tables.items()},
            "referential_integrity": [
                check.to_dict() for group in self._checks.values() for check in group
            ],
        }

    def save(self, output_dir: Path) -> Path:
        """
        Save the report as ``report.json``.

        Args:
            output_dir: Output directory

        Returns:
            Path of the written file
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / "report.json"
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

        logger.info(f"Seed report saved to {path}")
        return path
