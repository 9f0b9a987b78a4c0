"""
YAML schema loading.

Turns a schema file (``tables:`` or MongoDB-style ``collections:``) into a
Schema, filling in type-driven generator defaults and the relationships
implied by ``foreign_key`` columns.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from mocksmith.errors import SchemaError
from mocksmith.models import Column, ForeignRef, Relationship, Schema, Table

logger = logging.getLogger(__name__)

# column type -> generator used when a column names no generator
TYPE_GENERATORS = {
    "string": "word",
    "text": "word",
    "varchar": "word",
    "char": "word",
    "integer": "number",
    "int": "number",
    "bigint": "number",
    "smallint": "number",
    "float": "float",
    "decimal": "float",
    "numeric": "float",
    "boolean": "boolean",
    "bool": "boolean",
    "datetime": "datetime",
    "timestamp": "datetime",
    "date": "date",
    "uuid": "uuid",
}
DEFAULT_GENERATOR = "word"


def default_generator(column_type: str) -> str:
    """Generator for a column that only declares its type."""
    return TYPE_GENERATORS.get(column_type.strip().lower(), DEFAULT_GENERATOR)


def _first(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


class SchemaLoader:
    """
    Parses schema documents.

    A loader is cheap and holds no state between documents; ``load_schema``
    and ``parse_schema`` wrap a throwaway instance.
    """

    def load(self, path: Path) -> Schema:
        """Read and parse a YAML schema file."""
        path = Path(path)
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as exc:
            raise SchemaError(f"schema file not found: {path}") from exc
        except yaml.YAMLError as exc:
            raise SchemaError(f"invalid YAML in {path}: {exc}") from exc
        except OSError as exc:
            raise SchemaError(f"cannot read schema file {path}: {exc}") from exc

        schema = self.parse(data, source=str(path))
        logger.info(f"Loaded {len(schema.tables)} tables from {path}")
        return schema

    def parse(self, data: Any, source: str = "<schema>") -> Schema:
        """Build a Schema from an already-decoded document."""
        if not isinstance(data, dict):
            raise SchemaError(f"{source}: top level must be a mapping with 'tables'")

        if "tables" in data:
            entries, section = data["tables"], "tables"
        elif "collections" in data:
            entries, section = data["collections"], "collections"
        else:
            raise SchemaError(f"{source}: expected a 'tables' or 'collections' list")

        if not isinstance(entries, list):
            raise SchemaError(f"{source}: '{section}' must be a list")

        schema = Schema()
        for index, entry in enumerate(entries):
            schema.tables.append(self._parse_table(entry, f"{section}[{index}]"))

        for table in schema.tables:
            for column in table.get_fk_columns():
                schema.add_relationship(Relationship(
                    child_table=table.name,
                    child_column=column.name,
                    parent_table=column.foreign_ref.table,
                    parent_column=column.foreign_ref.column,
                ))

        self._apply_relationships(schema, data.get("relationships") or [])
        return schema

    def _parse_table(self, entry: Any, path: str) -> Table:
        if not isinstance(entry, dict):
            raise SchemaError(f"{path}: table definition must be a mapping")

        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise SchemaError(f"{path}: table name is required")

        row_count = _first(entry, "row_count", "count", default=0)
        if isinstance(row_count, bool) or not isinstance(row_count, int) or row_count < 0:
            raise SchemaError(f"{path}.row_count: must be a non-negative integer", table=name)

        raw_columns = _first(entry, "columns", "fields", default=[])
        if not isinstance(raw_columns, list):
            raise SchemaError(f"{path}.columns: must be a list", table=name)

        seed_rows = _first(entry, "seed_rows", "data", default=[])
        if not isinstance(seed_rows, list) or not all(isinstance(r, dict) for r in seed_rows):
            raise SchemaError(f"{path}.seed_rows: must be a list of mappings", table=name)

        columns = [
            self._parse_column(raw, f"{path}.columns[{i}]", name)
            for i, raw in enumerate(raw_columns)
        ]
        return Table(
            name=name,
            columns=columns,
            row_count=row_count,
            seed_rows=[dict(r) for r in seed_rows],
        )

    def _parse_column(self, entry: Any, path: str, table: str) -> Column:
        if not isinstance(entry, dict):
            raise SchemaError(f"{path}: column definition must be a mapping", table=table)

        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise SchemaError(f"{path}: column name is required", table=table)

        column_type = str(entry.get("type") or "string")
        params = entry.get("params") or {}
        if not isinstance(params, dict):
            raise SchemaError(f"{path}.params: must be a mapping", table=table, column=name)
        params = dict(params)

        generator = entry.get("generator")
        values = entry.get("values")
        if values is not None:
            if not isinstance(values, list):
                raise SchemaError(f"{path}.values: must be a list", table=table, column=name)
            params.setdefault("values", list(values))
            generator = generator or "enum"
        if not generator:
            generator = default_generator(column_type)

        foreign_ref = self._parse_foreign_key(entry.get("foreign_key"), path, table, name)
        if foreign_ref is None and generator == "foreign" and params.get("table") and params.get("column"):
            foreign_ref = ForeignRef(str(params["table"]), str(params["column"]))
        if foreign_ref is not None:
            generator = "foreign"
            params.setdefault("table", foreign_ref.table)
            params.setdefault("column", foreign_ref.column)

        if generator == "autoincrement":
            params.setdefault("sequence", f"{table}.{name}")

        raw_nested = entry.get("nested_fields") or []
        if not isinstance(raw_nested, list):
            raise SchemaError(f"{path}.nested_fields: must be a list", table=table, column=name)
        nested = [
            self._parse_column(raw, f"{path}.nested_fields[{i}]", table)
            for i, raw in enumerate(raw_nested)
        ]

        return Column(
            name=name,
            type=column_type,
            industry=str(entry.get("industry") or "base"),
            generator=str(generator),
            params=params,
            is_foreign=foreign_ref is not None,
            foreign_ref=foreign_ref,
            is_primary_key=bool(_first(entry, "primary_key", "is_primary", default=False)),
            nested_fields=nested,
        )

    @staticmethod
    def _parse_foreign_key(raw: Any, path: str, table: str, column: str) -> Optional[ForeignRef]:
        if raw is None:
            return None
        if isinstance(raw, str) and "." in raw:
            ref_table, ref_column = raw.split(".", 1)
        elif isinstance(raw, dict):
            ref_table, ref_column = raw.get("table"), raw.get("column")
        else:
            raise SchemaError(
                f"{path}.foreign_key: expected {{table, column}} or 'table.column'",
                table=table, column=column,
            )
        if not ref_table or not ref_column:
            raise SchemaError(
                f"{path}.foreign_key: both table and column are required",
                table=table, column=column,
            )
        return ForeignRef(str(ref_table), str(ref_column))

    def _apply_relationships(self, schema: Schema, entries: Any) -> None:
        """Add explicit relationships, marking their child columns as foreign."""
        if not isinstance(entries, list):
            raise SchemaError("relationships: must be a list")

        for index, rel_def in enumerate(entries):
            path = f"relationships[{index}]"
            if not isinstance(rel_def, dict):
                raise SchemaError(f"{path}: relationship must be a mapping")

            rel_data: Dict[str, Optional[str]] = {
                "child_table": _first(rel_def, "child_table", "to_table"),
                "child_column": _first(rel_def, "child_column", "to_column"),
                "parent_table": _first(rel_def, "parent_table", "from_table"),
                "parent_column": _first(rel_def, "parent_column", "from_column"),
            }
            missing: List[str] = [key for key, value in rel_data.items() if not value]
            if missing:
                raise SchemaError(f"{path}: missing {', '.join(missing)}")

            rel = Relationship(**{key: str(value) for key, value in rel_data.items()})
            schema.add_relationship(rel)

            child = schema.get_table(rel.child_table)
            col = child.get_column(rel.child_column) if child else None
            if col is not None and not col.is_foreign:
                col.is_foreign = True
                col.generator = "foreign"
                col.foreign_ref = ForeignRef(rel.parent_table, rel.parent_column)
                col.params.setdefault("table", rel.parent_table)
                col.params.setdefault("column", rel.parent_column)
                logger.debug(f"Marked {rel.child_table}.{rel.child_column} as foreign key")


def load_schema(path: Path) -> Schema:
    """Load a schema from a YAML file."""
    return SchemaLoader().load(path)


def parse_schema(data: Any) -> Schema:
    """Parse a schema from a decoded mapping."""
    return SchemaLoader().parse(data)
