"""Strict schema checks run before a seeder produces anything."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Set

from mocksmith.errors import MocksmithError, SchemaError
from mocksmith.models import Column, Schema

if TYPE_CHECKING:
    from mocksmith.engine.engine import Engine

logger = logging.getLogger(__name__)


def validate_schema(schema: Schema, engine: Optional[Engine] = None) -> List[str]:
    """
    Validate a schema and return its generation order.

    Checks table and column name uniqueness, that every table has columns
    and at most one primary key, seed rows naming known columns, every
    foreign key and relationship pointing at an existing column,
    relationships agreeing with column references, and the absence of FK
    cycles. When ``engine`` is given every
    non-foreign column must also name a known generator with valid params.

    Raises:
        SchemaError: the schema is malformed or cyclic
        NotFoundError: a column names an unknown generator (engine only)
        ValidationError: a column's params are invalid (engine only)
    """
    if not schema.tables:
        raise SchemaError("schema defines no tables")

    seen_tables: Set[str] = set()
    for table in schema.tables:
        if table.name in seen_tables:
            raise SchemaError(f"duplicate table name '{table.name}'", table=table.name)
        seen_tables.add(table.name)

        if table.row_count < 0:
            raise SchemaError("row_count must not be negative", table=table.name)
        if not table.columns:
            raise SchemaError("table declares no columns", table=table.name)

        _check_columns(table.name, table.columns)

        primary_keys = [c.name for c in table.columns if c.is_primary_key]
        if len(primary_keys) > 1:
            raise SchemaError(
                f"more than one primary key: {', '.join(primary_keys)}",
                table=table.name,
            )

        known = set(table.column_names)
        for index, row in enumerate(table.seed_rows):
            unknown = sorted(set(row) - known)
            if unknown:
                raise SchemaError(
                    f"seed row names unknown columns: {', '.join(unknown)}",
                    table=table.name,
                    row_index=index,
                )

    for table in schema.tables:
        for column in table.get_fk_columns():
            ref = column.foreign_ref
            parent = schema.get_table(ref.table)
            if parent is None or parent.get_column(ref.column) is None:
                raise SchemaError(
                    f"foreign key references missing column {ref.key}",
                    table=table.name,
                    column=column.name,
                )

    for rel in schema.relationships:
        child = schema.get_table(rel.child_table)
        parent = schema.get_table(rel.parent_table)
        if child is None or child.get_column(rel.child_column) is None:
            raise SchemaError(
                f"relationship references missing column {rel.child_table}.{rel.child_column}"
            )
        if parent is None or parent.get_column(rel.parent_column) is None:
            raise SchemaError(
                f"relationship references missing column {rel.parent_table}.{rel.parent_column}",
                table=rel.child_table,
                column=rel.child_column,
            )
        ref = child.get_column(rel.child_column).foreign_ref
        if ref is None or (ref.table, ref.column) != (rel.parent_table, rel.parent_column):
            raise SchemaError(
                f"relationship to {rel.parent_table}.{rel.parent_column} disagrees with "
                f"the column's foreign key {ref.key if ref else '(none)'}",
                table=rel.child_table,
                column=rel.child_column,
            )

    order = schema.dependency_order()

    if engine is not None:
        for table in schema.tables:
            _check_generators(engine, table.name, table.columns)

    logger.debug(f"Schema valid, generation order: {', '.join(order)}")
    return order


def _check_columns(table: str, columns: Sequence[Column]) -> None:
    names: Set[str] = set()
    for column in columns:
        if not column.name:
            raise SchemaError("column name must not be empty", table=table)
        if column.name in names:
            raise SchemaError(f"duplicate column name '{column.name}'", table=table, column=column.name)
        names.add(column.name)
        if column.nested_fields:
            _check_columns(table, column.nested_fields)


def _check_generators(engine: Engine, table: str, columns: Sequence[Column]) -> None:
    for column in columns:
        if column.is_foreign:
            continue
        params = dict(column.params)
        if column.nested_fields:
            params["fields"] = column.nested_fields
        try:
            engine.validate_params(column.industry, column.generator, params)
        except MocksmithError as exc:
            exc.table, exc.column = table, column.name
            raise
        if column.nested_fields:
            _check_generators(engine, table, column.nested_fields)
