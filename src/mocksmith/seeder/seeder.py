"""
Relational seeder.

Produces every table of a schema in foreign-key order, streaming each
table's rows straight into the configured emitter.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from tqdm import tqdm

from mocksmith.config import SeedConfig
from mocksmith.errors import CancelledError, GenerationError, MocksmithError
from mocksmith.models import Column, Schema, Table
from mocksmith.output.base import EmitResult
from mocksmith.output.writer import OutputWriter
from mocksmith.schema.validation import validate_schema
from mocksmith.seeder.memo import ReferenceMemo
from mocksmith.utils.quality import SeedReport

if TYPE_CHECKING:
    from mocksmith.engine.engine import Engine

logger = logging.getLogger(__name__)


class Seeder:
    """
    Seeds the tables of a schema.

    Usage:
        seeder = Seeder(engine, SeedConfig(output_dir="out", output_format="csv"))
        report = seeder.run(schema)

    A run validates the schema before anything is written, then for each
    table in dependency order builds ``total_rows`` rows: seed row values
    first, foreign columns sampled from the parent values memoized earlier
    in the run, every other column from its producer.
    """

    def __init__(
        self,
        engine: Engine,
        config: SeedConfig,
        cancel_event: Optional[threading.Event] = None,
        show_progress: bool = True,
    ):
        """
        Initialize the seeder.

        Args:
            engine: Engine every value is drawn from
            config: Output location, format and seed for the run
            cancel_event: Checked between rows; setting it aborts the run
            show_progress: Show a tqdm bar over tables
        """
        self.engine = engine
        self.config = config
        self.cancel_event = cancel_event or threading.Event()
        self.show_progress = show_progress
        self.writer = OutputWriter(config)
        self.memo = ReferenceMemo()

    def cancel(self) -> None:
        """Ask a running seed to stop after the current row."""
        self.cancel_event.set()

    def run(self, schema: Schema) -> SeedReport:
        """
        Seed every table of ``schema``.

        Returns:
            SeedReport describing the written tables

        Raises:
            SchemaError: the schema failed validation; nothing was written
            MissingReferenceError: a foreign column had no parent values
            GenerationError: a producer failed, attributed to table/column/row
            CancelledError: the cancel event was set
            OutputError: a file could not be written
        """
        order = validate_schema(schema, self.engine)

        if self.config.seed is not None:
            self.engine.reseed(self.config.seed)

        logger.info(f"Generation order: {order}")
        output_dir = self.writer.prepare()

        self.memo.clear()
        for table_name in order:
            for column in schema.reference_targets(table_name):
                self.memo.declare(table_name, column)

        report = SeedReport(schema, seed=self.engine.seed, run_id=self.config.run_id)
        results: List[EmitResult] = []

        for table_name in tqdm(order, desc="Seeding tables", unit="table", disable=not self.show_progress):
            table = schema.get_table(table_name)
            logger.info(f"Generating {table.total_rows} rows for {table_name}")
            rows = self._stream_rows(schema, table, report)
            result = self.writer.emitter.emit(output_dir, table_name, rows)
            report.record_table(result)
            results.append(result)

        if self.config.write_manifest:
            self.writer.write_manifest(results, self.engine.seed)

        logger.info(
            f"Seeded {len(results)} tables, {report.total_rows} rows "
            f"(integrity {report.integrity_score:.2%})"
        )
        return report

    def _stream_rows(self, schema: Schema, table: Table, report: SeedReport) -> Iterator[Dict[str, Any]]:
        targets = schema.reference_targets(table.name)
        for index in range(table.total_rows):
            if self.cancel_event.is_set():
                raise CancelledError("seeding cancelled", table=table.name, row_index=index)

            existing = table.seed_rows[index] if index < len(table.seed_rows) else None
            row = self._build_row(table, index, existing)

            self.memo.record_row(table.name, row, targets)
            report.record_row(table.name, row)
            yield row

    def _build_row(self, table: Table, index: int, existing: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        row: Dict[str, Any] = dict(existing or {})
        for column in table.columns:
            if column.name in row:
                continue
            try:
                row[column.name] = self._column_value(column)
            except MocksmithError as exc:
                exc.table, exc.column, exc.row_index = table.name, column.name, index
                raise
            except Exception as exc:
                raise GenerationError(
                    f"producer failed: {exc}",
                    industry=column.industry,
                    generator=column.generator,
                    table=table.name,
                    column=column.name,
                    row_index=index,
                ) from exc
        return row

    def _column_value(self, column: Column) -> Any:
        if column.is_foreign:
            return self.engine.pick_reference(column.foreign_ref, self.memo)
        return self.engine.generate_row([column], refs=self.memo)[column.name]


def seed(engine: Engine, schema: Schema, config: SeedConfig, **kwargs: Any) -> SeedReport:
    """Run a Seeder once; keyword arguments go to the Seeder constructor."""
    return Seeder(engine, config, **kwargs).run(schema)
