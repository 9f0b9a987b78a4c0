"""
Output Writer - format dispatch and run manifest for seeder output.

Output Structure:
    <output_dir>/[<run_id>/]
    ├── <table>.csv | <table>.json | <table>.sql
    ├── manifest.json       # Generation manifest
    └── report.json         # Seed report (written by the CLI)
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Sequence, Type

from mocksmith.config import OUTPUT_FORMATS, SeedConfig
from mocksmith.errors import OutputError, ValidationError
from mocksmith.output.base import EmitResult, Emitter
from mocksmith.output.csv_writer import CsvEmitter
from mocksmith.output.json_writer import JsonEmitter
from mocksmith.output.sql_writer import SqlEmitter

logger = logging.getLogger(__name__)

EMITTERS: Dict[str, Type[Emitter]] = {
    "csv": CsvEmitter,
    "json": JsonEmitter,
    "sql": SqlEmitter,
}


def get_emitter(output_format: str, batch_size: int = 1000) -> Emitter:
    """Return a fresh emitter for ``output_format``."""
    emitter_cls = EMITTERS.get(output_format.lower())
    if emitter_cls is None:
        raise ValidationError(
            f"unknown output format {output_format!r}; expected one of {', '.join(OUTPUT_FORMATS)}",
            parameter="format",
        )
    return emitter_cls(batch_size=batch_size)


class OutputWriter:
    """
    Resolves where a run writes and which emitter it uses.

    Nothing touches the filesystem until ``prepare`` is called, so a run
    that fails validation leaves no directory behind.
    """

    def __init__(self, config: SeedConfig):
        """
        Initialize the output writer.

        Args:
            config: Seeder run configuration
        """
        self.config = config
        if config.run_id:
            self.output_dir = config.output_dir / config.run_id
        else:
            self.output_dir = config.output_dir
        self.emitter = get_emitter(config.output_format, config.batch_size)

    def get_output_dir(self) -> Path:
        """Return the output directory path."""
        return self.output_dir

    def prepare(self) -> Path:
        """Create the output directory."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"cannot create output directory {self.output_dir}: {exc}") from exc
        return self.output_dir

    def write_manifest(self, results: Sequence[EmitResult], seed: Optional[int]) -> Path:
        """Write generation manifest."""
        manifest = {
            "generated_at": datetime.now().isoformat(),
            "run_id": self.config.run_id,
            "seed": seed,
            "format": self.config.output_format,
            "schema": str(self.config.schema_path) if self.config.schema_path else None,
            "tables": {result.table: result.to_dict() for result in results},
        }

        manifest_path = self.output_dir / "manifest.json"
        try:
            with open(manifest_path, "w") as f:
                json.dump(manifest, f, indent=2, default=str)
        except OSError as exc:
            raise OutputError(f"cannot write {manifest_path}: {exc}") from exc

        logger.info(f"Wrote manifest to {manifest_path}")
        return manifest_path
