"""CSV sink: header from the first row, flushed through pandas in batches."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

import pandas as pd

from mocksmith.errors import CancelledError
from mocksmith.output.base import Emitter, format_csv_value


class CsvEmitter(Emitter):
    """
    Writes ``{table}.csv``.

    The header is the key order of the first row. Later rows map missing
    columns to the empty string and drop keys the header does not name.
    Every cell is rendered to text before it reaches pandas so that
    booleans, nulls and nested values look the same in every batch.
    """

    extension = "csv"

    def _write(self, path: Path, rows: Iterable[Dict[str, Any]]) -> Tuple[int, List[str]]:
        header: List[str] = []
        batch: List[List[str]] = []
        count = 0

        with open(path, "w", newline="", encoding="utf-8") as f:
            def flush() -> None:
                frame = pd.DataFrame(batch, columns=header, dtype=object)
                frame.to_csv(f, index=False, header=count == len(batch), lineterminator="\n")
                batch.clear()

            try:
                for row in rows:
                    if not header:
                        header = list(row.keys())
                    batch.append([format_csv_value(row.get(name)) for name in header])
                    count += 1
                    if len(batch) >= self.batch_size:
                        flush()
            except CancelledError:
                if batch:
                    flush()
                raise

            if batch:
                flush()

        return count, header
