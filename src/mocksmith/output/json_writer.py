"""JSON sink: a pretty-printed array of row objects, written row by row."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from mocksmith.errors import CancelledError
from mocksmith.output.base import Emitter, json_default


class JsonEmitter(Emitter):
    extension = "json"

    def _write(self, path: Path, rows: Iterable[Dict[str, Any]]) -> Tuple[int, List[str]]:
        columns: List[str] = []
        count = 0

        with open(path, "w", encoding="utf-8") as f:
            f.write("[")
            try:
                for row in rows:
                    if not columns:
                        columns = list(row.keys())
                    text = json.dumps(row, indent=2, ensure_ascii=False, default=json_default)
                    f.write(",\n" if count else "\n")
                    f.write(textwrap.indent(text, "  "))
                    count += 1
            except CancelledError:
                f.write("\n]\n" if count else "]\n")
                raise
            f.write("\n]\n" if count else "]\n")

        return count, columns
