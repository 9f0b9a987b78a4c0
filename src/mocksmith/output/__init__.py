"""Output emitters for seeded tables."""

from mocksmith.output.base import EmitResult, Emitter, format_csv_value, format_sql_value
from mocksmith.output.csv_writer import CsvEmitter
from mocksmith.output.json_writer import JsonEmitter
from mocksmith.output.sql_writer import SqlEmitter, insert_statement
from mocksmith.output.writer import EMITTERS, OutputWriter, get_emitter

__all__ = [
    "CsvEmitter",
    "EMITTERS",
    "EmitResult",
    "Emitter",
    "JsonEmitter",
    "OutputWriter",
    "SqlEmitter",
    "format_csv_value",
    "format_sql_value",
    "get_emitter",
    "insert_statement",
]
