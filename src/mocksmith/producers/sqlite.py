"""SQLite textual encodings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import moment_in, random_bytes, rng, window

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


def generate_datetime(params: Mapping[str, Any]) -> str:
    start, end = window(params)
    return moment_in(params, start, end).strftime("%Y-%m-%d %H:%M:%S")


def generate_date(params: Mapping[str, Any]) -> str:
    start, end = window(params)
    return moment_in(params, start, end).strftime("%Y-%m-%d")


def generate_blob(params: Mapping[str, Any]) -> str:
    return random_bytes(params, params["size"]).hex().upper()


def generate_boolean(params: Mapping[str, Any]) -> int:
    return rng(params).randint(0, 1)


def register(builder: EngineBuilder) -> None:
    window_params = [
        ParameterDef("start_date", ParamType.STRING, "Window start (ISO date or datetime)"),
        ParameterDef("end_date", ParamType.STRING, "Window end (ISO date or datetime)"),
    ]
    builder.add(GeneratorInfo("base", "sqlite_datetime", "ISO-8601 datetime text",
                              "2024-03-15 14:30:00", list(window_params)),
                generate_datetime)
    builder.add(GeneratorInfo("base", "sqlite_date", "ISO-8601 date text", "2024-03-15",
                              list(window_params)),
                generate_date)
    builder.add(
        GeneratorInfo(
            "base", "sqlite_blob", "BLOB rendered as hex text", "DEADBEEF",
            [ParameterDef("size", ParamType.INT, "Number of bytes", default=16, min=0, max=1048576)],
        ),
        generate_blob,
    )
    builder.add(GeneratorInfo("base", "sqlite_boolean", "Boolean stored as 0 or 1", 1), generate_boolean)
