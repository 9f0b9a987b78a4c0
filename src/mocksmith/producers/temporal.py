"""Date and time producers. Windows default to the year before the engine's reference time."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import TYPE_CHECKING, Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import invalid, moment_in, rng, window

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


def _window_params():
    return [
        ParameterDef("start_date", ParamType.STRING, "Window start (ISO date or datetime)",
                     example="2024-01-01"),
        ParameterDef("end_date", ParamType.STRING, "Window end (ISO date or datetime)",
                     example="2024-12-31"),
    ]


def _zone(params: Mapping[str, Any]) -> tzinfo:
    name = params.get("timezone") or "UTC"
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise invalid("timezone", f"unknown timezone '{name}'") from exc


def _random_moment(params: Mapping[str, Any]) -> datetime:
    start, end = window(params)
    return moment_in(params, start, end)


def rfc3339(moment: datetime) -> str:
    if moment.utcoffset() is not None and moment.utcoffset().total_seconds() == 0:
        return moment.strftime("%Y-%m-%dT%H:%M:%SZ")
    return moment.isoformat(timespec="seconds")


def generate_date(params: Mapping[str, Any]) -> str:
    return _random_moment(params).strftime(params["format"])


def generate_datetime(params: Mapping[str, Any]) -> str:
    moment = _random_moment(params).astimezone(_zone(params))
    fmt = params.get("format")
    if fmt:
        return moment.strftime(fmt)
    return rfc3339(moment)


def generate_time(params: Mapping[str, Any]) -> str:
    rand = rng(params)
    return f"{rand.randrange(24):02d}:{rand.randrange(60):02d}:{rand.randrange(60):02d}"


def generate_timestamp(params: Mapping[str, Any]) -> int:
    return int(_random_moment(params).timestamp())


def register(builder: EngineBuilder) -> None:
    builder.add(
        GeneratorInfo(
            "base", "date", "Random date", "2024-03-15",
            [
                ParameterDef("format", ParamType.STRING, "strftime format", default="%Y-%m-%d"),
                *_window_params(),
            ],
        ),
        generate_date,
    )
    builder.add(
        GeneratorInfo(
            "base", "datetime", "Random datetime (RFC 3339 unless a format is given)",
            "2024-03-15T14:30:00Z",
            [
                ParameterDef("format", ParamType.STRING, "strftime format; empty for RFC 3339"),
                ParameterDef("timezone", ParamType.STRING, "IANA timezone name", default="UTC"),
                *_window_params(),
            ],
        ),
        generate_datetime,
    )
    builder.add(
        GeneratorInfo("base", "time", "Random time of day", "14:30:00"),
        generate_time,
    )
    builder.add(
        GeneratorInfo("base", "timestamp", "Random Unix timestamp in seconds", 1710513000,
                      _window_params()),
        generate_timestamp,
    )
