"""Identifier producers: UUIDs, ObjectIds, key markers and counters."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Mapping

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import case_params, moment_in, rng, window

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder

# 100-ns intervals between the Gregorian epoch (1582-10-15) and the Unix epoch
_UUID_EPOCH_OFFSET = 0x01B21DD213814000


def generate_uuid(params: Mapping[str, Any]) -> str:
    rand = rng(params)
    if params.get("version") == "1":
        start, end = window(params)
        moment = moment_in(params, start, end)
        ticks = int(moment.timestamp() * 10_000_000) + _UUID_EPOCH_OFFSET
        clock_seq = rand.getrandbits(14)
        node = rand.getrandbits(48) | 0x010000000000  # multicast bit: not a real MAC
        value = uuid.UUID(fields=(
            ticks & 0xFFFFFFFF,
            (ticks >> 32) & 0xFFFF,
            ((ticks >> 48) & 0x0FFF) | 0x1000,
            ((clock_seq >> 8) & 0x3F) | 0x80,
            clock_seq & 0xFF,
            node,
        ))
        return str(value)
    return str(uuid.UUID(int=rand.getrandbits(128), version=4))


def object_id_hex(params: Mapping[str, Any]) -> str:
    """12-byte ObjectId: 4-byte big-endian seconds from the time window, 8 random bytes."""
    start, end = window(params)
    seconds = int(moment_in(params, start, end).timestamp())
    tail = rng(params).getrandbits(64)
    return f"{seconds & 0xFFFFFFFF:08x}{tail:016x}"


def object_id_time(hex_id: str) -> datetime:
    return datetime.fromtimestamp(int(hex_id[:8], 16), tz=timezone.utc)


def generate_objectid(params: Mapping[str, Any]) -> str:
    return object_id_hex(params)


def generate_minkey(params: Mapping[str, Any]) -> Dict[str, int]:
    return {"$minKey": 1}


def generate_maxkey(params: Mapping[str, Any]) -> Dict[str, int]:
    return {"$maxKey": 1}


def generate_autoincrement(params: Mapping[str, Any]) -> int:
    """Monotonic counter per ``sequence``; counters restart when the engine is reseeded."""
    key = params.get("sequence") or "autoincrement"
    return params["_state"].next_counter(key, params["start"], params["step"])


def register(builder: EngineBuilder) -> None:
    builder.add(
        GeneratorInfo(
            "base", "uuid", "Random UUID", "550e8400-e29b-41d4-a716-446655440000",
            [
                ParameterDef("version", ParamType.SELECT, "UUID version", default="4", options=["1", "4"]),
                *case_params(),
            ],
        ),
        generate_uuid,
    )
    builder.add(
        GeneratorInfo("base", "mongodb_objectid", "MongoDB ObjectId as 24 hex characters",
                      "507f1f77bcf86cd799439011"),
        generate_objectid,
    )
    builder.add(
        GeneratorInfo("base", "mongodb_minkey", "MongoDB MinKey marker", {"$minKey": 1}),
        generate_minkey,
    )
    builder.add(
        GeneratorInfo("base", "mongodb_maxkey", "MongoDB MaxKey marker", {"$maxKey": 1}),
        generate_maxkey,
    )
    builder.add(
        GeneratorInfo(
            "base", "autoincrement", "Monotonically increasing integer", 1,
            [
                ParameterDef("start", ParamType.INT, "First value", default=1),
                ParameterDef("step", ParamType.INT, "Increment between values", default=1, min=1),
                ParameterDef("sequence", ParamType.STRING, "Counter name; columns sharing it share values"),
            ],
        ),
        generate_autoincrement,
    )
