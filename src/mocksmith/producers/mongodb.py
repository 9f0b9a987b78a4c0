"""
MongoDB-flavoured producers.

BSON-only types are returned in MongoDB Extended JSON (canonical) form so
they survive every emitter as plain mappings.
"""

from __future__ import annotations

import base64
import hashlib
import uuid
from typing import TYPE_CHECKING, Any, Dict, Mapping

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import bounds, moment_in, pick, random_bytes, rng, window
from mocksmith.producers.numeric import quantize
from mocksmith.producers.vocabularies import (
    MONGO_BINARY_SUBTYPES,
    MONGO_JS_FUNCTIONS,
    MONGO_REGEX_OPTIONS,
    MONGO_REGEX_PATTERNS,
)

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


def generate_decimal128(params: Mapping[str, Any]) -> Dict[str, str]:
    low, high = bounds(params)
    value = low + rng(params).random() * (high - low)
    return {"$numberDecimal": str(quantize(value, params["precision"]))}


def binary_payload(params: Mapping[str, Any], subtype: str, size: int) -> bytes:
    if subtype == "uuid":
        return uuid.UUID(int=rng(params).getrandbits(128), version=4).bytes
    if subtype == "md5":
        return hashlib.md5(random_bytes(params, 32)).digest()
    return random_bytes(params, size)


def generate_binary(params: Mapping[str, Any]) -> Dict[str, Dict[str, str]]:
    """Binary with the subtype byte and payload length matching ``subtype``."""
    subtype = params["subtype"]
    code, _ = MONGO_BINARY_SUBTYPES[subtype]
    data = binary_payload(params, subtype, params["size"])
    return {
        "$binary": {
            "base64": base64.b64encode(data).decode("ascii"),
            "subType": f"{code:02x}",
        }
    }


def generate_timestamp(params: Mapping[str, Any]) -> Dict[str, Dict[str, int]]:
    start, end = window(params)
    seconds = int(moment_in(params, start, end).timestamp())
    increment = rng(params).randint(1, 2**31 - 1)
    return {"$timestamp": {"t": seconds, "i": increment}}


def generate_regex(params: Mapping[str, Any]) -> Dict[str, Dict[str, str]]:
    return {
        "$regularExpression": {
            "pattern": pick(params, MONGO_REGEX_PATTERNS),
            "options": pick(params, MONGO_REGEX_OPTIONS),
        }
    }


def generate_javascript(params: Mapping[str, Any]) -> str:
    return pick(params, MONGO_JS_FUNCTIONS)


def register(builder: EngineBuilder) -> None:
    builder.add(
        GeneratorInfo(
            "base", "mongodb_decimal128", "MongoDB Decimal128 rounded to a precision",
            {"$numberDecimal": "1234.56"},
            [
                ParameterDef("min", ParamType.FLOAT, "Minimum value", default=0.0),
                ParameterDef("max", ParamType.FLOAT, "Maximum value", default=1000000.0),
                ParameterDef("precision", ParamType.INT, "Decimal places", default=2, min=0, max=10),
            ],
        ),
        generate_decimal128,
    )
    builder.add(
        GeneratorInfo(
            "base", "mongodb_binary", "MongoDB Binary value",
            {"$binary": {"base64": "AAECAwQFBgcICQoLDA0ODw==", "subType": "00"}},
            [
                ParameterDef("subtype", ParamType.SELECT, "Binary subtype", default="generic",
                             options=list(MONGO_BINARY_SUBTYPES)),
                ParameterDef("size", ParamType.INT, "Payload size in bytes for generic and user_defined",
                             default=16, min=0, max=1048576),
            ],
        ),
        generate_binary,
    )
    builder.add(
        GeneratorInfo("base", "mongodb_timestamp", "MongoDB internal timestamp",
                      {"$timestamp": {"t": 1710513000, "i": 1}}),
        generate_timestamp,
    )
    builder.add(
        GeneratorInfo("base", "mongodb_regex", "MongoDB regular expression",
                      {"$regularExpression": {"pattern": "^\\d{10}$", "options": "i"}}),
        generate_regex,
    )
    builder.add(
        GeneratorInfo("base", "mongodb_javascript", "JavaScript function body",
                      "function(x) { return x * 2; }"),
        generate_javascript,
    )
