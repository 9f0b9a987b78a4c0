"""
Helpers shared by producer modules.

Producers receive only their validated parameter map. The engine-owned
objects they need (random source, Faker, producer state, reference lookup,
nested context) are read back out of it here.
"""

from __future__ import annotations

import json
import random
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from faker import Faker

from mocksmith.errors import ValidationError
from mocksmith.models import ParameterDef, ParamType

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
HEX_DIGITS = "0123456789abcdef"

COMPOSITE_FORMATS = ["json", "text"]


def rng(params: Mapping[str, Any]) -> random.Random:
    return params["_rand"]


def faker(params: Mapping[str, Any]) -> Faker:
    """Return the engine's Faker, re-seeded from the engine random source."""
    fake = params["_faker"]
    fake.seed_instance(rng(params).getrandbits(64))
    return fake


def reference_time(params: Mapping[str, Any]) -> datetime:
    return params["_state"].reference_time


def pick(params: Mapping[str, Any], values: Sequence[Any]) -> Any:
    return rng(params).choice(values)


def invalid(parameter: str, message: str) -> ValidationError:
    """Build a ValidationError for a producer-level check."""
    return ValidationError(message, parameter=parameter)


def bounds(
    params: Mapping[str, Any],
    low_key: str = "min",
    high_key: str = "max",
) -> Tuple[Any, Any]:
    """Read an inclusive ``(low, high)`` pair, rejecting inverted bounds."""
    low, high = params[low_key], params[high_key]
    if low > high:
        raise invalid(low_key, f"{low_key} ({low}) is greater than {high_key} ({high})")
    return low, high


def random_string(params: Mapping[str, Any], length: int, charset: str) -> str:
    rand = rng(params)
    return "".join(rand.choice(charset) for _ in range(length))


def random_bytes(params: Mapping[str, Any], size: int) -> bytes:
    if size <= 0:
        return b""
    return rng(params).getrandbits(size * 8).to_bytes(size, "big")


def stable_json(value: Any) -> str:
    """Compact JSON with sorted keys, so equal values render identically."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def render_composite(params: Mapping[str, Any], data: Dict[str, Any], summary: str) -> str:
    if params.get("format", "json") == "text":
        return summary
    return stable_json(data)


def parse_moment(params: Mapping[str, Any], key: str) -> Optional[datetime]:
    """Parse an ISO date or datetime parameter; empty means unset."""
    raw = params.get(key)
    if not raw:
        return None
    text = str(raw).strip()
    try:
        if len(text) == 10:
            day = date.fromisoformat(text)
            return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise invalid(key, f"'{raw}' is not an ISO date or datetime") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def window(
    params: Mapping[str, Any],
    start_key: str = "start_date",
    end_key: str = "end_date",
) -> Tuple[datetime, datetime]:
    """Time window, defaulting to the year before the reference time."""
    now = reference_time(params)
    start = parse_moment(params, start_key)
    end = parse_moment(params, end_key)
    if end is None:
        end = now if start is None or start <= now else start + timedelta(days=365)
    if start is None:
        start = end - timedelta(days=365)
    if start > end:
        raise invalid(start_key, f"{start_key} is after {end_key}")
    return start, end


def moment_in(params: Mapping[str, Any], start: datetime, end: datetime) -> datetime:
    """Uniformly random instant in ``[start, end)`` at microsecond resolution."""
    span = int((end - start).total_seconds() * 1_000_000)
    if span <= 0:
        return start
    return start + timedelta(microseconds=rng(params).randrange(span))


def case_params(
    *,
    capitalize: bool = False,
    lowercase: bool = False,
    affixes: bool = True,
) -> List[ParameterDef]:
    """Declarations of the post-transform parameters for string producers."""
    defs = [
        ParameterDef("uppercase", ParamType.BOOL, "Convert to uppercase", default=False),
        ParameterDef("lowercase", ParamType.BOOL, "Convert to lowercase", default=lowercase),
        ParameterDef(
            "capitalize", ParamType.BOOL, "Capitalize the first letter of each word",
            default=capitalize,
        ),
    ]
    if affixes:
        defs.append(ParameterDef("prefix", ParamType.STRING, "Text to prepend"))
        defs.append(ParameterDef("suffix", ParamType.STRING, "Text to append"))
    return defs


def format_param(default: str = "json") -> ParameterDef:
    return ParameterDef(
        "format",
        ParamType.SELECT,
        "Output format",
        default=default,
        options=list(COMPOSITE_FORMATS),
    )


def coordinate(params: Mapping[str, Any]) -> float:
    """One coordinate in ``[min, max)``, rounded to two decimals."""
    low, high = bounds(params)
    return round(low + rng(params).random() * (high - low), 2)


def fmt_coord(value: float) -> str:
    return f"{value:.2f}"


def geometry_params(low: float = -100.0, high: float = 100.0) -> List[ParameterDef]:
    return [
        ParameterDef("min", ParamType.FLOAT, "Minimum coordinate", default=low),
        ParameterDef("max", ParamType.FLOAT, "Maximum coordinate", default=high),
    ]
