"""PostgreSQL-flavoured producers, rendered as Postgres input literals."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, List, Mapping, Tuple

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import (
    bounds,
    coordinate,
    faker,
    fmt_coord,
    geometry_params,
    moment_in,
    random_bytes,
    rng,
    window,
)
from mocksmith.producers.vocabularies import TSVECTOR_LEXEMES

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder

RANGE_KINDS = ["int4range", "int8range", "numrange", "daterange", "tsrange", "tstzrange"]

Point = Tuple[float, float]


def _point(params: Mapping[str, Any]) -> Point:
    return coordinate(params), coordinate(params)


def _pair(point: Point) -> str:
    return f"({fmt_coord(point[0])},{fmt_coord(point[1])})"


def _points(params: Mapping[str, Any], low: int, high: int) -> List[Point]:
    count = rng(params).randint(low, high)
    return [_point(params) for _ in range(count)]


def generate_point(params: Mapping[str, Any]) -> str:
    return _pair(_point(params))


def generate_line(params: Mapping[str, Any]) -> str:
    """Infinite line ``{A,B,C}`` for ``Ax + By + C = 0``; A and B are never both zero."""
    a, b, c = coordinate(params), coordinate(params), coordinate(params)
    if a == 0 and b == 0:
        b = 1.0
    return "{" + ",".join(fmt_coord(v) for v in (a, b, c)) + "}"


def generate_lseg(params: Mapping[str, Any]) -> str:
    return f"[{_pair(_point(params))},{_pair(_point(params))}]"


def generate_box(params: Mapping[str, Any]) -> str:
    """Box as upper-right corner followed by lower-left corner."""
    (x1, y1), (x2, y2) = _point(params), _point(params)
    upper = (max(x1, x2), max(y1, y2))
    lower = (min(x1, x2), min(y1, y2))
    return f"{_pair(upper)},{_pair(lower)}"


def generate_path(params: Mapping[str, Any]) -> str:
    body = ",".join(_pair(p) for p in _points(params, 2, 6))
    if params["closed"]:
        return f"({body})"
    return f"[{body}]"


def generate_polygon(params: Mapping[str, Any]) -> str:
    return "(" + ",".join(_pair(p) for p in _points(params, 3, 6)) + ")"


def generate_circle(params: Mapping[str, Any]) -> str:
    low, high = bounds(params)
    radius = round(0.01 + rng(params).random() * max(high - low, 0.01) / 2, 2)
    return f"<{_pair(_point(params))},{fmt_coord(radius)}>"


def generate_range(params: Mapping[str, Any]) -> str:
    """Half-open range ``[lo,hi)`` of the requested kind."""
    kind = params["kind"]
    rand = rng(params)
    if kind in ("daterange", "tsrange", "tstzrange"):
        start, end = window(params)
        lo = moment_in(params, start, end)
        hi = lo + timedelta(seconds=rand.randint(1, 30 * 86400))
        if kind == "daterange":
            if hi.date() == lo.date():
                hi += timedelta(days=1)
            return f"[{lo.date().isoformat()},{hi.date().isoformat()})"
        if kind == "tsrange":
            fmt = "%Y-%m-%d %H:%M:%S"
            return f'["{lo.strftime(fmt)}","{hi.strftime(fmt)}")'
        fmt = "%Y-%m-%d %H:%M:%S+00"
        return f'["{lo.strftime(fmt)}","{hi.strftime(fmt)}")'

    low, high = bounds(params)
    if kind == "numrange":
        lo = round(low + rand.random() * (high - low), 2)
        hi = round(lo + rand.random() * (high - lo), 2)
        if hi <= lo:
            hi = round(lo + 0.01, 2)
        return f"[{lo:.2f},{hi:.2f})"

    lo = rand.randint(int(low), int(high))
    hi = rand.randint(lo, int(high)) + 1
    return f"[{lo},{hi})"


def generate_hstore(params: Mapping[str, Any]) -> str:
    low, high = bounds(params, "min_pairs", "max_pairs")
    rand = rng(params)
    keys = rand.sample(TSVECTOR_LEXEMES, min(rand.randint(low, high), len(TSVECTOR_LEXEMES)))
    fake = faker(params)
    return ", ".join(f'"{key}"=>"{fake.word()}"' for key in keys)


def generate_tsvector(params: Mapping[str, Any]) -> str:
    """Sorted lexemes with positions, as Postgres prints them."""
    rand = rng(params)
    count = min(params["word_count"], len(TSVECTOR_LEXEMES))
    words = rand.sample(TSVECTOR_LEXEMES, count)
    positions = {word: index + 1 for index, word in enumerate(words)}
    return " ".join(f"'{word}':{positions[word]}" for word in sorted(words))


def generate_tsquery(params: Mapping[str, Any]) -> str:
    rand = rng(params)
    words = rand.sample(TSVECTOR_LEXEMES, min(params["word_count"], len(TSVECTOR_LEXEMES)))
    parts = [f"'{words[0]}'"]
    for word in words[1:]:
        operator = rand.choice(["&", "|", "& !"])
        parts.append(f"{operator} '{word}'")
    return " ".join(parts)


def generate_bit(params: Mapping[str, Any]) -> str:
    length = params["length"]
    return format(rng(params).getrandbits(length), f"0{length}b")


def generate_bytea(params: Mapping[str, Any]) -> str:
    return "\\x" + random_bytes(params, params["size"]).hex()


def generate_interval(params: Mapping[str, Any]) -> str:
    rand = rng(params)
    days = rand.randint(0, 365)
    seconds = rand.randrange(86400)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{days} days {hours:02d}:{minutes:02d}:{secs:02d}"


def register(builder: EngineBuilder) -> None:
    geometry = geometry_params()
    builder.add(GeneratorInfo("base", "postgres_point", "Postgres point", "(1.50,2.25)", geometry),
                generate_point)
    builder.add(GeneratorInfo("base", "postgres_line", "Postgres line {A,B,C}", "{1.00,-1.00,0.00}",
                              geometry_params()),
                generate_line)
    builder.add(GeneratorInfo("base", "postgres_lseg", "Postgres line segment",
                              "[(1.00,2.00),(3.00,4.00)]", geometry_params()),
                generate_lseg)
    builder.add(GeneratorInfo("base", "postgres_box", "Postgres box", "(3.00,4.00),(1.00,2.00)",
                              geometry_params()),
                generate_box)
    builder.add(
        GeneratorInfo(
            "base", "postgres_path", "Postgres path, open or closed", "[(1.00,2.00),(3.00,4.00)]",
            [*geometry_params(), ParameterDef("closed", ParamType.BOOL, "Closed path", default=False)],
        ),
        generate_path,
    )
    builder.add(GeneratorInfo("base", "postgres_polygon", "Postgres polygon",
                              "((0.00,0.00),(1.00,0.00),(0.00,1.00))", geometry_params()),
                generate_polygon)
    builder.add(GeneratorInfo("base", "postgres_circle", "Postgres circle", "<(1.00,2.00),3.00>",
                              geometry_params()),
                generate_circle)
    builder.add(
        GeneratorInfo(
            "base", "postgres_range", "Postgres range literal [lo,hi)", "[10,20)",
            [
                ParameterDef("kind", ParamType.SELECT, "Range type", default="int4range",
                             options=RANGE_KINDS),
                ParameterDef("min", ParamType.FLOAT, "Lower bound for numeric ranges", default=0.0),
                ParameterDef("max", ParamType.FLOAT, "Upper bound for numeric ranges", default=1000.0),
                ParameterDef("start_date", ParamType.STRING, "Window start for date/time ranges"),
                ParameterDef("end_date", ParamType.STRING, "Window end for date/time ranges"),
            ],
        ),
        generate_range,
    )
    builder.add(
        GeneratorInfo(
            "base", "postgres_hstore", "Postgres hstore key/value text", '"key"=>"value"',
            [
                ParameterDef("min_pairs", ParamType.INT, "Minimum pairs", default=1, min=0),
                ParameterDef("max_pairs", ParamType.INT, "Maximum pairs", default=4, min=0),
            ],
        ),
        generate_hstore,
    )
    builder.add(
        GeneratorInfo(
            "base", "postgres_tsvector", "Postgres tsvector", "'data':2 'seed':1",
            [ParameterDef("word_count", ParamType.INT, "Number of lexemes", default=3, min=1, max=15)],
        ),
        generate_tsvector,
    )
    builder.add(
        GeneratorInfo(
            "base", "postgres_tsquery", "Postgres tsquery", "'data' & 'seed'",
            [ParameterDef("word_count", ParamType.INT, "Number of lexemes", default=2, min=1, max=15)],
        ),
        generate_tsquery,
    )
    builder.add(
        GeneratorInfo(
            "base", "postgres_bit", "Postgres bit string", "10110010",
            [ParameterDef("length", ParamType.INT, "Number of bits", default=8, min=1, max=1024)],
        ),
        generate_bit,
    )
    builder.add(
        GeneratorInfo(
            "base", "postgres_bytea", "Postgres bytea in hex format", "\\xdeadbeef",
            [ParameterDef("size", ParamType.INT, "Number of bytes", default=16, min=0, max=1048576)],
        ),
        generate_bytea,
    )
    builder.add(GeneratorInfo("base", "postgres_interval", "Postgres interval", "3 days 04:05:06"),
                generate_interval)
