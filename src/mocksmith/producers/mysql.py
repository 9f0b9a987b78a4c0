"""MySQL-flavoured producers: spatial WKT, width-limited integers, decimals, year, enum and set."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import bounds, coordinate, fmt_coord, geometry_params, invalid, rng

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder

# bits per integer type
INTEGER_WIDTHS = {
    "tinyint": 8,
    "smallint": 16,
    "mediumint": 24,
    "int": 32,
    "bigint": 64,
}


def _xy(params: Mapping[str, Any]) -> str:
    return f"{fmt_coord(coordinate(params))} {fmt_coord(coordinate(params))}"


def generate_point(params: Mapping[str, Any]) -> str:
    return f"POINT({_xy(params)})"


def generate_linestring(params: Mapping[str, Any]) -> str:
    count = rng(params).randint(2, 6)
    return "LINESTRING(" + ", ".join(_xy(params) for _ in range(count)) + ")"


def generate_polygon(params: Mapping[str, Any]) -> str:
    """Single closed ring: the first vertex is repeated at the end."""
    count = rng(params).randint(3, 6)
    ring = [_xy(params) for _ in range(count)]
    ring.append(ring[0])
    return "POLYGON((" + ", ".join(ring) + "))"


def generate_multipoint(params: Mapping[str, Any]) -> str:
    count = rng(params).randint(2, 5)
    return "MULTIPOINT(" + ",".join(f"({_xy(params)})" for _ in range(count)) + ")"


def integer_producer(bits: int):
    def produce(params: Mapping[str, Any]) -> int:
        if params["unsigned"]:
            return rng(params).randint(0, 2**bits - 1)
        return rng(params).randint(-(2 ** (bits - 1)), 2 ** (bits - 1) - 1)
    return produce


def generate_decimal(params: Mapping[str, Any]) -> str:
    """DECIMAL(precision, scale) value rendered as text."""
    precision, scale = params["precision"], params["scale"]
    if scale > precision:
        raise invalid("scale", f"scale ({scale}) is greater than precision ({precision})")
    rand = rng(params)
    digits = rand.randrange(10**precision)
    sign = "-" if params["signed"] and rand.random() < 0.5 and digits else ""
    text = str(digits).rjust(scale + 1, "0")
    if scale:
        return f"{sign}{text[:-scale]}.{text[-scale:]}"
    return f"{sign}{text}"


def generate_double(params: Mapping[str, Any]) -> float:
    low, high = bounds(params)
    return low + rng(params).random() * (high - low)


def generate_year(params: Mapping[str, Any]) -> int:
    return rng(params).randint(1901, 2155)


def generate_enum(params: Mapping[str, Any]) -> str:
    options = params["values"]
    if not options:
        raise invalid("values", "enum requires at least one value")
    return rng(params).choice(options)


def generate_set(params: Mapping[str, Any]) -> str:
    """Non-empty subset of ``values`` kept in declaration order, comma separated."""
    options: List[str] = params["values"]
    if not options:
        raise invalid("values", "set requires at least one value")
    rand = rng(params)
    chosen = set(rand.sample(range(len(options)), rand.randint(1, len(options))))
    return ",".join(option for index, option in enumerate(options) if index in chosen)


def _values_param():
    return ParameterDef("values", ParamType.STRING_LIST, "Allowed values", required=True,
                        example=["small", "medium", "large"])


def register(builder: EngineBuilder) -> None:
    builder.add(GeneratorInfo("base", "mysql_point", "MySQL POINT in WKT", "POINT(1.00 2.00)",
                              geometry_params()),
                generate_point)
    builder.add(GeneratorInfo("base", "mysql_linestring", "MySQL LINESTRING in WKT",
                              "LINESTRING(0.00 0.00, 1.00 1.00)", geometry_params()),
                generate_linestring)
    builder.add(GeneratorInfo("base", "mysql_polygon", "MySQL POLYGON in WKT",
                              "POLYGON((0.00 0.00, 1.00 0.00, 0.00 1.00, 0.00 0.00))", geometry_params()),
                generate_polygon)
    builder.add(GeneratorInfo("base", "mysql_multipoint", "MySQL MULTIPOINT in WKT",
                              "MULTIPOINT((1.00 2.00),(3.00 4.00))", geometry_params()),
                generate_multipoint)

    for type_name, bits in INTEGER_WIDTHS.items():
        builder.add(
            GeneratorInfo(
                "base", f"mysql_{type_name}", f"MySQL {type_name.upper()} value", 42,
                [ParameterDef("unsigned", ParamType.BOOL, "Use the unsigned range", default=False)],
            ),
            integer_producer(bits),
        )

    builder.add(
        GeneratorInfo(
            "base", "mysql_decimal", "MySQL DECIMAL(precision, scale) as text", "12345.67",
            [
                ParameterDef("precision", ParamType.INT, "Total digits", default=10, min=1, max=65),
                ParameterDef("scale", ParamType.INT, "Digits after the point", default=2, min=0, max=30),
                ParameterDef("signed", ParamType.BOOL, "Allow negative values", default=False),
            ],
        ),
        generate_decimal,
    )
    builder.add(
        GeneratorInfo(
            "base", "mysql_double", "MySQL DOUBLE in [min, max)", 3.14159,
            [
                ParameterDef("min", ParamType.FLOAT, "Minimum value", default=0.0),
                ParameterDef("max", ParamType.FLOAT, "Maximum value", default=1000.0),
            ],
        ),
        generate_double,
    )
    builder.add(GeneratorInfo("base", "mysql_year", "MySQL YEAR (1901-2155)", 2024), generate_year)
    builder.add(GeneratorInfo("base", "mysql_enum", "MySQL ENUM value", "medium", [_values_param()]),
                generate_enum)
    builder.add(GeneratorInfo("base", "mysql_set", "MySQL SET value", "small,large", [_values_param()]),
                generate_set)
