"""Numeric and commerce producers."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_EVEN, Context, Decimal
from typing import TYPE_CHECKING, Any, Mapping

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import bounds, case_params, faker, pick, rng
from mocksmith.producers.vocabularies import (
    CURRENCY_CODES,
    PRODUCT_ADJECTIVES,
    PRODUCT_MATERIALS,
    PRODUCT_NOUNS,
)

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


_WIDE = Context(prec=100)


def uniform_float(params: Mapping[str, Any], low: float, high: float, precision: int) -> float:
    """Float in ``[low, high)`` rounded to ``precision`` places when rounding keeps it inside."""
    if low == high:
        return low
    value = low + rng(params).random() * (high - low)
    rounded = round(value, precision)
    if low <= rounded < high:
        return rounded
    # the unrounded sum can land on high itself
    return min(value, math.nextafter(high, low))


def quantize(value: float, precision: int) -> Decimal:
    exponent = Decimal(1).scaleb(-precision)
    return Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_EVEN, context=_WIDE)


def generate_number(params: Mapping[str, Any]) -> int:
    low, high = bounds(params)
    return rng(params).randint(low, high)


def generate_float(params: Mapping[str, Any]) -> float:
    low, high = bounds(params)
    return uniform_float(params, low, high, params["precision"])


def generate_price(params: Mapping[str, Any]) -> float:
    low, high = bounds(params)
    return uniform_float(params, low, high, 2)


def generate_decimal(params: Mapping[str, Any]) -> str:
    low, high = bounds(params)
    precision = params["precision"]
    value = low + rng(params).random() * (high - low)
    return str(quantize(value, precision))


def generate_boolean(params: Mapping[str, Any]) -> bool:
    return rng(params).random() < 0.5


def generate_credit_card(params: Mapping[str, Any]) -> str:
    return faker(params).credit_card_number()


def generate_currency(params: Mapping[str, Any]) -> str:
    return pick(params, CURRENCY_CODES)


def generate_product(params: Mapping[str, Any]) -> str:
    return " ".join((
        pick(params, PRODUCT_ADJECTIVES),
        pick(params, PRODUCT_MATERIALS),
        pick(params, PRODUCT_NOUNS),
    ))


def _int_range(default_min: int = 0, default_max: int = 100):
    return [
        ParameterDef("min", ParamType.INT, "Minimum value", default=default_min),
        ParameterDef("max", ParamType.INT, "Maximum value", default=default_max),
    ]


def _float_range(default_min: float, default_max: float):
    return [
        ParameterDef("min", ParamType.FLOAT, "Minimum value", default=default_min),
        ParameterDef("max", ParamType.FLOAT, "Maximum value", default=default_max),
    ]


def _precision(default: int = 2):
    return ParameterDef("precision", ParamType.INT, "Decimal places", default=default, min=0, max=10)


def register(builder: EngineBuilder) -> None:
    builder.add(
        GeneratorInfo("base", "number", "Random integer in [min, max]", 42, _int_range()),
        generate_number,
    )
    builder.add(
        GeneratorInfo("base", "random_int", "Random integer in [min, max]", 7, _int_range()),
        generate_number,
    )
    builder.add(
        GeneratorInfo(
            "base", "float", "Random float in [min, max)", 42.5,
            [*_float_range(0.0, 100.0), _precision()],
        ),
        generate_float,
    )
    builder.add(
        GeneratorInfo("base", "price", "Random price with two decimals", 19.99,
                      _float_range(1.0, 1000.0)),
        generate_price,
    )
    builder.add(
        GeneratorInfo(
            "base", "decimal", "Exact decimal rendered as text", "123.45",
            [*_float_range(0.0, 1000.0), _precision()],
        ),
        generate_decimal,
    )
    builder.add(
        GeneratorInfo("base", "boolean", "Random boolean", True),
        generate_boolean,
    )
    builder.add(
        GeneratorInfo("base", "credit_card", "Random credit card number", "4111111111111111"),
        generate_credit_card,
    )
    builder.add(
        GeneratorInfo("base", "currency", "ISO 4217 currency code", "USD", case_params()),
        generate_currency,
    )
    builder.add(
        GeneratorInfo("base", "product", "Random product name", "Sleek Steel Chair", case_params()),
        generate_product,
    )
