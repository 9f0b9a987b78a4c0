"""Enumerations, nulls, foreign references and aggregate producers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping

from mocksmith.errors import MissingReferenceError, SchemaError
from mocksmith.models import Column, GeneratorInfo, ParameterDef, ParamType
from mocksmith.params.coercion import to_text
from mocksmith.producers.common import bounds, case_params, invalid, rng

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


def generate_enum(params: Mapping[str, Any]) -> str:
    values = params["values"]
    if not values:
        raise invalid("values", "enum requires at least one value")
    return rng(params).choice(values)


def generate_null(params: Mapping[str, Any]) -> None:
    return None


def generate_foreign(params: Mapping[str, Any]) -> Any:
    """Uniform pick among the values recorded for ``table.column``."""
    key = f"{params['table']}.{params['column']}"
    values = params["_refs"].values(key)
    if not values:
        raise MissingReferenceError(
            f"no values recorded for {key}",
            table=params["table"],
            column=params["column"],
        )
    return rng(params).choice(values)


def _as_columns(fields: Any) -> List[Column]:
    if not isinstance(fields, (list, tuple)):
        raise invalid("fields", "fields must be a list of column definitions")
    columns = []
    for field in fields:
        if isinstance(field, Column):
            columns.append(field)
        elif isinstance(field, dict) and field.get("name"):
            try:
                columns.append(Column.from_dict(field))
            except SchemaError as exc:
                raise invalid("fields", exc.message) from exc
        else:
            raise invalid("fields", f"invalid nested field definition: {field!r}")
    return columns


def generate_embedded_document(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Nested document built from ``fields``; empty when none are given."""
    fields = params.get("fields")
    if not fields:
        return {}
    return params["_nested"].document(_as_columns(fields))


def generate_array_of_strings(params: Mapping[str, Any]) -> List[str]:
    low, high = bounds(params, "min_count", "max_count")
    target = params["nested_generator"]
    industry = params["nested_industry"]
    if "/" in target:
        industry, target = target.split("/", 1)

    count = rng(params).randint(low, high)
    nested = params["_nested"]
    result = []
    for _ in range(count):
        value = nested.value(industry, target)
        result.append(value if isinstance(value, str) else to_text(value))
    return result


def register(builder: EngineBuilder) -> None:
    builder.add(
        GeneratorInfo(
            "base", "enum", "Uniform pick from a list of values", "active",
            [
                ParameterDef("values", ParamType.STRING_LIST, "Values to choose from",
                             required=True, example=["active", "inactive", "pending"]),
                *case_params(),
            ],
        ),
        generate_enum,
    )
    builder.add(GeneratorInfo("base", "null", "Always null", None), generate_null)
    builder.add(
        GeneratorInfo(
            "base", "foreign", "Value previously produced for another table's column", "u-1",
            [
                ParameterDef("table", ParamType.STRING, "Referenced table", required=True),
                ParameterDef("column", ParamType.STRING, "Referenced column", required=True),
            ],
        ),
        generate_foreign,
    )
    builder.add(
        GeneratorInfo("base", "embedded_document", "Nested document built from nested fields", {}),
        generate_embedded_document,
    )
    builder.add(
        GeneratorInfo(
            "base", "array_of_strings", "List of strings produced by another generator",
            ["alpha", "beta"],
            [
                ParameterDef("min_count", ParamType.INT, "Minimum number of elements", default=1, min=0),
                ParameterDef("max_count", ParamType.INT, "Maximum number of elements", default=5, min=0),
                ParameterDef("nested_generator", ParamType.STRING,
                             "Generator for each element, optionally as industry/name",
                             default="word", example="health/allergy"),
                ParameterDef("nested_industry", ParamType.STRING, "Industry of the nested generator",
                             default="base"),
            ],
        ),
        generate_array_of_strings,
    )
