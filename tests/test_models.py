"""Tests for core data models."""

import pytest

from mocksmith.errors import InternalError, SchemaError
from mocksmith.models import (
    Column,
    ForeignRef,
    GeneratorInfo,
    ParameterDef,
    ParamType,
    Relationship,
    Schema,
    Table,
)


def make_schema(edges, names=None, relationships=True):
    """
    Schema with one ``id`` PK per table and one FK column per (child, parent) edge.

    With ``relationships=False`` the edges live only on the foreign columns.
    """
    names = names or sorted({t for edge in edges for t in edge})
    tables = {name: Table(name=name, columns=[Column(name="id", generator="uuid", is_primary_key=True)])
              for name in names}
    schema = Schema(tables=list(tables.values()))
    for child, parent in edges:
        column = f"{parent}_id"
        tables[child].columns.append(
            Column(name=column, generator="foreign", is_foreign=True, foreign_ref=ForeignRef(parent, "id"))
        )
        if relationships:
            schema.add_relationship(Relationship(child, column, parent, "id"))
    return schema


class TestParameterDef:
    """Tests for ParameterDef."""

    def test_parse_type_spellings(self):
        assert ParamType.parse("string_slice") == ParamType.STRING_LIST
        assert ParamType.parse("String-List") == ParamType.STRING_LIST
        assert ParamType.parse("int") == ParamType.INT

    def test_type_from_string(self):
        param = ParameterDef("count", "int", default=3)
        assert param.type == ParamType.INT

    def test_select_requires_options(self):
        with pytest.raises(InternalError):
            ParameterDef("mode", ParamType.SELECT)

    def test_float_bounds_normalized(self):
        param = ParameterDef("ratio", ParamType.FLOAT, min=0, max=1)
        assert param.min == 0.0 and isinstance(param.min, float)

    def test_bounds_rejected_on_strings(self):
        with pytest.raises(InternalError):
            ParameterDef("name", ParamType.STRING, min=1)

    def test_serialization(self):
        param = ParameterDef("format", ParamType.SELECT, "Output format", default="json",
                             options=["json", "text"])
        restored = ParameterDef.from_dict(param.to_dict())
        assert restored == param


class TestGeneratorInfo:
    """Tests for GeneratorInfo."""

    def test_duplicate_parameter(self):
        with pytest.raises(InternalError):
            GeneratorInfo("base", "x", parameters=[
                ParameterDef("a", ParamType.INT),
                ParameterDef("a", ParamType.INT),
            ])

    def test_reserved_parameter(self):
        with pytest.raises(InternalError):
            GeneratorInfo("base", "x", parameters=[ParameterDef("_rand", ParamType.INT)])

    def test_get_parameter(self):
        info = GeneratorInfo("base", "x", parameters=[ParameterDef("a", ParamType.INT)])
        assert info.get_parameter("a").name == "a"
        assert info.get_parameter("b") is None


class TestColumnAndTable:
    """Tests for Column and Table."""

    def test_foreign_column_needs_reference(self):
        with pytest.raises(SchemaError):
            Column(name="user_id", is_foreign=True)

    def test_foreign_ref_key(self):
        assert ForeignRef("users", "id").key == "users.id"

    def test_total_rows_covers_seed_rows(self):
        table = Table(name="t", columns=[Column(name="id")], row_count=2,
                      seed_rows=[{"id": 1}, {"id": 2}, {"id": 3}])
        assert table.total_rows == 3

    def test_primary_and_fk_columns(self):
        schema = make_schema([("orders", "users")])
        orders = schema.get_table("orders")
        assert orders.get_primary_key().name == "id"
        assert [c.name for c in orders.get_fk_columns()] == ["users_id"]

    def test_serialization(self):
        schema = make_schema([("orders", "users")])
        schema.tables[0].seed_rows.append({"id": "x"})
        restored = Schema.from_dict(schema.to_dict())
        assert restored.to_dict() == schema.to_dict()
        assert restored.get_table("orders").get_column("users_id").foreign_ref == ForeignRef("users", "id")


class TestDependencyOrder:
    """Tests for the FK graph ordering."""

    def test_parents_first(self):
        schema = make_schema([("orders", "users"), ("items", "orders"), ("items", "products")])
        order = schema.dependency_order()
        assert order.index("users") < order.index("orders") < order.index("items")
        assert order.index("products") < order.index("items")

    def test_ties_broken_by_name(self):
        schema = make_schema([], names=["zeta", "alpha", "mid"])
        assert schema.dependency_order() == ["alpha", "mid", "zeta"]

    def test_cycle_named(self):
        schema = make_schema([("a", "b"), ("b", "a")])
        with pytest.raises(SchemaError) as exc_info:
            schema.dependency_order()
        assert "a -> b -> a" in exc_info.value.message

    def test_self_reference_is_cycle(self):
        schema = make_schema([("node", "node")])
        with pytest.raises(SchemaError) as exc_info:
            schema.dependency_order()
        assert "node -> node" in exc_info.value.message

    def test_parent_and_child_lookup(self):
        schema = make_schema([("orders", "users")])
        assert schema.get_parent_tables("orders") == ["users"]
        assert schema.get_child_tables("users") == ["orders"]

    def test_reference_targets(self):
        schema = make_schema([("orders", "users")])
        users = schema.get_table("users")
        users.columns.append(Column(name="email"))
        schema.get_table("orders").columns.append(
            Column(name="user_email", is_foreign=True, foreign_ref=ForeignRef("users", "email"))
        )
        schema.add_relationship(Relationship("orders", "user_email", "users", "email"))
        assert schema.reference_targets("users") == ["id", "email"]
        assert schema.reference_targets("missing") == []


class TestForeignColumnsWithoutRelationships:
    """Foreign columns count as edges even when no relationship lists them."""

    def test_order(self):
        schema = make_schema([("orders", "users"), ("items", "orders")], relationships=False)
        assert schema.relationships == []
        assert schema.dependency_order() == ["users", "orders", "items"]

    def test_parent_and_child_lookup(self):
        schema = make_schema([("orders", "users")], relationships=False)
        assert schema.get_parent_tables("orders") == ["users"]
        assert schema.get_child_tables("users") == ["orders"]

    def test_cycle(self):
        schema = make_schema([("a", "b"), ("b", "a")], relationships=False)
        with pytest.raises(SchemaError, match="a -> b -> a"):
            schema.dependency_order()

    def test_non_key_reference_target(self):
        schema = make_schema([], names=["orders", "users"])
        schema.get_table("users").columns.append(Column(name="email"))
        schema.get_table("orders").columns.append(
            Column(name="user_email", is_foreign=True, foreign_ref=ForeignRef("users", "email"))
        )
        assert schema.reference_targets("users") == ["id", "email"]

    def test_foreign_keys_not_duplicated(self):
        schema = make_schema([("orders", "users")])
        assert schema.foreign_keys() == [Relationship("orders", "users_id", "users", "id")]

    def test_from_dict_without_relationships(self):
        data = make_schema([("orders", "users")]).to_dict()
        del data["relationships"]
        assert Schema.from_dict(data).dependency_order() == ["users", "orders"]
