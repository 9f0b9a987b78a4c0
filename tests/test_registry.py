"""Tests for the generator registry and the engine builder."""

import pytest

from mocksmith.config import EngineConfig
from mocksmith.engine import EngineBuilder, build_engine
from mocksmith.errors import InternalError, NotFoundError
from mocksmith.models import GeneratorInfo
from mocksmith.registry import GeneratorRegistry


def constant(params):
    return "constant"


class TestGeneratorRegistry:
    """Tests for GeneratorRegistry."""

    def test_register_and_lookup(self):
        registry = GeneratorRegistry()
        registry.register("base", "constant", constant)
        assert registry.lookup("base", "constant") is constant
        assert registry.has("base", "constant")
        assert not registry.has("base", "other")
        assert len(registry) == 1

    def test_unknown_industry(self):
        registry = GeneratorRegistry()
        with pytest.raises(NotFoundError) as exc_info:
            registry.lookup("space", "rocket")
        assert exc_info.value.kind == "not-found"
        assert exc_info.value.industry == "space"

    def test_unknown_generator_has_no_fallback(self):
        registry = GeneratorRegistry()
        registry.register("base", "word", constant)
        registry.register("aviation", "airport_code", constant)
        with pytest.raises(NotFoundError):
            registry.lookup("aviation", "word")

    def test_duplicate_registration(self):
        registry = GeneratorRegistry()
        registry.register("base", "constant", constant)
        with pytest.raises(InternalError):
            registry.register("base", "constant", constant)

    def test_non_callable(self):
        registry = GeneratorRegistry()
        with pytest.raises(InternalError):
            registry.register("base", "broken", "not a function")

    def test_closed_registry(self):
        registry = GeneratorRegistry()
        registry.close()
        assert registry.closed
        with pytest.raises(InternalError):
            registry.register("base", "late", constant)

    def test_listing_sorted(self):
        registry = GeneratorRegistry()
        registry.register("health", "b", constant)
        registry.register("base", "z", constant)
        registry.register("base", "a", constant)
        assert registry.list_industries() == ["base", "health"]
        assert registry.list_generators("base") == ["a", "z"]
        with pytest.raises(NotFoundError):
            registry.list_generators("space")


class TestEngineBuilder:
    """Tests for EngineBuilder."""

    def test_build_custom_engine(self):
        builder = EngineBuilder()
        builder.add(GeneratorInfo("custom", "constant", "Always the same"), constant)
        engine = builder.build(EngineConfig(seed=1))
        assert engine.generate("custom", "constant") == "constant"
        assert engine.list_industries() == ["custom"]
        assert engine.info("custom", "constant").description == "Always the same"

    def test_add_after_build(self):
        builder = EngineBuilder()
        builder.build(EngineConfig(seed=1))
        with pytest.raises(InternalError):
            builder.add(GeneratorInfo("custom", "late"), constant)

    def test_full_catalog(self):
        engine = build_engine(seed=1)
        assert engine.list_industries() == ["aviation", "base", "health"]
        base = engine.list_generators("base")
        for name in ("uuid", "email", "number", "enum", "foreign", "embedded_document",
                     "mongodb_objectid", "postgres_point", "mysql_tinyint", "sqlite_blob"):
            assert name in base
        assert "medical_record" in engine.list_generators("health")
        assert "flight_info" in engine.list_generators("aviation")

    def test_catalog_matches_registry(self):
        engine = build_engine(seed=1)
        catalog = engine.catalog()
        for industry in engine.list_industries():
            assert list(catalog[industry]) == engine.list_generators(industry)
