"""
mocksmith - Deterministic mock data generation

A catalog of named value producers behind a single seeded engine, and a
relational seeder that fills whole schemas with foreign-key consistent rows.

Features:
- Typed, validated producer parameters with declared defaults
- Reproducible output for a given seed, also across parallel workers
- Base, aviation, health and database-flavoured (MongoDB, PostgreSQL,
  MySQL, SQLite) producers
- Schema seeding in dependency order to CSV, JSON or SQL
"""

__version__ = "0.1.0"

from mocksmith.config import EngineConfig, SeedConfig
from mocksmith.errors import (
    CancelledError,
    CoercionError,
    GenerationError,
    InternalError,
    MissingReferenceError,
    MocksmithError,
    NotFoundError,
    OutputError,
    SchemaError,
    ValidationError,
)
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

# Engine and seeding
from mocksmith.engine import Engine, EngineBuilder, build_engine, generate_many
from mocksmith.schema import load_schema, parse_schema, validate_schema
from mocksmith.seeder import ForeignValueStore, ReferenceMemo, Seeder
from mocksmith.utils import SeedReport

__all__ = [
    # Configuration
    "EngineConfig",
    "SeedConfig",
    # Errors
    "CancelledError",
    "CoercionError",
    "GenerationError",
    "InternalError",
    "MissingReferenceError",
    "MocksmithError",
    "NotFoundError",
    "OutputError",
    "SchemaError",
    "ValidationError",
    # Models
    "Column",
    "ForeignRef",
    "GeneratorInfo",
    "ParameterDef",
    "ParamType",
    "Relationship",
    "Schema",
    "Table",
    # Engine and seeding
    "Engine",
    "EngineBuilder",
    "ForeignValueStore",
    "ReferenceMemo",
    "SeedReport",
    "Seeder",
    "build_engine",
    "generate_many",
    "load_schema",
    "parse_schema",
    "validate_schema",
]
