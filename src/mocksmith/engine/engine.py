"""
Generation kernel.

An Engine owns one deterministic random source and resolves every
``generate`` call through the registry and the parameter schema.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from faker import Faker

from mocksmith.config import EngineConfig
from mocksmith.engine.transforms import apply_transforms
from mocksmith.errors import GenerationError, MissingReferenceError, MocksmithError
from mocksmith.models import Column, ForeignRef, GeneratorInfo
from mocksmith.params.schema import ParameterSchema
from mocksmith.registry import GeneratorRegistry
from mocksmith.seeder.memo import ForeignValueStore

logger = logging.getLogger(__name__)

# Keys the engine injects into every validated parameter map
RAND_KEY = "_rand"
FAKER_KEY = "_faker"
STATE_KEY = "_state"
REFS_KEY = "_refs"
NESTED_KEY = "_nested"


class ProducerState:
    """Mutable state producers may keep between calls on one engine."""

    def __init__(self, reference_time: datetime):
        self.reference_time = reference_time
        self._counters: Dict[str, int] = {}

    def next_counter(self, key: str, start: int = 1, step: int = 1) -> int:
        """Return the next value of a monotonic counter."""
        if key in self._counters:
            value = self._counters[key] + step
        else:
            value = start
        self._counters[key] = value
        return value

    def reset(self) -> None:
        self._counters.clear()


class NestedContext:
    """Lets aggregate producers build values from other producers."""

    def __init__(self, engine: Engine, refs: Any):
        self._engine = engine
        self._refs = refs

    def value(self, industry: str, name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._engine.generate(industry, name, params, refs=self._refs)

    def document(self, fields: Sequence[Column]) -> Dict[str, Any]:
        return self._engine.generate_row(fields, refs=self._refs)


class Engine:
    """
    Single entry point for value generation.

    The engine is not safe for concurrent use: its random source is advanced
    by every call. Parallel callers build independent engines with
    ``spawn``.
    """

    def __init__(
        self,
        registry: GeneratorRegistry,
        schema: ParameterSchema,
        config: Optional[EngineConfig] = None,
        foreign_values: Optional[ForeignValueStore] = None,
    ):
        self.config = config or EngineConfig()
        self._registry = registry
        self._schema = schema
        self._rand = random.Random(self.config.seed)
        self._faker = Faker(self.config.locale)
        self._state = ProducerState(self.config.reference_time)
        self.foreign_values = foreign_values if foreign_values is not None else ForeignValueStore()

    @property
    def seed(self) -> int:
        return self.config.seed

    @property
    def rng(self) -> random.Random:
        """The engine's random source."""
        return self._rand

    @property
    def reference_time(self) -> datetime:
        return self._state.reference_time

    def reseed(self, seed: int) -> None:
        """Restart the random stream and reset auto-increment counters."""
        self.config.seed = int(seed)
        self._rand.seed(self.config.seed)
        self._state.reset()
        logger.debug(f"Engine reseeded with {self.config.seed}")

    def spawn(self, seed: int) -> Engine:
        """Build an independent engine sharing this engine's catalog."""
        config = EngineConfig(
            seed=seed,
            locale=self.config.locale,
            reference_time=self.config.reference_time,
        )
        return Engine(self._registry, self._schema, config, foreign_values=self.foreign_values)

    def generate(
        self,
        industry: str,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        refs: Any = None,
    ) -> Any:
        """
        Produce one value.

        Args:
            industry: Producer namespace, e.g. ``base`` or ``aviation``
            name: Producer name within the industry
            params: Raw parameters; coerced and validated before use
            refs: Reference lookup for foreign values; defaults to the
                engine's ForeignValueStore

        Raises:
            NotFoundError: unknown industry or generator
            ValidationError: parameters failed coercion or validation
            GenerationError: the producer failed
        """
        producer = self._registry.lookup(industry, name)
        validated = self._schema.coerce_and_validate(industry, name, params)

        lookup = refs if refs is not None else self.foreign_values
        validated[RAND_KEY] = self._rand
        validated[FAKER_KEY] = self._faker
        validated[STATE_KEY] = self._state
        validated[REFS_KEY] = lookup
        validated[NESTED_KEY] = NestedContext(self, lookup)

        try:
            value = producer(validated)
        except MocksmithError as exc:
            if exc.industry is None and exc.generator is None:
                exc.industry, exc.generator = industry, name
            raise
        except Exception as exc:
            raise GenerationError(
                f"producer failed: {exc}",
                industry=industry,
                generator=name,
            ) from exc

        return apply_transforms(value, validated)

    def validate_params(
        self,
        industry: str,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Coerce and validate parameters without producing a value."""
        self._registry.lookup(industry, name)
        return self._schema.coerce_and_validate(industry, name, params)

    def pick_reference(self, ref: ForeignRef, refs: Any) -> Any:
        """Sample uniformly from the values recorded for ``ref``."""
        lookup = refs if refs is not None else self.foreign_values
        values = lookup.values(ref.key)
        if not values:
            raise MissingReferenceError(
                f"no values recorded for {ref.key}",
                table=ref.table,
                column=ref.column,
            )
        return self._rand.choice(values)

    def generate_row(
        self,
        columns: Sequence[Column],
        existing: Optional[Mapping[str, Any]] = None,
        refs: Any = None,
    ) -> Dict[str, Any]:
        """
        Build one row in column order.

        Keys already present in ``existing`` are kept as-is; foreign columns
        sample from ``refs``; every other column calls its producer.
        """
        row: Dict[str, Any] = dict(existing or {})
        for column in columns:
            if column.name in row:
                continue
            if column.is_foreign:
                row[column.name] = self.pick_reference(column.foreign_ref, refs)
                continue
            params = dict(column.params)
            if column.nested_fields:
                params["fields"] = column.nested_fields
            row[column.name] = self.generate(column.industry, column.generator, params, refs=refs)
        return row

    def list_industries(self) -> List[str]:
        return self._registry.list_industries()

    def list_generators(self, industry: str) -> List[str]:
        return self._registry.list_generators(industry)

    def info(self, industry: str, name: str) -> GeneratorInfo:
        return self._schema.info(industry, name)

    def catalog(self) -> Dict[str, Dict[str, GeneratorInfo]]:
        """All generator descriptions, industry -> name -> info."""
        return self._schema.all_infos()
