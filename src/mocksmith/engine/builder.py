"""Explicit registration step that assembles an Engine."""

from __future__ import annotations

import logging
from typing import Optional

from mocksmith.config import EngineConfig
from mocksmith.engine.engine import Engine
from mocksmith.errors import InternalError
from mocksmith.models import GeneratorInfo
from mocksmith.params.schema import ParameterSchema
from mocksmith.registry import GeneratorRegistry, Producer

logger = logging.getLogger(__name__)


class EngineBuilder:
    """
    Collects producers and their parameter declarations.

    ``build()`` closes the registration phase; the builder cannot be reused
    after that.
    """

    def __init__(self):
        self.registry = GeneratorRegistry()
        self.schema = ParameterSchema()
        self._built = False

    def add(self, info: GeneratorInfo, producer: Producer) -> EngineBuilder:
        """Register one producer together with its GeneratorInfo."""
        if self._built:
            raise InternalError(
                f"cannot add {info.industry}/{info.name}: engine already built",
                industry=info.industry,
                generator=info.name,
            )
        self.registry.register(info.industry, info.name, producer)
        self.schema.register(info)
        return self

    def build(self, config: Optional[EngineConfig] = None) -> Engine:
        """Close registration and return the engine."""
        self.registry.close()
        self.schema.close()
        self._built = True
        engine = Engine(self.registry, self.schema, config)
        logger.debug(
            f"Built engine with {len(self.registry)} generators "
            f"across {len(self.registry.list_industries())} industries (seed={engine.seed})"
        )
        return engine
