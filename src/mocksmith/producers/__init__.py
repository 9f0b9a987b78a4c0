"""Producer catalog, registered into an EngineBuilder by ``register_all``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mocksmith.producers import (
    aviation,
    health,
    identifiers,
    mongodb,
    mysql,
    network,
    numeric,
    people,
    postgres,
    sqlite,
    structural,
    temporal,
    text,
)

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder

MODULES = [
    identifiers,
    people,
    temporal,
    numeric,
    text,
    network,
    structural,
    mongodb,
    postgres,
    mysql,
    sqlite,
    aviation,
    health,
]


def register_all(builder: EngineBuilder) -> None:
    """Register every producer module into ``builder``."""
    for module in MODULES:
        module.register(builder)


__all__ = ["MODULES", "register_all"]
