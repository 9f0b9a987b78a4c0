"""Generation kernel: engine construction, single and bulk generation."""

from typing import Optional

from mocksmith.config import EngineConfig
from mocksmith.engine.batch import generate_many
from mocksmith.engine.builder import EngineBuilder
from mocksmith.engine.engine import Engine, ProducerState
from mocksmith.engine.transforms import apply_transforms


def build_engine(config: Optional[EngineConfig] = None, *, seed: Optional[int] = None) -> Engine:
    """
    Build an engine with the full producer catalog registered.

    ``seed`` is a shortcut for ``EngineConfig(seed=seed)`` and is ignored
    when ``config`` is given.
    """
    from mocksmith.producers import register_all

    if config is None:
        config = EngineConfig(seed=seed)
    builder = EngineBuilder()
    register_all(builder)
    return builder.build(config)


__all__ = [
    "Engine",
    "EngineBuilder",
    "ProducerState",
    "apply_transforms",
    "build_engine",
    "generate_many",
]
