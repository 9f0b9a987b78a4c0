"""
Generator registry: the two-level ``(industry, name) -> producer`` table.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping

from mocksmith.errors import InternalError, NotFoundError

logger = logging.getLogger(__name__)

Producer = Callable[[Mapping[str, Any]], Any]


class GeneratorRegistry:
    """
    Maps ``(industry, name)`` to producer callables.

    Registration happens while an engine is being built. ``close()`` ends
    that phase; after it the table never changes, so lookups need no lock.
    """

    def __init__(self):
        self._producers: Dict[str, Dict[str, Producer]] = {}
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def register(self, industry: str, name: str, producer: Producer) -> None:
        """Register a producer. Duplicates and late registrations are programming errors."""
        if not callable(producer):
            raise InternalError(
                f"producer for {industry}/{name} is not callable",
                industry=industry,
                generator=name,
            )
        with self._lock:
            if self._closed:
                raise InternalError(
                    f"cannot register {industry}/{name}: registry is closed",
                    industry=industry,
                    generator=name,
                )
            producers = self._producers.setdefault(industry, {})
            if name in producers:
                raise InternalError(
                    f"generator {industry}/{name} registered twice",
                    industry=industry,
                    generator=name,
                )
            producers[name] = producer

    def close(self) -> None:
        """End the registration phase."""
        with self._lock:
            self._closed = True
        logger.debug(f"Registry closed with {len(self)} generators")

    def lookup(self, industry: str, name: str) -> Producer:
        """Return the producer registered under ``(industry, name)``."""
        producers = self._producers.get(industry)
        if producers is None:
            raise NotFoundError(f"unknown industry '{industry}'", industry=industry, generator=name)
        try:
            return producers[name]
        except KeyError:
            raise NotFoundError(
                f"generator '{name}' not found in industry '{industry}'",
                industry=industry,
                generator=name,
            ) from None

    def has(self, industry: str, name: str) -> bool:
        return name in self._producers.get(industry, {})

    def list_industries(self) -> List[str]:
        """Return registered industries in name order."""
        return sorted(self._producers)

    def list_generators(self, industry: str) -> List[str]:
        """Return the generator names of an industry in name order."""
        if industry not in self._producers:
            raise NotFoundError(f"unknown industry '{industry}'", industry=industry)
        return sorted(self._producers[industry])

    def __len__(self) -> int:
        return sum(len(p) for p in self._producers.values())
