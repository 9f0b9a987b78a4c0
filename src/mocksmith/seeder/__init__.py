"""Relational seeding: reference stores and the seeder run."""

from mocksmith.seeder.memo import ForeignValueStore, ReferenceMemo
from mocksmith.seeder.seeder import Seeder, seed

__all__ = ["ForeignValueStore", "ReferenceMemo", "Seeder", "seed"]
