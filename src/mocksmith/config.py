"""
Runtime configuration for engines and seeder runs.

Seeds resolve in order: explicit value, the MOCKSMITH_SEED environment
variable, then system entropy.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from mocksmith.errors import ValidationError

SEED_ENV_VAR = "MOCKSMITH_SEED"
REFERENCE_DATE_ENV_VAR = "MOCKSMITH_REFERENCE_DATE"

OUTPUT_FORMATS = ("csv", "json", "sql")


def resolve_seed(seed: Optional[int] = None) -> int:
    """Return the seed to use for a new engine."""
    if seed is not None:
        return int(seed)

    raw = os.environ.get(SEED_ENV_VAR, "").strip()
    if raw:
        try:
            return int(raw)
        except ValueError as exc:
            raise ValidationError(
                f"{SEED_ENV_VAR} must be an integer, got {raw!r}",
                parameter=SEED_ENV_VAR,
            ) from exc

    return random.SystemRandom().getrandbits(63)


def resolve_reference_time(value: Optional[datetime] = None) -> datetime:
    """
    Return the instant time-window producers treat as "now".

    Defaults to midnight UTC of the current day so that equally seeded
    engines agree on time values for the whole day.
    """
    if value is not None:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    raw = os.environ.get(REFERENCE_DATE_ENV_VAR, "").strip()
    if raw:
        try:
            day = date.fromisoformat(raw)
        except ValueError as exc:
            raise ValidationError(
                f"{REFERENCE_DATE_ENV_VAR} must be an ISO date, got {raw!r}",
                parameter=REFERENCE_DATE_ENV_VAR,
            ) from exc
    else:
        day = datetime.now(timezone.utc).date()

    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


@dataclass
class EngineConfig:
    """Configuration for a single Engine instance."""
    seed: Optional[int] = None
    locale: str = "en_US"
    reference_time: Optional[datetime] = None

    def __post_init__(self):
        self.seed = resolve_seed(self.seed)
        self.reference_time = resolve_reference_time(self.reference_time)


@dataclass
class SeedConfig:
    """Configuration for a seeder run."""
    output_dir: Path = field(default_factory=lambda: Path("output"))
    output_format: str = "csv"
    seed: Optional[int] = None
    run_id: Optional[str] = None
    schema_path: Optional[Path] = None
    batch_size: int = 1000
    write_manifest: bool = True

    def __post_init__(self):
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)
        if isinstance(self.schema_path, str):
            self.schema_path = Path(self.schema_path)
        self.output_format = self.output_format.lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ValidationError(
                f"unknown output format {self.output_format!r}; "
                f"expected one of {', '.join(OUTPUT_FORMATS)}",
                parameter="format",
            )
        if self.batch_size < 1:
            raise ValidationError("batch_size must be at least 1", parameter="batch_size")
