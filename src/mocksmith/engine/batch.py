"""
Bulk generation of a single primitive.

Parallel runs never share an engine: each chunk gets its own engine whose
seed is derived from the base seed and the chunk index, and results are
reassembled in chunk order.
"""

from __future__ import annotations

import concurrent.futures
import hashlib
import logging
from typing import Any, List, Mapping, Optional, Tuple

from mocksmith.engine.engine import Engine
from mocksmith.errors import ValidationError

logger = logging.getLogger(__name__)


def derive_chunk_seed(base_seed: int, chunk_index: int) -> int:
    digest = hashlib.sha256(f"{base_seed}:chunk:{chunk_index}".encode("utf-8")).hexdigest()
    return int(digest[:16], 16)


def split_count(count: int, workers: int) -> List[Tuple[int, int]]:
    """Split ``count`` into contiguous ``(start, size)`` chunks, larger ones first."""
    workers = max(1, min(workers, count)) if count else 1
    size, extra = divmod(count, workers)
    chunks = []
    start = 0
    for index in range(workers):
        chunk = size + (1 if index < extra else 0)
        chunks.append((start, chunk))
        start += chunk
    return chunks


def _run_chunk(
    engine: Engine,
    industry: str,
    name: str,
    params: Optional[Mapping[str, Any]],
    size: int,
) -> List[Any]:
    return [engine.generate(industry, name, params) for _ in range(size)]


def generate_many(
    engine: Engine,
    industry: str,
    name: str,
    params: Optional[Mapping[str, Any]] = None,
    count: int = 1,
    workers: int = 1,
    seed: Optional[int] = None,
) -> List[Any]:
    """
    Generate ``count`` values of one primitive.

    With ``workers=1`` the values come from a single engine in sequence:
    ``engine`` itself, or a fresh engine when ``seed`` is given. With more
    workers the output is reproducible for a given ``(seed, count, workers)``.
    """
    if count < 0:
        raise ValidationError("count must not be negative", parameter="count")
    if workers < 1:
        raise ValidationError("workers must be at least 1", parameter="workers")

    # Fail fast on bad names or parameters before spawning anything
    engine.validate_params(industry, name, params)

    if workers == 1:
        runner = engine if seed is None else engine.spawn(seed)
        return _run_chunk(runner, industry, name, params, count)

    base_seed = seed if seed is not None else engine.rng.getrandbits(63)
    chunks = split_count(count, workers)
    logger.debug(f"Generating {count} x {industry}/{name} in {len(chunks)} chunks (seed={base_seed})")

    results: List[List[Any]] = [[] for _ in chunks]
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        futures = {
            executor.submit(
                _run_chunk,
                engine.spawn(derive_chunk_seed(base_seed, index)),
                industry,
                name,
                params,
                size,
            ): index
            for index, (_, size) in enumerate(chunks)
        }
        for future in concurrent.futures.as_completed(futures):
            results[futures[future]] = future.result()

    values: List[Any] = []
    for chunk in results:
        values.extend(chunk)
    return values
