"""Post-transforms applied to string producer output."""

from __future__ import annotations

import re
from typing import Any, Mapping

_TOKEN = re.compile(r"\S+")


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    return False


def title_tokens(text: str) -> str:
    """Upper-case the first character of every whitespace-separated token."""
    return _TOKEN.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:], text)


def apply_transforms(value: Any, params: Mapping[str, Any]) -> Any:
    """
    Apply case folding, then prefix, then suffix.

    ``uppercase`` wins over ``lowercase``, which wins over ``capitalize``.
    Values that are not strings are returned unchanged.
    """
    if not isinstance(value, str):
        return value

    if _flag(params.get("uppercase")):
        value = value.upper()
    elif _flag(params.get("lowercase")):
        value = value.lower()
    elif _flag(params.get("capitalize")):
        value = title_tokens(value)

    prefix = params.get("prefix")
    if prefix:
        value = f"{prefix}{value}"
    suffix = params.get("suffix")
    if suffix:
        value = f"{value}{suffix}"
    return value
