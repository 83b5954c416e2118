"""Shared validation helpers for the documentation tools."""

from __future__ import annotations

from typing import Any, Optional, Sequence

# Kinds accepted by the search tool's type filter.
SEARCHABLE_TYPES = ("class", "interface", "function", "enum")


def clamp_limit(value: Optional[int], *, default: int, max_value: int) -> int:
    """Clamp limit-style integers to configured bounds."""
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed <= 0:
        return default
    return min(parsed, max_value)


def normalize_doc_type(value: Any, kinds: Sequence[str] = SEARCHABLE_TYPES) -> Optional[str]:
    """Map user input such as "Classes" or " enum " to a kind, or None."""
    if not isinstance(value, str):
        return None
    candidate = value.strip().lower()
    if candidate.endswith("es") and candidate[:-2] in kinds:
        candidate = candidate[:-2]
    elif candidate.endswith("s") and candidate[:-1] in kinds:
        candidate = candidate[:-1]
    return candidate if candidate in kinds else None


def is_present(value: Any) -> bool:
    """True for non-blank strings."""
    return isinstance(value, str) and bool(value.strip())
