"""The fixed catalog of segment types.

The catalog order is the cycling order used by tab/shift-tab in the editor
and the listing order of the picker.
"""

from __future__ import annotations

from typing import Sequence


SEGMENT_CATALOG: tuple[str, ...] = (
    "model",
    "directory",
    "git",
    "context_window",
    "usage",
    "cost",
    "session",
    "output_style",
    "update",
    "cch_model",
    "cch_provider",
    "cch_cost",
    "cch_requests",
    "cch_limits",
)

SEGMENT_LABELS: dict[str, str] = {
    "model": "Model",
    "directory": "Directory",
    "git": "Git",
    "context_window": "Context Window",
    "usage": "Usage",
    "cost": "Cost",
    "session": "Session",
    "output_style": "Output Style",
    "update": "Update",
    "cch_model": "CCH Model",
    "cch_provider": "CCH Provider",
    "cch_cost": "CCH Cost",
    "cch_requests": "CCH Requests",
    "cch_limits": "CCH Limits",
}

# Fixed sample values shown in the editor preview.
PREVIEW_VALUES: dict[str, str] = {
    "model": "Sonnet 4.5",
    "directory": "cchline",
    "git": "main ✓",
    "context_window": "42% · 84.0K tokens",
    "usage": "1.2M tokens",
    "cost": "$0.42",
    "session": "12m 30s",
    "output_style": "default",
    "update": "v0.4.0 available",
    "cch_model": "claude-sonnet-4-5",
    "cch_provider": "anthropic",
    "cch_cost": "$3.21/$50.00",
    "cch_requests": "128 req",
    "cch_limits": "5h $2.10/$10.00",
}


def segment_label(name: str) -> str:
    """Human-readable label for a segment name (the name itself if unknown)."""
    return SEGMENT_LABELS.get(name, name)


def cycle_name(current: str, direction: int, catalog: Sequence[str] = SEGMENT_CATALOG) -> str:
    """Return the catalog neighbour of ``current`` in ``direction``.

    Wraps at both ends. Names missing from the catalog restart at the
    first entry regardless of direction.
    """
    if not catalog:
        return current
    try:
        idx = list(catalog).index(current)
    except ValueError:
        return catalog[0]
    step = 1 if direction >= 0 else -1
    return catalog[(idx + step) % len(catalog)]


def query_tokens(query: str) -> list[str]:
    """Split a picker query into lowercase search tokens."""
    return [token.lower() for token in query.split()]


def filter_catalog(query: str, catalog: Sequence[str] = SEGMENT_CATALOG) -> list[str]:
    """Return catalog names containing every query token (case-insensitive).

    An empty or whitespace-only query returns the whole catalog in order.
    """
    tokens = query_tokens(query)
    if not tokens:
        return list(catalog)
    return [name for name in catalog if all(token in name.lower() for token in tokens)]
