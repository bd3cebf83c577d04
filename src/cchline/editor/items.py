"""Flat, cursor-addressable list of menu items.

The list is derived from the grid on demand: one segment-row item per grid
row, surrounded by fixed sections. Nothing here is kept in sync by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ..config import SEPARATOR_PRESETS


class ItemKind(str, Enum):
    HEADER = "header"
    THEME = "theme"
    SEPARATOR = "separator"
    TEXT = "text"
    SEGMENT_ROW = "segment_row"


@dataclass(frozen=True)
class RenderItem:
    """One menu entry.

    ``key`` is the preset value for separators and the config field name for
    text fields; ``row`` is the grid row for segment-row items.
    """

    kind: ItemKind
    label: str = ""
    key: str = ""
    row: int = -1

    @property
    def selectable(self) -> bool:
        return self.kind != ItemKind.HEADER


HEADER_THEME = "THEME"
HEADER_SEPARATOR = "SEPARATOR"
HEADER_SEGMENTS = "SEGMENTS"
HEADER_CCH = "CCH SETTINGS"

TEXT_FIELDS: list[tuple[str, str]] = [
    ("cch_url", "CCH URL"),
    ("cch_api_key", "API Key"),
]

SECRET_FIELDS = {"cch_api_key"}


def build_items(row_count: int) -> list[RenderItem]:
    """Build the menu for a grid with ``row_count`` rows."""
    items = [
        RenderItem(ItemKind.HEADER, HEADER_THEME),
        RenderItem(ItemKind.THEME, "Theme", key="theme"),
        RenderItem(ItemKind.HEADER, HEADER_SEPARATOR),
    ]
    items.extend(RenderItem(ItemKind.SEPARATOR, label, key=value) for label, value in SEPARATOR_PRESETS)
    items.append(RenderItem(ItemKind.HEADER, HEADER_SEGMENTS))
    items.extend(RenderItem(ItemKind.SEGMENT_ROW, f"Row {i + 1}", row=i) for i in range(max(1, row_count)))
    items.append(RenderItem(ItemKind.HEADER, HEADER_CCH))
    items.extend(RenderItem(ItemKind.TEXT, label, key=key) for key, label in TEXT_FIELDS)
    return items


def first_selectable(items: Sequence[RenderItem]) -> int:
    for i, item in enumerate(items):
        if item.selectable:
            return i
    return 0


def last_selectable(items: Sequence[RenderItem]) -> int:
    for i in range(len(items) - 1, -1, -1):
        if items[i].selectable:
            return i
    return 0


def separator_bounds(items: Sequence[RenderItem]) -> tuple[int, int] | None:
    """Inclusive ``(start, end)`` of the contiguous separator preset run."""
    start = next((i for i, item in enumerate(items) if item.kind == ItemKind.SEPARATOR), None)
    if start is None:
        return None
    end = start
    while end + 1 < len(items) and items[end + 1].kind == ItemKind.SEPARATOR:
        end += 1
    return start, end


def selected_separator_index(items: Sequence[RenderItem], separator: str) -> int | None:
    """Index of the preset matching ``separator``; the first preset otherwise."""
    bounds = separator_bounds(items)
    if bounds is None:
        return None
    start, end = bounds
    for i in range(start, end + 1):
        if items[i].key == separator:
            return i
    return start


def segment_row_index(items: Sequence[RenderItem], row: int) -> int | None:
    """Item index of the segment-row item for grid ``row``."""
    for i, item in enumerate(items):
        if item.kind == ItemKind.SEGMENT_ROW and item.row == row:
            return i
    return None
