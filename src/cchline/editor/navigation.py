"""Cursor movement over the heterogeneous menu.

Headers are never addressable. The separator presets form one vertical stop
that is entered on the selected preset. A segment row is one vertical stop
whatever its column count, with its own horizontal column cursor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..grid import SegmentGrid
from .items import (
    ItemKind,
    RenderItem,
    first_selectable,
    last_selectable,
    selected_separator_index,
    separator_bounds,
)


@dataclass(frozen=True)
class Cursor:
    """Menu position: item index plus column for segment rows."""

    index: int = 0
    col: int = 0


def _wrap(items: Sequence[RenderItem], delta: int) -> int:
    return last_selectable(items) if delta < 0 else first_selectable(items)


def _step(items: Sequence[RenderItem], index: int, delta: int) -> int:
    """Move ``delta`` items, skipping headers and wrapping past the ends."""
    target = index + delta
    if target < 0 or target >= len(items):
        return _wrap(items, delta)
    step = 1 if delta > 0 else -1
    while 0 <= target < len(items) and not items[target].selectable:
        target += step
    if target < 0 or target >= len(items):
        return _wrap(items, delta)
    return target


def clamp_segment_col(items: Sequence[RenderItem], grid: SegmentGrid, cursor: Cursor) -> Cursor:
    """Clamp the column to the row under the cursor. Other items keep it."""
    if not 0 <= cursor.index < len(items):
        return cursor
    item = items[cursor.index]
    if item.kind != ItemKind.SEGMENT_ROW:
        return cursor
    return Cursor(cursor.index, grid.clamp_col(item.row, cursor.col))


def move_vertical(
    items: Sequence[RenderItem],
    grid: SegmentGrid,
    cursor: Cursor,
    delta: int,
    separator: str,
) -> Cursor:
    """Move the cursor up (negative) or down (positive) one stop."""
    if delta == 0 or not items:
        return cursor

    bounds = separator_bounds(items)
    index = cursor.index
    if bounds is not None and bounds[0] <= index <= bounds[1]:
        # Leave the preset cluster as a whole.
        edge = bounds[0] if delta < 0 else bounds[1]
        target = _step(items, edge, -1 if delta < 0 else 1)
    else:
        target = _step(items, index, delta)

    if bounds is not None and bounds[0] <= target <= bounds[1]:
        selected = selected_separator_index(items, separator)
        if selected is not None:
            target = selected

    return clamp_segment_col(items, grid, Cursor(target, cursor.col))


def move_horizontal(
    items: Sequence[RenderItem],
    grid: SegmentGrid,
    cursor: Cursor,
    delta: int,
) -> Cursor:
    """Move within a segment row or the preset cluster, wrapping at its edges."""
    if not 0 <= cursor.index < len(items) or delta == 0:
        return cursor
    item = items[cursor.index]

    if item.kind == ItemKind.SEGMENT_ROW:
        length = grid.row_length(item.row)
        if length == 0:
            return Cursor(cursor.index, 0)
        return Cursor(cursor.index, (cursor.col + delta) % length)

    bounds = separator_bounds(items)
    if bounds is None or not bounds[0] <= cursor.index <= bounds[1]:
        return cursor
    start, end = bounds
    size = end - start + 1
    return Cursor(start + (cursor.index - start + delta) % size, cursor.col)
