"""Two-dimensional segment grid.

The grid is the single source of truth for the arrangement. It is a list of
rows, each row a list of :class:`SegmentEntry`. The configuration stores a
flat projection of it: segment names interleaved with line-break markers plus
a parallel list of enabled flags (one per non-marker entry).

All mutating methods are total. Out-of-range addresses are ignored and the
current focus is returned unchanged. Every method returns the ``(row, col)``
the cursor should focus afterwards.
"""

from __future__ import annotations

import copy
from typing import Sequence

from .catalog import SEGMENT_CATALOG, cycle_name
from .types import LINE_BREAK_MARKER, SegmentEntry

DEFAULT_ROW_SEGMENT = "model"

Row = list[SegmentEntry]


def order_to_rows(order: Sequence[str], enabled: Sequence[bool]) -> list[Row]:
    """Split a serialized order into rows.

    Enabled flags are consumed one per non-marker name; missing flags
    default to True. An empty order yields a single empty row.
    """
    if not order:
        return [[]]

    rows: list[Row] = []
    current: Row = []
    flag_idx = 0
    for name in order:
        if name == LINE_BREAK_MARKER:
            rows.append(current)
            current = []
            continue
        is_enabled = bool(enabled[flag_idx]) if flag_idx < len(enabled) else True
        flag_idx += 1
        current.append(SegmentEntry(name=name, enabled=is_enabled))
    rows.append(current)
    return rows


def rows_to_order(rows: Sequence[Row]) -> tuple[list[str], list[bool]]:
    """Flatten rows back into ``(order, enabled)``.

    A grid with no rows, or a single empty row, serializes to two empty lists.
    """
    if not rows or (len(rows) == 1 and not rows[0]):
        return [], []

    order: list[str] = []
    enabled: list[bool] = []
    for i, row in enumerate(rows):
        for entry in row:
            order.append(entry.name)
            enabled.append(entry.enabled)
        if i != len(rows) - 1:
            order.append(LINE_BREAK_MARKER)
    return order, enabled


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class SegmentGrid:
    """Mutable grid of segment rows. Never holds zero rows."""

    def __init__(self, rows: Sequence[Row] | None = None):
        self.rows: list[Row] = [list(row) for row in rows] if rows else [[]]

    @classmethod
    def from_order(cls, order: Sequence[str], enabled: Sequence[bool]) -> "SegmentGrid":
        return cls(order_to_rows(order, enabled))

    def to_order(self) -> tuple[list[str], list[bool]]:
        return rows_to_order(self.rows)

    def clone(self) -> "SegmentGrid":
        return SegmentGrid(copy.deepcopy(self.rows))

    def __len__(self) -> int:
        return len(self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SegmentGrid):
            return NotImplemented
        return self.rows == other.rows

    def __repr__(self) -> str:
        return f"SegmentGrid({self.rows!r})"

    def row_length(self, row: int) -> int:
        """Number of entries in ``row`` (0 for an invalid row)."""
        if not self._valid_row(row):
            return 0
        return len(self.rows[row])

    def entry(self, row: int, col: int) -> SegmentEntry | None:
        """Entry at ``(row, col)`` with the column clamped, or None."""
        if not self._valid_row(row) or not self.rows[row]:
            return None
        return self.rows[row][self.clamp_col(row, col)]

    def clamp_col(self, row: int, col: int) -> int:
        """Clamp ``col`` into ``row``. Empty and invalid rows clamp to 0."""
        length = self.row_length(row)
        if length == 0:
            return 0
        return _clamp(col, 0, length - 1)

    def _valid_row(self, row: int) -> bool:
        return 0 <= row < len(self.rows)

    # ── cell operations ─────────────────────────────────────────────────

    def toggle(self, row: int, col: int) -> tuple[int, int]:
        """Flip the enabled flag of an entry."""
        entry = self.entry(row, col)
        if entry is None:
            return row, col
        entry.enabled = not entry.enabled
        return row, self.clamp_col(row, col)

    def insert(self, row: int, col: int, name: str) -> tuple[int, int]:
        """Insert a new enabled entry after ``col`` and focus it."""
        if not self._valid_row(row):
            return row, col
        entries = self.rows[row]
        pos = 0 if not entries else _clamp(col + 1, 0, len(entries))
        entries.insert(pos, SegmentEntry(name=name, enabled=True))
        return row, pos

    def delete(self, row: int, col: int) -> tuple[int, int]:
        """Remove an entry. A row left empty is dropped unless it is the last."""
        if not self._valid_row(row) or not self.rows[row]:
            return row, col
        entries = self.rows[row]
        col = self.clamp_col(row, col)
        del entries[col]
        if entries:
            return row, min(col, len(entries) - 1)
        return self.delete_row(row)

    def cycle_name(
        self,
        row: int,
        col: int,
        direction: int,
        catalog: Sequence[str] = SEGMENT_CATALOG,
    ) -> tuple[int, int]:
        """Replace the entry name with its catalog neighbour and enable it."""
        if not self._valid_row(row):
            return row, col
        entry = self.entry(row, col)
        if entry is None:
            self.rows[row] = [SegmentEntry(name=catalog[0], enabled=True)]
            return row, 0
        entry.name = cycle_name(entry.name, direction, catalog)
        entry.enabled = True
        return row, self.clamp_col(row, col)

    def move_within_row(self, row: int, col: int, delta: int) -> tuple[int, int]:
        """Swap an entry with its neighbour. No wraparound at the row edges."""
        if self.row_length(row) < 2:
            return row, col
        entries = self.rows[row]
        col = self.clamp_col(row, col)
        target = col + delta
        if target < 0 or target >= len(entries):
            return row, col
        entries[col], entries[target] = entries[target], entries[col]
        return row, target

    def set_name(self, row: int, col: int, name: str) -> tuple[int, int]:
        """Rename an entry and enable it. Fills an empty row with one entry."""
        if not self._valid_row(row):
            return row, col
        entry = self.entry(row, col)
        if entry is None:
            self.rows[row] = [SegmentEntry(name=name, enabled=True)]
            return row, 0
        entry.name = name
        entry.enabled = True
        return row, self.clamp_col(row, col)

    # ── row operations ──────────────────────────────────────────────────

    def insert_row_after(self, row: int, name: str = DEFAULT_ROW_SEGMENT) -> tuple[int, int]:
        """Insert a row holding one default entry after ``row`` and focus it."""
        if not self._valid_row(row):
            return row, 0
        self.rows.insert(row + 1, [SegmentEntry(name=name, enabled=True)])
        return row + 1, 0

    def delete_row(self, row: int) -> tuple[int, int]:
        """Remove a row. Removing the last row leaves one empty row."""
        if not self._valid_row(row):
            return row, 0
        del self.rows[row]
        if not self.rows:
            self.rows = [[]]
            return 0, 0
        return min(row, len(self.rows) - 1), 0

    def move_row(self, row: int, delta: int) -> tuple[int, int]:
        """Swap a row with its neighbour. No wraparound at the grid edges."""
        target = row + delta
        if not self._valid_row(row) or not self._valid_row(target):
            return row, 0
        self.rows[row], self.rows[target] = self.rows[target], self.rows[row]
        return target, 0
