"""Fuzzy-filter picker overlay for choosing a segment name."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from ..catalog import SEGMENT_CATALOG, filter_catalog


@dataclass(frozen=True)
class PickerState:
    """Picker overlay state.

    ``target`` is the ``(row, col)`` grid cell that was focused when the
    picker opened; applying a choice renames that cell.
    """

    open: bool = False
    query: str = ""
    index: int = 0
    target: tuple[int, int] = (0, 0)
    offset: int = 0
    catalog: tuple[str, ...] = SEGMENT_CATALOG

    def matches(self) -> list[str]:
        return filter_catalog(self.query, self.catalog)

    def selected(self) -> str | None:
        matches = self.matches()
        if not matches:
            return None
        return matches[_clamp_index(self.index, len(matches))]


def _clamp_index(index: int, count: int) -> int:
    if count == 0:
        return 0
    return max(0, min(index, count - 1))


def open_picker(
    current_name: str | None,
    target: tuple[int, int],
    catalog: Sequence[str] = SEGMENT_CATALOG,
) -> PickerState:
    """Open the picker with the current name pre-selected when known."""
    names = tuple(catalog)
    index = names.index(current_name) if current_name in names else 0
    return PickerState(open=True, index=index, target=target, catalog=names)


def set_query(picker: PickerState, query: str) -> PickerState:
    """Replace the query and re-clamp the selection into the new matches."""
    count = len(filter_catalog(query, picker.catalog))
    return replace(picker, query=query, index=_clamp_index(picker.index, count), offset=0)


def type_char(picker: PickerState, char: str) -> PickerState:
    return set_query(picker, picker.query + char)


def backspace(picker: PickerState) -> PickerState:
    return set_query(picker, picker.query[:-1])


def move_selection(picker: PickerState, delta: int) -> PickerState:
    """Move the selection with wraparound over the filtered list."""
    count = len(picker.matches())
    if count == 0:
        return replace(picker, index=0)
    return replace(picker, index=(picker.index + delta) % count)


def close_picker(picker: PickerState) -> PickerState:
    return PickerState(catalog=picker.catalog)
