"""Tests for cursor movement over the editor menu."""

from __future__ import annotations

import random

from cchline.editor.items import ItemKind, build_items, segment_row_index, separator_bounds
from cchline.editor.navigation import Cursor, move_horizontal, move_vertical
from cchline.grid import SegmentGrid
from cchline.types import SegmentEntry

GRID = SegmentGrid([
    [SegmentEntry("model"), SegmentEntry("git", False), SegmentEntry("cost")],
    [SegmentEntry("session")],
])
ITEMS = build_items(len(GRID))
THEME = 1
PIPE, DOT, BAR, ARROW, CHEVRON = 3, 4, 5, 6, 7
ROW0, ROW1 = 9, 10
URL, API_KEY = 12, 13


def test_item_layout():
    kinds = [item.kind for item in ITEMS]
    assert kinds[THEME] == ItemKind.THEME
    assert separator_bounds(ITEMS) == (PIPE, CHEVRON)
    assert segment_row_index(ITEMS, 1) == ROW1
    assert ITEMS[URL].key == "cch_url"
    assert ITEMS[API_KEY].key == "cch_api_key"


def test_empty_grid_still_has_one_row_item():
    items = build_items(0)
    assert sum(1 for item in items if item.kind == ItemKind.SEGMENT_ROW) == 1


def test_entering_cluster_lands_on_selected_preset():
    assert move_vertical(ITEMS, GRID, Cursor(THEME), 1, " → ").index == ARROW
    assert move_vertical(ITEMS, GRID, Cursor(ROW0), -1, " · ").index == DOT


def test_unknown_separator_enters_on_first_preset():
    assert move_vertical(ITEMS, GRID, Cursor(THEME), 1, " :: ").index == PIPE


def test_leaving_cluster_skips_remaining_presets():
    assert move_vertical(ITEMS, GRID, Cursor(DOT), 1, " · ").index == ROW0
    assert move_vertical(ITEMS, GRID, Cursor(BAR), -1, " · ").index == THEME


def test_vertical_wraps():
    assert move_vertical(ITEMS, GRID, Cursor(THEME), -1, " | ").index == API_KEY
    assert move_vertical(ITEMS, GRID, Cursor(API_KEY), 1, " | ").index == THEME


def test_vertical_skips_headers():
    assert move_vertical(ITEMS, GRID, Cursor(ROW1), 1, " | ").index == URL
    assert move_vertical(ITEMS, GRID, Cursor(URL), -1, " | ").index == ROW1


def test_vertical_move_clamps_column():
    cursor = move_vertical(ITEMS, GRID, Cursor(ROW0, 2), 1, " | ")
    assert cursor == Cursor(ROW1, 0)


def test_horizontal_wraps_within_row():
    assert move_horizontal(ITEMS, GRID, Cursor(ROW0, 2), 1) == Cursor(ROW0, 0)
    assert move_horizontal(ITEMS, GRID, Cursor(ROW0, 0), -1) == Cursor(ROW0, 2)


def test_horizontal_wraps_within_cluster():
    assert move_horizontal(ITEMS, GRID, Cursor(CHEVRON), 1).index == PIPE
    assert move_horizontal(ITEMS, GRID, Cursor(PIPE), -1).index == CHEVRON


def test_horizontal_elsewhere_is_noop():
    assert move_horizontal(ITEMS, GRID, Cursor(THEME), 1) == Cursor(THEME)
    assert move_horizontal(ITEMS, GRID, Cursor(URL), -1) == Cursor(URL)


def test_horizontal_on_empty_row():
    grid = SegmentGrid([[]])
    items = build_items(len(grid))
    assert move_horizontal(items, grid, Cursor(ROW0, 0), 1) == Cursor(ROW0, 0)


def test_cursor_never_lands_on_header():
    rng = random.Random(3)
    cursor = Cursor(THEME)
    for _ in range(300):
        if rng.random() < 0.6:
            cursor = move_vertical(ITEMS, GRID, cursor, rng.choice([-1, 1]), " | ")
        else:
            cursor = move_horizontal(ITEMS, GRID, cursor, rng.choice([-1, 1]))
        assert ITEMS[cursor.index].kind != ItemKind.HEADER
