"""Event reducer for the editor.

``update(state, event)`` returns a new state plus a list of commands for the
event loop to run (the install probe, install/uninstall, quitting). The
reducer itself performs no I/O, so every key path can be tested without a
terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from ..catalog import SEGMENT_CATALOG
from ..types import ConfirmAction, InstallStatus, ThemeMode
from . import keys
from . import picker as picker_ops
from .confirm import request_delete_row, request_install, request_uninstall
from .items import ItemKind, segment_row_index
from .navigation import Cursor, clamp_segment_col, move_horizontal, move_vertical
from .state import EditorState, TextEdit


# ── events ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class InstallStatusChecked:
    status: InstallStatus


@dataclass(frozen=True)
class ActionFinished:
    """Outcome of an install/uninstall command run by the event loop."""

    action: ConfirmAction
    ok: bool
    message: str


Event = Union[KeyPressed, Resized, InstallStatusChecked, ActionFinished]


# ── commands ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CheckInstallStatus:
    pass


@dataclass(frozen=True)
class RunAction:
    action: ConfirmAction


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[CheckInstallStatus, RunAction, Quit]


def init(state: EditorState) -> tuple[EditorState, list[Command]]:
    """Startup commands: probe the installed version once."""
    return state, [CheckInstallStatus()]


def update(state: EditorState, event: Event) -> tuple[EditorState, list[Command]]:
    """Apply one event to a copy of ``state``."""
    state = state.clone()

    if isinstance(event, Resized):
        state.width = event.width
        state.height = event.height
        return state, []

    if isinstance(event, InstallStatusChecked):
        state.install_status = event.status
        return state, []

    if isinstance(event, ActionFinished):
        state.status_message = event.message
        if event.ok:
            state.install_status = None
        return state, [CheckInstallStatus()]

    if isinstance(event, KeyPressed):
        return _handle_key(state, event.key)

    return state, []


def _handle_key(state: EditorState, key: str) -> tuple[EditorState, list[Command]]:
    state.last_key = keys.describe(key)
    mode = state.mode
    if mode == "editing":
        return _handle_editing_key(state, key), []
    if mode == "picker":
        return _handle_picker_key(state, key), []
    if mode == "confirm":
        return _handle_confirm_key(state, key)
    return _handle_normal_key(state, key)


# ── text editing ────────────────────────────────────────────────────────


def _handle_editing_key(state: EditorState, key: str) -> EditorState:
    edit = state.editing
    if keys.is_enter(key):
        setattr(state.config, edit.key, edit.buffer)
        state.editing = None
    elif keys.is_escape(key) or keys.is_interrupt(key):
        state.editing = None
    elif keys.is_clear_line(key):
        state.editing = replace(edit, buffer="")
    elif keys.is_backspace(key):
        state.editing = replace(edit, buffer=edit.buffer[:-1])
    elif keys.is_printable(key):
        state.editing = replace(edit, buffer=edit.buffer + key)
    return state


# ── picker ──────────────────────────────────────────────────────────────


def _handle_picker_key(state: EditorState, key: str) -> EditorState:
    picker = state.picker
    if keys.is_escape(key) or keys.is_interrupt(key):
        state.picker = picker_ops.close_picker(picker)
    elif keys.is_enter(key):
        name = picker.selected()
        if name is not None:
            row, col = picker.target
            row, col = state.grid.set_name(row, col, name)
            _after_grid_change(state, row, col)
        state.picker = picker_ops.close_picker(picker)
    elif keys.is_up_arrow(key) or keys.is_shift_tab(key):
        state.picker = picker_ops.move_selection(picker, -1)
    elif keys.is_down_arrow(key) or keys.is_tab(key):
        state.picker = picker_ops.move_selection(picker, 1)
    elif keys.is_backspace(key):
        state.picker = picker_ops.backspace(picker)
    elif keys.is_printable(key):
        state.picker = picker_ops.type_char(picker, key)
    return state


# ── confirmation ────────────────────────────────────────────────────────


def _handle_confirm_key(state: EditorState, key: str) -> tuple[EditorState, list[Command]]:
    pending = state.confirm
    if keys.is_yes(key):
        state.confirm = None
        if pending.action == ConfirmAction.DELETE_ROW:
            row = pending.row if pending.row is not None else -1
            if 0 <= row < len(state.grid):
                row, col = state.grid.delete_row(row)
                _after_grid_change(state, row, col)
                state.status_message = f"Deleted row {pending.row + 1}"
            return state, []
        state.status_message = "Installing..." if pending.action == ConfirmAction.INSTALL else "Uninstalling..."
        return state, [RunAction(pending.action)]
    if keys.is_no(key) or keys.is_interrupt(key):
        state.confirm = None
        state.status_message = "Cancelled"
    return state, []


# ── normal mode ─────────────────────────────────────────────────────────


def _after_grid_change(state: EditorState, row: int, col: int) -> None:
    """Re-derive items, refocus ``(row, col)`` and serialize the grid."""
    state.refresh_items()
    index = segment_row_index(state.items, row)
    if index is not None:
        state.cursor = clamp_segment_col(state.items, state.grid, Cursor(index, col))
    state.sync_config()


def _activate(state: EditorState) -> None:
    """Space/Enter on the current item."""
    item = state.current_item
    if item is None:
        return
    if item.kind == ItemKind.THEME:
        cfg = state.config
        cfg.theme = ThemeMode.DEFAULT if cfg.theme == ThemeMode.NERD_FONT else ThemeMode.NERD_FONT
    elif item.kind == ItemKind.SEPARATOR:
        state.config.separator = item.key
    elif item.kind == ItemKind.TEXT:
        state.editing = TextEdit(key=item.key, buffer=getattr(state.config, item.key, ""))
    elif item.kind == ItemKind.SEGMENT_ROW:
        row, col = state.grid.toggle(item.row, state.cursor.col)
        _after_grid_change(state, row, col)


def _handle_normal_key(state: EditorState, key: str) -> tuple[EditorState, list[Command]]:
    state.status_message = ""
    row = state.current_row
    col = state.cursor.col

    if keys.is_quit(key):
        state.quitting = True
        return state, [Quit()]

    if keys.is_up(key):
        state.cursor = move_vertical(state.items, state.grid, state.cursor, -1, state.config.separator)
    elif keys.is_down(key):
        state.cursor = move_vertical(state.items, state.grid, state.cursor, 1, state.config.separator)
    elif keys.is_left(key):
        state.cursor = move_horizontal(state.items, state.grid, state.cursor, -1)
    elif keys.is_right(key):
        state.cursor = move_horizontal(state.items, state.grid, state.cursor, 1)
    elif keys.is_space(key):
        _activate(state)
    elif keys.is_enter(key):
        if row is not None:
            _open_picker(state, row, col)
        else:
            _activate(state)
    elif key == "/":
        if row is not None:
            _open_picker(state, row, col)
    elif keys.is_install_key(key):
        state.confirm = request_install()
    elif keys.is_uninstall_key(key):
        state.confirm = request_uninstall()
    elif row is not None:
        _handle_grid_key(state, key, row, col)

    return state, []


def _open_picker(state: EditorState, row: int, col: int) -> None:
    entry = state.grid.entry(row, col)
    target = (row, state.grid.clamp_col(row, col))
    state.picker = picker_ops.open_picker(entry.name if entry else None, target, SEGMENT_CATALOG)


def _handle_grid_key(state: EditorState, key: str, row: int, col: int) -> None:
    """Segment grid edits; only reached while the cursor is on a segment row."""
    grid = state.grid
    if keys.is_tab(key):
        new_row, new_col = grid.cycle_name(row, col, 1)
    elif keys.is_shift_tab(key):
        new_row, new_col = grid.cycle_name(row, col, -1)
    elif key == "a":
        new_row, new_col = grid.insert(row, col, SEGMENT_CATALOG[0])
    elif key == "x":
        new_row, new_col = grid.delete(row, col)
    elif keys.is_move_segment_left(key):
        new_row, new_col = grid.move_within_row(row, col, -1)
    elif keys.is_move_segment_right(key):
        new_row, new_col = grid.move_within_row(row, col, 1)
    elif key == "o":
        new_row, new_col = grid.insert_row_after(row)
    elif keys.is_move_row_up(key):
        new_row, _ = grid.move_row(row, -1)
        new_col = col
    elif keys.is_move_row_down(key):
        new_row, _ = grid.move_row(row, 1)
        new_col = col
    elif key == "D":
        state.confirm = request_delete_row(row)
        return
    else:
        return
    _after_grid_change(state, new_row, new_col)
