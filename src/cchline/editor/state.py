"""Editor state.

The state is a plain dataclass. The reducer copies it before applying an
event, so a state value handed to the renderer is never mutated afterwards.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from ..config import StatusLineConfig
from ..grid import SegmentGrid
from ..types import InstallStatus, SegmentEntry
from .confirm import PendingConfirm
from .items import ItemKind, RenderItem, build_items, first_selectable
from .navigation import Cursor
from .picker import PickerState

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


@dataclass(frozen=True)
class TextEdit:
    """An in-progress edit of a text field."""

    key: str
    buffer: str = ""


@dataclass
class EditorState:
    config: StatusLineConfig
    grid: SegmentGrid
    cursor: Cursor = Cursor()
    picker: PickerState = PickerState()
    confirm: PendingConfirm | None = None
    editing: TextEdit | None = None
    # None while the install probe has not answered yet.
    install_status: InstallStatus | None = None
    status_message: str = ""
    last_key: str = ""
    debug: bool = False
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    scroll_offset: int = 0
    quitting: bool = False
    items: list[RenderItem] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.items:
            self.refresh_items()

    @classmethod
    def from_config(cls, cfg: StatusLineConfig, **kwargs) -> "EditorState":
        """Build the initial state, with the cursor on the first selectable item."""
        grid = SegmentGrid.from_order(cfg.segment_order, cfg.segment_enabled)
        state = cls(config=cfg, grid=grid, **kwargs)
        state.cursor = Cursor(first_selectable(state.items), 0)
        return state

    def clone(self) -> "EditorState":
        return copy.deepcopy(self)

    def refresh_items(self) -> None:
        """Re-derive the menu items from the grid."""
        self.items = build_items(len(self.grid))

    def sync_config(self) -> None:
        """Write the grid projection back into the config record."""
        order, enabled = self.grid.to_order()
        self.config.segment_order = order
        self.config.segment_enabled = enabled

    @property
    def current_item(self) -> RenderItem | None:
        if 0 <= self.cursor.index < len(self.items):
            return self.items[self.cursor.index]
        return None

    @property
    def current_row(self) -> int | None:
        """Grid row under the cursor, or None when not on a segment row."""
        item = self.current_item
        if item is None or item.kind != ItemKind.SEGMENT_ROW:
            return None
        return item.row

    @property
    def current_entry(self) -> SegmentEntry | None:
        row = self.current_row
        if row is None:
            return None
        return self.grid.entry(row, self.cursor.col)

    @property
    def mode(self) -> str:
        """Key dispatch mode: editing, picker, confirm or normal."""
        if self.editing is not None:
            return "editing"
        if self.picker.open:
            return "picker"
        if self.confirm is not None:
            return "confirm"
        return "normal"
