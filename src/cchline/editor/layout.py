"""Layout fitter for the editor screen.

Builds one frame of exactly ``height`` lines, each at most ``width - 1``
display columns, from the editor state. The fitter is pure: the palette and
the preview text are passed in, and the scroll offsets it chose are returned
on the :class:`Frame` so the event loop can carry them into the next frame.

Blocks, top to bottom: title, preview, menu (boxed), install status, help,
transient status and debug readout. When the terminal is too short the
optional blocks shrink first, in the order debug, status, help, preview.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from .. import __version__
from ..catalog import segment_label
from ..types import InstallState, InstallStatus, ThemeMode
from . import keys
from .items import SECRET_FIELDS, ItemKind, RenderItem
from .state import EditorState
from .theme import DEFAULT_THEME, EditorTheme

TITLE_LINES = 1
PREVIEW_TARGET = 3
HELP_TARGET = 3
INSTALL_LINES = 1
MENU_MIN_LINES = 1
FRAME_LINES = 2

ELLIPSIS = "..."
CELL_GAP = "  "
ROW_LABEL_WIDTH = 7
FIELD_LABEL_WIDTH = 9

# Wide enough that Rich never wraps a line we already cropped.
_ANSI_CONSOLE_WIDTH = 4096

_ansi_console = Console(
    force_terminal=True,
    color_system="256",
    width=_ANSI_CONSOLE_WIDTH,
    highlight=False,
    legacy_windows=False,
)


@dataclass
class BlockHeights:
    """Lines given to each block after fitting."""

    title: int = TITLE_LINES
    preview: int = PREVIEW_TARGET
    menu: int = 0
    install: int = INSTALL_LINES
    help: int = HELP_TARGET
    status: int = 0
    debug: int = 0

    @property
    def fixed(self) -> int:
        return self.title + self.preview + self.install + self.help + self.status + self.debug

    @property
    def framed(self) -> bool:
        return self.menu >= MENU_MIN_LINES + FRAME_LINES

    @property
    def viewport(self) -> int:
        """Menu lines left for content once the frame is drawn."""
        return self.menu - FRAME_LINES if self.framed else self.menu


@dataclass
class Frame:
    """One rendered screen."""

    lines: list[Text]
    heights: BlockHeights
    menu_offset: int = 0
    picker_offset: int = 0
    cursor_line: int = 0
    item_starts: list[int] = field(default_factory=list)

    def render(self) -> str:
        """ANSI string with exactly ``len(lines)`` newline-separated lines."""
        return "\n".join(to_ansi(line) for line in self.lines)

    def to_text(self) -> Text:
        return Text("\n").join(self.lines)

    @property
    def plain_lines(self) -> list[str]:
        return [line.plain for line in self.lines]


def to_ansi(line: Text) -> str:
    """Render a single line of Rich text to an ANSI string, unwrapped."""
    with _ansi_console.capture() as capture:
        _ansi_console.print(line, end="", soft_wrap=True)
    return capture.get().rstrip("\n")


def max_columns(width: int) -> int:
    """Usable columns; the last one is kept free to avoid terminal auto-wrap."""
    if width >= 2:
        return width - 1
    return max(width, 0)


def compute_scroll_offset(cursor_line: int, prev_offset: int, viewport: int, total: int) -> int:
    """Smallest scroll movement that keeps ``cursor_line`` visible."""
    if viewport <= 0 or total <= viewport:
        return 0
    offset = prev_offset
    if cursor_line < offset:
        offset = cursor_line
    elif cursor_line >= offset + viewport:
        offset = cursor_line - viewport + 1
    return max(0, min(offset, total - viewport))


def fit_block_heights(height: int, show_status: bool = False, show_debug: bool = False) -> BlockHeights:
    """Shrink blocks one line at a time until the minimum menu fits."""
    heights = BlockHeights(status=1 if show_status else 0, debug=1 if show_debug else 0)
    minimum_menu = MENU_MIN_LINES + FRAME_LINES
    while heights.fixed + minimum_menu > height:
        if heights.debug > 0:
            heights.debug -= 1
        elif heights.status > 0:
            heights.status -= 1
        elif heights.help > 1:
            heights.help -= 1
        elif heights.preview > 1:
            heights.preview -= 1
        else:
            break
    heights.menu = max(0, height - heights.fixed)
    return heights


# ── line helpers ────────────────────────────────────────────────────────


def crop(line: Text, cols: int) -> Text:
    """Copy of ``line`` cut to at most ``cols`` cells."""
    out = line.copy()
    if out.cell_len > cols:
        out.truncate(max(cols, 0), overflow="crop")
    return out


def with_ellipsis(line: Text, cols: int) -> Text:
    """Crop ``line`` and mark it as continued."""
    if cols <= len(ELLIPSIS):
        return Text(ELLIPSIS[: max(cols, 0)])
    out = crop(line, cols - len(ELLIPSIS))
    out.append(ELLIPSIS)
    return out


def fit_block(lines: Sequence[Text], count: int, cols: int) -> list[Text]:
    """Exactly ``count`` lines: cropped, cut with an ellipsis, or padded."""
    if count <= 0:
        return []
    out = [crop(line, cols) for line in lines[:count]]
    if len(lines) > count:
        out[-1] = with_ellipsis(lines[count - 1], cols)
    while len(out) < count:
        out.append(Text())
    return out


def printable(value: str, keep: str = "") -> str:
    """Replace control characters with spaces so a value stays on one line."""
    return "".join(c if c.isprintable() or c in keep else " " for c in value)


# ── blocks ──────────────────────────────────────────────────────────────


def _title_line(theme: EditorTheme) -> Text:
    line = Text()
    line.append(f" cchline v{__version__} ", style=theme.title)
    line.append(" status line editor", style=theme.muted)
    return line


def _preview_lines(preview: str, theme: EditorTheme) -> list[Text]:
    lines = [Text.from_ansi(printable(raw, keep="\x1b")) for raw in preview.splitlines() if raw.strip()]
    if not lines:
        return [Text("(no segments enabled)", style=theme.muted)]
    return lines


def install_status_text(status: InstallStatus | None) -> str:
    if status is None:
        return "Checking..."
    if status.state == InstallState.NOT_INSTALLED:
        return "Not installed"
    if status.state == InstallState.INSTALLED_CURRENT:
        return f"Installed v{status.installed}" if status.installed else "Installed"
    if status.state == InstallState.INSTALLED_OUTDATED:
        return f"Outdated v{status.installed} → v{status.current}"
    return "Installed (unknown version)"


def _install_line(status: InstallStatus | None, theme: EditorTheme) -> Text:
    if status is None:
        style = theme.muted
    elif status.state == InstallState.NOT_INSTALLED:
        style = theme.warning
    elif status.state == InstallState.INSTALLED_OUTDATED:
        style = theme.warning
    else:
        style = theme.success
    line = Text()
    line.append("Status line: ", style=theme.muted)
    line.append(install_status_text(status), style=style)
    return line


def _hint(pairs: Sequence[tuple[str, str]], theme: EditorTheme) -> Text:
    line = Text()
    for i, (key, label) in enumerate(pairs):
        if i:
            line.append("  ")
        line.append(key, style=theme.key_hint)
        line.append(f" {label}", style=theme.muted)
    return line


def _help_lines(state: EditorState, theme: EditorTheme) -> list[Text]:
    mode = state.mode
    if mode == "editing":
        return [
            _hint([("type", "edit"), ("ctrl+u", "clear"), ("backspace", "delete")], theme),
            _hint([("enter", "save"), (keys.ESC_HINT, "cancel")], theme),
        ]
    if mode == "picker":
        return [
            _hint([("type", "filter"), ("backspace", "delete")], theme),
            _hint([("↑↓/tab", "move"), ("enter", "apply"), (keys.ESC_HINT, "cancel")], theme),
        ]
    if mode == "confirm":
        return [_hint([("y/enter", "confirm"), (f"n/{keys.ESC_HINT}", "cancel")], theme)]
    return [
        _hint([("↑↓←→/hjkl", "move"), ("space", "toggle"), ("enter or /", "pick"), ("tab", "cycle")], theme),
        _hint(
            [
                ("a", "add"),
                ("x", "delete"),
                (keys.REORDER_HINT, "reorder"),
                ("o", "new row"),
                ("D", "delete row"),
                (keys.ROW_MOVE_HINT, "move row"),
            ],
            theme,
        ),
        _hint([("i", "install"), ("u", "uninstall"), (f"q/{keys.ESC_HINT}", "save & quit")], theme),
    ]


def _status_line(state: EditorState, theme: EditorTheme) -> Text | None:
    if state.confirm is not None:
        return Text(state.confirm.prompt(), style=theme.warning)
    if state.status_message:
        lowered = state.status_message.lower()
        style = theme.error if "failed" in lowered else theme.info
        return Text(printable(state.status_message), style=style)
    return None


# ── menu ────────────────────────────────────────────────────────────────


@dataclass
class MenuLines:
    lines: list[Text]
    starts: list[int]
    cursor_line: int = 0


def _prefix(is_current: bool, theme: EditorTheme) -> Text:
    if is_current:
        return Text.assemble((f"{theme.cursor_icon} ", theme.selected))
    return Text("  ")


def _theme_line(state: EditorState, item: RenderItem, is_current: bool, theme: EditorTheme) -> Text:
    value = "Nerd Font" if state.config.theme == ThemeMode.NERD_FONT else "Default"
    line = _prefix(is_current, theme)
    line.append(f"{item.label:<{FIELD_LABEL_WIDTH}}", style=theme.selected if is_current else "")
    line.append(value, style=theme.value)
    return line


def _separator_line(state: EditorState, item: RenderItem, is_current: bool, theme: EditorTheme) -> Text:
    chosen = item.key == state.config.separator
    line = _prefix(is_current, theme)
    line.append(theme.mark(chosen), style=theme.mark_style(chosen))
    line.append(f" {item.label:<{FIELD_LABEL_WIDTH - 2}}", style=theme.selected if is_current else "")
    line.append(f"'{printable(item.key)}'", style=theme.value)
    return line


def _text_field_line(state: EditorState, item: RenderItem, is_current: bool, theme: EditorTheme) -> Text:
    line = _prefix(is_current, theme)
    line.append(f"{item.label:<{FIELD_LABEL_WIDTH}}", style=theme.selected if is_current else "")
    editing = state.editing
    if editing is not None and editing.key == item.key:
        shown = "*" * len(editing.buffer) if item.key in SECRET_FIELDS else editing.buffer
        line.append(printable(shown), style=theme.value)
        line.append("█", style=theme.accent)
        return line
    value = getattr(state.config, item.key, "")
    if not value:
        line.append("(not set)", style=theme.muted)
    elif item.key in SECRET_FIELDS:
        line.append("****", style=theme.value)
    else:
        line.append(printable(value), style=theme.value)
    return line


def _segment_row_lines(
    state: EditorState,
    item: RenderItem,
    is_current: bool,
    theme: EditorTheme,
    cols: int,
) -> tuple[list[Text], int]:
    """Lines for one grid row plus the offset of the line holding the focus.

    Cells flow left to right and wrap onto indented continuation lines when
    the row is wider than ``cols``.
    """
    entries = state.grid.rows[item.row] if 0 <= item.row < len(state.grid) else []
    head = _prefix(is_current, theme)
    head.append(f"{item.label:<{ROW_LABEL_WIDTH}}", style=theme.selected if is_current else theme.muted)
    indent = " " * head.cell_len

    if not entries:
        head.append("(empty)", style=theme.selected if is_current else theme.muted)
        return [head], 0

    focus_col = state.grid.clamp_col(item.row, state.cursor.col) if is_current else -1
    lines = [head]
    focus_line = 0
    has_cells = False
    for col, entry in enumerate(entries):
        cell = Text.assemble((theme.mark(entry.enabled), theme.mark_style(entry.enabled)))
        name_style = "" if entry.enabled else theme.muted
        if col == focus_col:
            name_style = f"{theme.selected} reverse"
        cell.append(" ")
        cell.append(printable(segment_label(entry.name)), style=name_style)

        current = lines[-1]
        gap = len(CELL_GAP) if has_cells else 0
        if has_cells and current.cell_len + gap + cell.cell_len > cols:
            current = Text(indent)
            lines.append(current)
            gap = 0
        if gap:
            current.append(CELL_GAP)
        current.append_text(cell)
        has_cells = True
        if col == focus_col:
            focus_line = len(lines) - 1

    if item.row < len(state.grid) - 1:
        lines[-1].append(f" {theme.line_break_icon}", style=theme.muted)
    return lines, focus_line


def build_menu(state: EditorState, theme: EditorTheme, cols: int) -> MenuLines:
    """Render every menu item into display lines, recording where each starts."""
    lines: list[Text] = []
    starts: list[int] = []
    cursor_line = 0
    for index, item in enumerate(state.items):
        is_current = index == state.cursor.index
        if item.kind == ItemKind.HEADER:
            if index > 0:
                lines.append(Text())
            starts.append(len(lines))
            lines.append(Text(item.label, style=theme.header))
            continue

        starts.append(len(lines))
        focus = 0
        if item.kind == ItemKind.THEME:
            block = [_theme_line(state, item, is_current, theme)]
        elif item.kind == ItemKind.SEPARATOR:
            block = [_separator_line(state, item, is_current, theme)]
        elif item.kind == ItemKind.TEXT:
            block = [_text_field_line(state, item, is_current, theme)]
        else:
            block, focus = _segment_row_lines(state, item, is_current, theme, cols)
        if is_current:
            cursor_line = len(lines) + focus
        lines.extend(block)
    return MenuLines(lines=lines, starts=starts, cursor_line=cursor_line)


def build_picker(state: EditorState, theme: EditorTheme) -> MenuLines:
    """Picker overlay lines: the query line followed by the filtered names."""
    picker = state.picker
    query = Text.assemble(("Segment: ", theme.muted))
    query.append(picker.query, style=theme.value)
    query.append("█", style=theme.accent)
    lines = [query]
    matches = picker.matches()
    if not matches:
        lines.append(Text("  (no matches)", style=theme.muted))
        return MenuLines(lines=lines, starts=[0], cursor_line=0)

    selected = max(0, min(picker.index, len(matches) - 1))
    cursor_line = 1
    for i, name in enumerate(matches):
        is_current = i == selected
        line = _prefix(is_current, theme)
        line.append(segment_label(name), style=theme.selected if is_current else "")
        line.append(f"  {name}", style=theme.muted)
        if is_current:
            cursor_line = len(lines)
        lines.append(line)
    return MenuLines(lines=lines, starts=[0], cursor_line=cursor_line)


def _border(left: str, right: str, inner: int, label: str, theme: EditorTheme) -> Text:
    tag = f" {label} " if label else ""
    if tag and cell_len(tag) + 1 <= inner:
        body = "─" + tag + "─" * (inner - 1 - cell_len(tag))
    else:
        body = "─" * inner
    return Text(left + body + right, style=theme.muted)


def _menu_block(
    menu: MenuLines,
    offset: int,
    heights: BlockHeights,
    cols: int,
    title: str,
    theme: EditorTheme,
) -> list[Text]:
    viewport = heights.viewport
    visible = menu.lines[offset : offset + viewport]
    if not heights.framed or cols < 3:
        return fit_block(visible, viewport, cols)

    inner = cols - 2
    above = offset
    below = max(0, len(menu.lines) - offset - viewport)
    top_label = f"{title} ↑{above}" if above else title
    bottom_label = f"↓{below}" if below else ""

    out = [_border("╭", "╮", inner, top_label, theme)]
    for line in fit_block(visible, viewport, inner):
        body = line.copy()
        body.truncate(inner, overflow="crop", pad=True)
        row = Text.assemble(("│", theme.muted))
        row.append_text(body)
        row.append("│", style=theme.muted)
        out.append(row)
    out.append(_border("╰", "╯", inner, bottom_label, theme))
    return out


# ── frame ───────────────────────────────────────────────────────────────


def render_frame(state: EditorState, preview: str, theme: EditorTheme = DEFAULT_THEME) -> Frame:
    """Fit the whole screen into ``state.width`` x ``state.height``."""
    height = max(state.height, 0)
    cols = max_columns(state.width)

    status = _status_line(state, theme)
    heights = fit_block_heights(height, show_status=status is not None, show_debug=state.debug)
    menu_cols = cols - 2 if heights.framed and cols >= 3 else cols

    if state.picker.open:
        menu = build_picker(state, theme)
        prev_offset = state.picker.offset
        menu_title = "Pick segment"
    else:
        menu = build_menu(state, theme, menu_cols)
        prev_offset = state.scroll_offset
        menu_title = "Settings"
    offset = compute_scroll_offset(menu.cursor_line, prev_offset, heights.viewport, len(menu.lines))

    lines: list[Text] = []
    lines += fit_block([_title_line(theme)], heights.title, cols)
    lines += fit_block(_preview_lines(preview, theme), heights.preview, cols)
    lines += _menu_block(menu, offset, heights, cols, menu_title, theme)
    lines += fit_block([_install_line(state.install_status, theme)], heights.install, cols)
    lines += fit_block(_help_lines(state, theme), heights.help, cols)
    if status is not None:
        lines += fit_block([status], heights.status, cols)
    if state.debug:
        debug = Text(f"DEBUG: last key = {state.last_key}", style=theme.muted)
        lines += fit_block([debug], heights.debug, cols)

    # Too short even after shrinking: cut the frame.
    lines = lines[:height]
    while len(lines) < height:
        lines.append(Text())

    frame = Frame(lines=lines, heights=heights, cursor_line=menu.cursor_line, item_starts=menu.starts)
    if state.picker.open:
        frame.picker_offset = offset
        frame.menu_offset = state.scroll_offset
    else:
        frame.menu_offset = offset
    return frame


def remember_viewport(state: EditorState, frame: Frame) -> EditorState:
    """Carry the scroll offsets a frame chose into the state for the next one."""
    state.scroll_offset = frame.menu_offset
    if state.picker.open:
        state.picker = replace(state.picker, offset=frame.picker_offset)
    return state
