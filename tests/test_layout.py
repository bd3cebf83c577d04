"""Tests for the layout fitter."""

from __future__ import annotations

import pytest
from rich.cells import cell_len
from rich.text import Text

from cchline.config import StatusLineConfig, config_from_dict
from cchline.editor import keys
from cchline.editor.layout import (
    BlockHeights,
    build_menu,
    compute_scroll_offset,
    fit_block,
    fit_block_heights,
    install_status_text,
    printable,
    remember_viewport,
    render_frame,
)
from cchline.editor.navigation import Cursor
from cchline.editor.picker import open_picker
from cchline.editor.state import EditorState
from cchline.editor.theme import DEFAULT_THEME, resolve_theme
from cchline.preview import generate_preview
from cchline.types import InstallState, InstallStatus, SemVer

ROW0 = 9


def _state(width=80, height=24, **kwargs):
    state = EditorState.from_config(StatusLineConfig(), width=width, height=height, **kwargs)
    return state


def _lines(frame):
    return frame.render().split("\n")


class TestScrollOffset:
    def test_scrolls_down_minimally(self):
        assert compute_scroll_offset(9, 2, 5, 12) == 5

    def test_stays_put_while_visible(self):
        assert compute_scroll_offset(4, 2, 5, 12) == 2
        assert compute_scroll_offset(6, 2, 5, 12) == 2

    def test_scrolls_up_to_cursor(self):
        assert compute_scroll_offset(1, 4, 5, 12) == 1

    def test_clamped_to_content(self):
        assert compute_scroll_offset(11, 9, 5, 12) == 7
        assert compute_scroll_offset(0, -3, 5, 12) == 0

    def test_no_scroll_when_everything_fits(self):
        assert compute_scroll_offset(8, 3, 10, 10) == 0

    def test_cursor_leaving_view_is_brought_back(self):
        viewport, total = 4, 20
        offset = 0
        for cursor in list(range(total)) + list(range(total - 1, -1, -1)):
            offset = compute_scroll_offset(cursor, offset, viewport, total)
            assert offset <= cursor < offset + viewport


class TestBlockHeights:
    def test_full_size(self):
        heights = fit_block_heights(24, show_status=True, show_debug=True)
        assert (heights.preview, heights.help, heights.status, heights.debug) == (3, 3, 1, 1)
        assert heights.menu == 24 - 10
        assert heights.framed
        assert heights.viewport == heights.menu - 2

    @pytest.mark.parametrize(
        "height, expected",
        [
            (13, (3, 3, 1, 1)),
            (12, (3, 3, 1, 0)),
            (11, (3, 3, 0, 0)),
            (10, (3, 2, 0, 0)),
            (9, (3, 1, 0, 0)),
            (8, (2, 1, 0, 0)),
            (7, (1, 1, 0, 0)),
            (5, (1, 1, 0, 0)),
        ],
    )
    def test_shrink_order(self, height, expected):
        heights = fit_block_heights(height, show_status=True, show_debug=True)
        assert (heights.preview, heights.help, heights.status, heights.debug) == expected

    def test_menu_unframed_when_tiny(self):
        heights = fit_block_heights(6)
        assert heights.menu == 2
        assert not heights.framed
        assert heights.viewport == 2

    def test_optional_blocks_absent(self):
        heights = fit_block_heights(24)
        assert heights == BlockHeights(menu=24 - 8)


class TestFitBlock:
    def test_cut_block_gets_ellipsis(self):
        out = fit_block([Text("one"), Text("two"), Text("three")], 2, 20)
        assert [line.plain for line in out] == ["one", "two..."]

    def test_short_block_is_padded(self):
        out = fit_block([Text("one")], 3, 20)
        assert [line.plain for line in out] == ["one", "", ""]

    def test_lines_cropped_to_columns(self):
        out = fit_block([Text("abcdefgh")], 1, 5)
        assert out[0].plain == "abcde"

    def test_ellipsis_respects_columns(self):
        out = fit_block([Text("abcdefgh"), Text("x")], 1, 5)
        assert out[0].plain == "ab..."
        assert fit_block([Text("a"), Text("b")], 1, 2)[0].plain == ".."


class TestFrameContract:
    @pytest.mark.parametrize("width", [2, 3, 4, 8, 20, 41, 80, 160])
    @pytest.mark.parametrize("height", [1, 2, 3, 4, 6, 7, 9, 12, 24, 60])
    def test_exact_height_and_bounded_width(self, width, height):
        state = _state(width, height, debug=True)
        state.status_message = "Installed status line in /very/long/path/to/settings.json"
        state.cursor = Cursor(ROW0, 8)
        frame = render_frame(state, generate_preview(state.config), DEFAULT_THEME)
        lines = _lines(frame)
        assert len(lines) == height
        for line in lines:
            assert Text.from_ansi(line).cell_len <= width - 1

    @pytest.mark.parametrize("width, height", [(30, 12), (50, 16), (100, 40)])
    def test_picker_overlay_fits_terminal(self, width, height):
        state = _state(width, height)
        state.picker = open_picker("cch_limits", (0, 0))
        frame = render_frame(state, "", DEFAULT_THEME)
        lines = _lines(frame)
        assert len(lines) == height
        assert all(Text.from_ansi(line).cell_len <= width - 1 for line in lines)

    def test_width_one_renders_empty_columns(self):
        frame = render_frame(_state(1, 5), "preview", DEFAULT_THEME)
        assert len(_lines(frame)) == 5
        assert all(Text.from_ansi(line).cell_len <= 1 for line in _lines(frame))

    def test_all_palettes(self):
        for name in ("default", "ember", "mono"):
            frame = render_frame(_state(60, 20), "x", resolve_theme(name))
            assert len(_lines(frame)) == 20

    def test_framed_menu_rows_fill_the_box(self):
        frame = render_frame(_state(50, 30), "p", DEFAULT_THEME)
        boxed = [line for line in frame.plain_lines if line.startswith(("╭", "│", "╰"))]
        assert boxed[0].startswith("╭") and boxed[-1].startswith("╰")
        assert len(boxed) == frame.heights.menu
        assert {cell_len(line) for line in boxed} == {49}

    @pytest.mark.parametrize(
        "data",
        [
            {"cch_url": "https://a\nhttps://b"},
            {"cch_url": "https://a\r\x1b[2J\x07"},
            {"separator": "\t" * 10},
            {"separator": "\n"},
        ],
    )
    @pytest.mark.parametrize("width, height", [(40, 40), (80, 40), (20, 9)])
    def test_control_characters_in_config(self, data, width, height):
        state = EditorState.from_config(config_from_dict(data), width=width, height=height)
        state.cursor = Cursor(len(state.items) - 2, 0)
        frame = render_frame(state, generate_preview(state.config), DEFAULT_THEME)
        lines = _lines(frame)
        assert len(lines) == height
        for line in lines:
            assert Text.from_ansi(line).cell_len <= width - 1
        assert not any(c in line for line in frame.plain_lines for c in "\t\r\n\x07")

    def test_printable_replaces_control_characters(self):
        assert printable("a\tb\nc") == "a b c"
        assert printable("\x1b[1mx", keep="\x1b") == "\x1b[1mx"


class TestFrameContent:
    def test_blocks_in_order(self):
        state = _state(100, 40, debug=True)
        state.status_message = "Saved"
        state.last_key = "tab"
        plain = render_frame(state, "preview line", DEFAULT_THEME).plain_lines
        assert "cchline v" in plain[0]
        assert plain[1] == "preview line"
        assert plain[4].startswith("╭")
        assert plain[-1] == "DEBUG: last key = tab"
        assert plain[-2] == "Saved"
        assert plain[-6].startswith("Status line: Checking...")

    def test_long_preview_is_cut_with_ellipsis(self):
        plain = render_frame(_state(80, 30), "a\nb\nc\nd\ne", DEFAULT_THEME).plain_lines
        assert plain[1:4] == ["a", "b", "c..."]

    def test_short_terminal_drops_debug_before_status(self):
        state = _state(80, 12, debug=True)
        state.status_message = "Saved"
        plain = render_frame(state, "p", DEFAULT_THEME).plain_lines
        assert "Saved" in plain
        assert not any(line.startswith("DEBUG") for line in plain)

    def test_confirm_prompt_shown(self):
        state = _state(80, 30)
        state.cursor = Cursor(ROW0, 0)
        from cchline.editor.confirm import request_delete_row

        state.confirm = request_delete_row(0)
        plain = render_frame(state, "p", DEFAULT_THEME).plain_lines
        assert "Delete row 1? (y/N)" in plain

    def test_help_names_the_escape_key(self):
        plain = "\n".join(render_frame(_state(100, 40), "p", DEFAULT_THEME).plain_lines)
        assert f"q/{keys.ESC_HINT} save & quit" in plain

    def test_api_key_is_masked(self):
        state = _state(80, 40)
        state.config.cch_api_key = "sk-secret"
        plain = "\n".join(render_frame(state, "p", DEFAULT_THEME).plain_lines)
        assert "sk-secret" not in plain
        assert "****" in plain

    def test_menu_scrolls_to_cursor(self):
        state = _state(80, 16)
        state.cursor = Cursor(len(state.items) - 1, 0)
        frame = render_frame(state, "p", DEFAULT_THEME)
        viewport = frame.heights.viewport
        assert frame.menu_offset <= frame.cursor_line < frame.menu_offset + viewport
        assert any("API Key" in line for line in frame.plain_lines)
        assert remember_viewport(state, frame).scroll_offset == frame.menu_offset

    def test_picker_scrolls_to_selection(self):
        state = _state(60, 14)
        state.picker = open_picker("cch_limits", (0, 0))
        frame = render_frame(state, "p", DEFAULT_THEME)
        assert any("CCH Limits" in line for line in frame.plain_lines)
        assert any("Pick segment" in line for line in frame.plain_lines)
        assert remember_viewport(state, frame).picker.offset == frame.picker_offset


class TestMenuLines:
    def test_headers_have_spacer_lines(self):
        state = _state()
        menu = build_menu(state, DEFAULT_THEME, 78)
        assert menu.lines[menu.starts[0]].plain == "THEME"
        separator_header = menu.starts[2]
        assert menu.lines[separator_header - 1].plain == ""
        assert menu.lines[separator_header].plain == "SEPARATOR"

    def test_wrapped_row_reports_focused_line(self):
        state = _state()
        state.cursor = Cursor(ROW0, 8)
        menu = build_menu(state, DEFAULT_THEME, 40)
        start = menu.starts[ROW0]
        assert menu.cursor_line > start
        assert "Update" in menu.lines[menu.cursor_line].plain
        assert all(line.cell_len <= 40 for line in menu.lines[start : menu.cursor_line + 1])

    def test_empty_row(self):
        state = EditorState.from_config(StatusLineConfig(segment_order=[], segment_enabled=[]))
        state.grid.rows = [[]]
        state.refresh_items()
        menu = build_menu(state, DEFAULT_THEME, 78)
        assert "(empty)" in menu.lines[menu.starts[ROW0]].plain


def test_install_status_text():
    assert install_status_text(None) == "Checking..."
    assert install_status_text(InstallStatus(InstallState.NOT_INSTALLED)) == "Not installed"
    current = InstallStatus(InstallState.INSTALLED_CURRENT, SemVer(0, 3, 0), SemVer(0, 3, 0))
    assert install_status_text(current) == "Installed v0.3.0"
    outdated = InstallStatus(InstallState.INSTALLED_OUTDATED, SemVer(0, 2, 0), SemVer(0, 3, 0))
    assert install_status_text(outdated) == "Outdated v0.2.0 → v0.3.0"
    assert install_status_text(InstallStatus(InstallState.INSTALLED_UNKNOWN)) == "Installed (unknown version)"
