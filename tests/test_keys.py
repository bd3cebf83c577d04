from __future__ import annotations

import readchar

from cchline.editor import keys


def test_navigation_keys():
    assert keys.is_up("k") and keys.is_up(readchar.key.UP)
    assert keys.is_down("j") and keys.is_down(readchar.key.DOWN)
    assert keys.is_up_arrow(readchar.key.UP) and not keys.is_up_arrow("k")


def test_alt_keys_are_not_escape():
    for key in (keys.ALT_H, keys.ALT_J, keys.ALT_K, keys.ALT_L):
        assert not keys.is_escape(key)
        assert not keys.is_quit(key)


def test_move_keys():
    assert keys.is_move_segment_left(keys.ALT_H) and keys.is_move_segment_left("<")
    assert keys.is_move_segment_right(keys.ALT_L) and keys.is_move_segment_right(">")
    assert keys.is_move_row_up(keys.ALT_K) and keys.is_move_row_up("K")
    assert keys.is_move_row_down(keys.ALT_J) and keys.is_move_row_down("J")


def test_confirm_keys():
    assert keys.is_yes("y") and keys.is_yes(readchar.key.ENTER)
    assert keys.is_no("N") and keys.is_no(readchar.key.ESC)
    assert not keys.is_yes("x") and not keys.is_no("x")


def test_printable():
    assert keys.is_printable("a") and keys.is_printable(" ")
    assert not keys.is_printable(readchar.key.UP)
    assert not keys.is_printable("\x15")


def test_describe():
    assert keys.describe(keys.SHIFT_TAB) == "shift+tab"
    assert keys.describe("\x15") == "ctrl+u"
    assert keys.describe("x") == "x"


def test_double_escape_quits_and_cancels():
    assert keys.is_quit("\x1b\x1b")
    assert keys.is_no("\x1b\x1b")

