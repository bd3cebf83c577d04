"""Keyboard input helpers for the editor.

Key presses arrive as the raw strings returned by ``readchar.readkey()``.
These helpers replace repeated inline conditionals with readable calls.
"""

from __future__ import annotations

import sys

import readchar

SHIFT_TAB = "\x1b[Z"

# Alt+letter arrives as ESC followed by the letter.
ALT_H = "\x1bh"
ALT_J = "\x1bj"
ALT_K = "\x1bk"
ALT_L = "\x1bl"

if sys.platform == "darwin":
    REORDER_HINT = "⌥h/⌥l"
    ROW_MOVE_HINT = "⌥j/⌥k"
else:
    REORDER_HINT = "alt+h/l"
    ROW_MOVE_HINT = "alt+j/k"

# readchar waits for a second byte after ESC on POSIX, so a lone Escape
# is only seen when pressed twice.
ESC_HINT = "esc" if sys.platform == "win32" else "esc esc"


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_interrupt(key: str) -> bool:
    """Check if key is Ctrl+C."""
    return key in (readchar.key.CTRL_C, "\x03")


def is_quit(key: str) -> bool:
    """Quit-and-save keys in normal mode."""
    return key == "q" or is_escape(key) or is_interrupt(key)


def is_up(key: str) -> bool:
    """Check if key is up arrow or vim 'k'."""
    return key == "k" or key == readchar.key.UP


def is_down(key: str) -> bool:
    """Check if key is down arrow or vim 'j'."""
    return key == "j" or key == readchar.key.DOWN


def is_left(key: str) -> bool:
    return key == "h" or key == readchar.key.LEFT


def is_right(key: str) -> bool:
    return key == "l" or key == readchar.key.RIGHT


def is_up_arrow(key: str) -> bool:
    """Arrow only; used where letters are typed text."""
    return key == readchar.key.UP


def is_down_arrow(key: str) -> bool:
    return key == readchar.key.DOWN


def is_install_key(key: str) -> bool:
    return key == "i"


def is_uninstall_key(key: str) -> bool:
    return key == "u"


def is_tab(key: str) -> bool:
    return key in (readchar.key.TAB, "\t")


def is_shift_tab(key: str) -> bool:
    return key == SHIFT_TAB


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_clear_line(key: str) -> bool:
    """Ctrl+U clears a text field."""
    return key in (readchar.key.CTRL_U, "\x15")


def is_space(key: str) -> bool:
    return key == " "


def is_move_segment_left(key: str) -> bool:
    return key in (ALT_H, "<")


def is_move_segment_right(key: str) -> bool:
    return key in (ALT_L, ">")


def is_move_row_up(key: str) -> bool:
    return key in (ALT_K, "K")


def is_move_row_down(key: str) -> bool:
    return key in (ALT_J, "J")


def is_yes(key: str) -> bool:
    return key in ("y", "Y") or is_enter(key)


def is_no(key: str) -> bool:
    return key in ("n", "N") or is_escape(key)


def is_printable(key: str) -> bool:
    """Single printable character, as typed into a text field."""
    return len(key) == 1 and key.isprintable()


def describe(key: str) -> str:
    """Readable name for a key, used by the debug readout."""
    names = {
        readchar.key.UP: "up",
        readchar.key.DOWN: "down",
        readchar.key.LEFT: "left",
        readchar.key.RIGHT: "right",
        readchar.key.ENTER: "enter",
        readchar.key.ESC: "esc",
        readchar.key.TAB: "tab",
        readchar.key.BACKSPACE: "backspace",
        SHIFT_TAB: "shift+tab",
        ALT_H: "alt+h",
        ALT_J: "alt+j",
        ALT_K: "alt+k",
        ALT_L: "alt+l",
        " ": "space",
        "\r": "enter",
    }
    if key in names:
        return names[key]
    if len(key) == 1 and ord(key) < 32:
        return f"ctrl+{chr(ord(key) + 96)}"
    return key
