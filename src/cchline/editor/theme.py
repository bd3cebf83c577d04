"""Semantic palettes for the editor screen.

A palette is passed explicitly to the renderer instead of living in module
state, so several editors (or tests) can render with different palettes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class EditorTheme:
    """Semantic style tokens, all in Rich style syntax."""

    name: str
    accent: str
    info: str
    success: str
    warning: str
    error: str
    muted: str
    value: str
    title: str

    cursor_icon: str = "▸"
    enabled_icon: str = "●"
    disabled_icon: str = "○"
    line_break_icon: str = "↵"

    @property
    def selected(self) -> str:
        return f"bold {self.accent}"

    @property
    def header(self) -> str:
        return f"bold {self.muted}"

    @property
    def key_hint(self) -> str:
        return f"bold {self.accent}"

    def mark_style(self, enabled: bool) -> str:
        return self.success if enabled else self.muted

    def mark(self, enabled: bool) -> str:
        return self.enabled_icon if enabled else self.disabled_icon


DEFAULT_THEME = EditorTheme(
    name="default",
    accent="color(86)",
    info="color(39)",
    success="color(78)",
    warning="color(214)",
    error="color(203)",
    muted="color(243)",
    value="color(214)",
    title="bold color(86) on color(236)",
)

_THEMES: dict[str, EditorTheme] = {
    "default": DEFAULT_THEME,
    "ember": EditorTheme(
        name="ember",
        accent="color(130)",
        info="color(24)",
        success="color(28)",
        warning="color(136)",
        error="color(124)",
        muted="grey50",
        value="color(136)",
        title="bold color(130) on color(236)",
    ),
    "mono": EditorTheme(
        name="mono",
        accent="bold",
        info="default",
        success="default",
        warning="bold",
        error="bold",
        muted="dim",
        value="italic",
        title="reverse",
        enabled_icon="*",
        disabled_icon="-",
        cursor_icon=">",
    ),
}


def _normalize_theme_key(value: str) -> str:
    return value.strip().lower().replace("_", "-")


def available_themes() -> list[str]:
    return sorted(_THEMES)


def resolve_theme(name: str | None = None) -> EditorTheme:
    """Pick a palette by name, or from ``CCHLINE_TUI_THEME``.

    Unknown names resolve to the default palette.
    """
    env_theme = os.environ.get("CCHLINE_TUI_THEME")
    key = name or env_theme
    if not key:
        return DEFAULT_THEME
    return _THEMES.get(_normalize_theme_key(key), DEFAULT_THEME)
