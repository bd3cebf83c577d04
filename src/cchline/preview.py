"""Status line preview.

Renders the configured arrangement with fixed sample values so the editor
can show what the status line will look like. Rows are joined with the
configured separator; each row becomes one output line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from rich.color import ColorSystem
from rich.style import Style

from .catalog import PREVIEW_VALUES
from .config import StatusLineConfig, normalize_segment_enabled
from .types import LINE_BREAK_MARKER, ThemeMode


@dataclass(frozen=True)
class SegmentStyle:
    """Icons and colors for one segment type."""

    icon: str
    nerd_icon: str
    icon_color: str
    text_color: str
    bold: bool = False

    def icon_for(self, mode: ThemeMode) -> str:
        return self.nerd_icon if mode == ThemeMode.NERD_FONT else self.icon


SEGMENT_STYLES: dict[str, SegmentStyle] = {
    "model": SegmentStyle("🤖", "\ue26d", "bright_cyan", "bright_cyan", True),
    "directory": SegmentStyle("📁", "\U000f024b", "bright_yellow", "bright_green", True),
    "git": SegmentStyle("🌿", "\U000f02a2", "bright_blue", "bright_blue", True),
    "context_window": SegmentStyle("⚡", "\uf49b", "bright_magenta", "bright_magenta", True),
    "usage": SegmentStyle("📊", "\U000f0a9e", "bright_cyan", "bright_cyan"),
    "cost": SegmentStyle("💰", "\ueec1", "yellow", "yellow", True),
    "session": SegmentStyle("⏱", "\U000f19bb", "green", "green", True),
    "output_style": SegmentStyle("🎯", "\U000f12f5", "cyan", "cyan", True),
    "update": SegmentStyle("🔄", "\uf021", "bright_yellow", "bright_yellow"),
    "cch_model": SegmentStyle("🧠", "\U000f06a9", "bright_cyan", "bright_cyan", True),
    "cch_provider": SegmentStyle("🛰", "\U000f0163", "bright_blue", "bright_blue"),
    "cch_cost": SegmentStyle("💵", "\ueec1", "yellow", "yellow", True),
    "cch_requests": SegmentStyle("📨", "\U000f0a9e", "green", "green"),
    "cch_limits": SegmentStyle("🚦", "\U000f0e1e", "bright_red", "bright_red"),
}


def _paint(text: str, color: str, bold: bool = False) -> str:
    return Style(color=color, bold=bold).render(text, color_system=ColorSystem.STANDARD)


def render_segment(name: str, value: str, mode: ThemeMode) -> str:
    """Render one segment as ``<icon> <value>`` with ANSI colors."""
    style = SEGMENT_STYLES.get(name)
    if style is None:
        return value
    icon = _paint(style.icon_for(mode), style.icon_color)
    text = _paint(value, style.text_color, style.bold)
    return f"{icon} {text}"


def generate_status_line(cfg: StatusLineConfig, values: Mapping[str, str]) -> str:
    """Generate the status line text for ``values`` keyed by segment name.

    Disabled entries and segments without a value are skipped. Empty rows
    produce no output line.
    """
    lines: list[list[str]] = []
    current: list[str] = []
    flags = iter(normalize_segment_enabled(cfg.segment_order, cfg.segment_enabled))

    for name in cfg.segment_order:
        if name == LINE_BREAK_MARKER:
            if current:
                lines.append(current)
                current = []
            continue
        if not next(flags):
            continue
        value = values.get(name, "")
        if value:
            current.append(render_segment(name, value, cfg.theme))

    if current:
        lines.append(current)
    return "\n".join(cfg.separator.join(line) for line in lines)


def generate_preview(cfg: StatusLineConfig) -> str:
    """Status line text for ``cfg`` using the fixed sample values."""
    return generate_status_line(cfg, PREVIEW_VALUES)
