"""YAML-based configuration for cchline.

The config lives at ``~/.claude/cchline/config.yaml`` (the directory can be
moved with ``CCHLINE_CONFIG_DIR``). Loading never fails: a missing, unreadable
or malformed file falls back to the defaults, and malformed fields are
normalized so that ``segment_enabled`` always has one flag per non-marker
entry of ``segment_order``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

import yaml

from .types import LINE_BREAK_MARKER, ThemeMode

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = " | "

DEFAULT_SEGMENT_ORDER: list[str] = [
    "model",
    "directory",
    "git",
    "context_window",
    "usage",
    "cost",
    "session",
    "output_style",
    "update",
]

DEFAULT_ENABLED_SEGMENTS = {"model", "directory", "git", "context_window"}

# Single-choice separator presets shown in the editor: (label, value).
SEPARATOR_PRESETS: list[tuple[str, str]] = [
    ("Pipe", " | "),
    ("Dot", " · "),
    ("Bar", " ⁞ "),
    ("Arrow", " → "),
    ("Chevron", " ❯ "),
]


@dataclass
class StatusLineConfig:
    """The configuration record shared by the editor and the status line."""

    theme: ThemeMode = ThemeMode.NERD_FONT
    separator: str = DEFAULT_SEPARATOR
    segment_order: list[str] = field(default_factory=lambda: list(DEFAULT_SEGMENT_ORDER))
    segment_enabled: list[bool] = field(
        default_factory=lambda: [name in DEFAULT_ENABLED_SEGMENTS for name in DEFAULT_SEGMENT_ORDER]
    )
    cch_url: str = ""
    cch_api_key: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme.value,
            "separator": self.separator,
            "segment_order": list(self.segment_order),
            "segment_enabled": list(self.segment_enabled),
            "segments": derive_segment_toggles(self.segment_order, self.segment_enabled),
            "cch_url": self.cch_url,
            "cch_api_key": self.cch_api_key,
        }


def get_config_dir() -> Path:
    """Get the cchline config directory."""
    override = os.environ.get("CCHLINE_CONFIG_DIR")
    if override:
        return Path(os.path.expanduser(override))
    return Path.home() / ".claude" / "cchline"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def non_break_segment_count(order: Sequence[str]) -> int:
    """Count the entries of ``order`` that are not line-break markers."""
    return sum(1 for name in order if name != LINE_BREAK_MARKER)


def normalize_segment_enabled(order: Sequence[str], enabled: Sequence[Any] | None) -> list[bool]:
    """Return enabled flags with exactly one entry per non-marker segment.

    Missing flags are filled with True, extra flags are dropped.
    """
    count = non_break_segment_count(order)
    flags = [bool(flag) for flag in (enabled or [])][:count]
    flags.extend([True] * (count - len(flags)))
    return flags


def derive_segment_toggles(order: Sequence[str], enabled: Sequence[bool]) -> dict[str, bool]:
    """Collapse per-instance flags into one flag per segment name.

    A name is on when any of its instances is enabled.
    """
    toggles: dict[str, bool] = {}
    flags = iter(normalize_segment_enabled(order, enabled))
    for name in order:
        if name == LINE_BREAK_MARKER:
            continue
        toggles[name] = toggles.get(name, False) or next(flags)
    return toggles


def _string_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [str(item) for item in value]


def config_from_dict(data: dict[str, Any]) -> StatusLineConfig:
    """Build a config record from a parsed YAML mapping."""
    cfg = StatusLineConfig()

    if "theme" in data:
        cfg.theme = ThemeMode.parse(data.get("theme"))

    separator = data.get("separator")
    if isinstance(separator, str) and separator:
        cfg.separator = separator

    order = _string_list(data.get("segment_order"))
    if order:
        cfg.segment_order = order
        enabled = data.get("segment_enabled")
        if not isinstance(enabled, list):
            legacy = data.get("segments")
            if isinstance(legacy, dict):
                enabled = [
                    bool(legacy.get(name, True))
                    for name in order
                    if name != LINE_BREAK_MARKER
                ]
            else:
                enabled = None
        cfg.segment_enabled = normalize_segment_enabled(order, enabled)

    for key in ("cch_url", "cch_api_key"):
        value = data.get(key)
        if isinstance(value, str):
            setattr(cfg, key, value)

    return cfg


def load_config(path: Path | None = None) -> StatusLineConfig:
    """Load the config, falling back to defaults on any problem."""
    config_path = path or get_config_path()
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return StatusLineConfig()
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return StatusLineConfig()

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", config_path)
        return StatusLineConfig()
    return config_from_dict(data)


def save_config(cfg: StatusLineConfig, path: Path | None = None) -> Path:
    """Save the config. Raises OSError when the file cannot be written."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(cfg.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    logger.debug("Saved config to %s", config_path)
    return config_path

