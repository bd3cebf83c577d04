"""Type definitions for cchline.

Shared enums and dataclasses used by the configuration layer, the editor and
the installer. These replace magic strings with type-safe constants.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


LINE_BREAK_MARKER = "---"


class ThemeMode(str, Enum):
    """Icon set used by the status line."""

    DEFAULT = "default"
    NERD_FONT = "nerd_font"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | None) -> "ThemeMode":
        """Parse a config value, falling back to nerd font icons."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NERD_FONT


class InstallState(str, Enum):
    """Result of probing the Claude Code settings for our status line."""

    NOT_INSTALLED = "not_installed"
    INSTALLED_CURRENT = "installed_current"
    INSTALLED_OUTDATED = "installed_outdated"
    INSTALLED_UNKNOWN = "installed_unknown"

    def __str__(self) -> str:
        return self.value


class ConfirmAction(str, Enum):
    """Actions gated behind an explicit yes/no prompt."""

    DELETE_ROW = "delete_row"
    INSTALL = "install"
    UNINSTALL = "uninstall"

    def __str__(self) -> str:
        return self.value


class SemVer(NamedTuple):
    """A major.minor.patch version triple. Compares field by field."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass
class SegmentEntry:
    """One cell of the segment grid."""

    name: str
    enabled: bool = True


@dataclass(frozen=True)
class InstallStatus:
    """Install probe outcome with optional versions for display."""

    state: InstallState
    installed: SemVer | None = None
    current: SemVer | None = None

    @property
    def is_installed(self) -> bool:
        return self.state != InstallState.NOT_INSTALLED
