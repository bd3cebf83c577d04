"""Install/uninstall the status line in Claude Code settings."""

from __future__ import annotations

import json
import logging
import shutil
import sys
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class InstallError(Exception):
    """Raised when Claude Code settings cannot be read or written."""


def get_user_settings_path() -> Path:
    """Get path to user-level Claude settings."""
    return Path.home() / ".claude" / "settings.json"


def get_executable_path() -> str:
    """Resolve the command Claude Code should run for the status line."""
    found = shutil.which("cchline")
    if found:
        return str(Path(found).resolve())
    return str(Path(sys.argv[0]).resolve())


def load_claude_settings(path: Path) -> dict[str, Any]:
    """Load Claude settings for reading. Missing or malformed files give {}."""
    try:
        with open(path) as f:
            settings = json.load(f)
        if isinstance(settings, dict):
            return settings
        return {}
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}


def _load_for_update(path: Path) -> dict[str, Any]:
    """Load Claude settings before rewriting them.

    Unlike :func:`load_claude_settings`, a malformed file is an error here so
    that we never overwrite settings we could not parse.
    """
    try:
        with open(path) as f:
            settings = json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        raise InstallError(f"cannot parse {path}: {e}") from e
    except OSError as e:
        raise InstallError(f"cannot read {path}: {e}") from e
    if not isinstance(settings, dict):
        raise InstallError(f"unexpected content in {path}")
    return settings


def save_claude_settings(path: Path, settings: dict[str, Any]) -> None:
    """Save Claude settings to a file."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(settings, f, indent=2)
    except OSError as e:
        raise InstallError(f"cannot write {path}: {e}") from e


def get_status_line_command(settings_path: Path | None = None) -> str | None:
    """Return the registered status line command, if any."""
    settings = load_claude_settings(settings_path or get_user_settings_path())
    status_line = settings.get("statusLine")
    if not isinstance(status_line, dict):
        return None
    command = status_line.get("command")
    if not isinstance(command, str) or not command:
        return None
    return command


def install_status_line(settings_path: Path | None = None, command: str | None = None) -> Path:
    """Register the status line command in Claude settings.

    Returns the settings path. Raises InstallError on failure.
    """
    path = settings_path or get_user_settings_path()
    settings = _load_for_update(path)
    settings["statusLine"] = {
        "type": "command",
        "command": command or get_executable_path(),
        "padding": 0,
    }
    save_claude_settings(path, settings)
    logger.info("Installed status line into %s", path)
    return path


def uninstall_status_line(settings_path: Path | None = None) -> bool:
    """Remove the status line entry. Returns False when nothing was installed."""
    path = settings_path or get_user_settings_path()
    if not path.exists():
        return False
    settings = _load_for_update(path)
    if "statusLine" not in settings:
        return False
    del settings["statusLine"]
    save_claude_settings(path, settings)
    logger.info("Removed status line from %s", path)
    return True
