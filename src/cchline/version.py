"""Installed-version probe.

Looks up the status line command registered in Claude Code's settings,
runs it with ``-v`` and compares the reported version with ours.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from . import __version__
from .installer import get_status_line_command
from .types import InstallState, InstallStatus, SemVer

logger = logging.getLogger(__name__)

PROGRAM_NAME = "cchline"

_SEMVER_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)(?:[-+].*)?$")


def parse_semver_token(token: str) -> SemVer | None:
    """Parse ``1.2.3``, ``v1.2.3`` or ``1.2.3-beta.1``. Returns None otherwise."""
    match = _SEMVER_RE.match(token.strip())
    if not match:
        return None
    return SemVer(*(int(part) for part in match.groups()))


def parse_version_output(output: str) -> tuple[bool, SemVer | None, bool]:
    """Parse ``cchline -v`` output.

    Returns ``(is_dev, version, ok)``. ``ok`` is False unless the program
    name is followed by either ``dev`` or a semantic version.
    """
    tokens = output.split()
    for i, token in enumerate(tokens[:-1]):
        if token != PROGRAM_NAME:
            continue
        candidate = tokens[i + 1]
        if candidate == "dev":
            return True, None, True
        version = parse_semver_token(candidate)
        if version is not None:
            return False, version, True
        return False, None, False
    return False, None, False


def check_install_status(
    settings_path: Path | None = None,
    current_version: str = __version__,
) -> InstallStatus:
    """Probe whether our status line is installed and how fresh it is.

    Blocking: runs the registered command. Meant to be called off the UI thread.
    """
    command = get_status_line_command(settings_path)
    if not command:
        return InstallStatus(InstallState.NOT_INSTALLED)

    try:
        result = subprocess.run([command, "-v"], capture_output=True, text=True, check=False)
    except OSError as e:
        logger.debug("Version probe failed for %s: %s", command, e)
        return InstallStatus(InstallState.NOT_INSTALLED)

    if result.returncode != 0 or PROGRAM_NAME not in result.stdout:
        return InstallStatus(InstallState.NOT_INSTALLED)

    current = parse_semver_token(current_version)
    is_dev, installed, ok = parse_version_output(result.stdout)
    if not ok or is_dev or installed is None or current is None:
        return InstallStatus(InstallState.INSTALLED_UNKNOWN, installed=installed, current=current)
    if installed < current:
        return InstallStatus(InstallState.INSTALLED_OUTDATED, installed=installed, current=current)
    return InstallStatus(InstallState.INSTALLED_CURRENT, installed=installed, current=current)
