"""Interactive status line editor.

Opened with ``cchline -c``. The reducer and layout fitter are pure; only
:mod:`cchline.editor.app` touches the terminal.
"""

from __future__ import annotations


def run_editor(config_path=None, debug: bool = False, theme_name: str | None = None) -> int:
    """Entry point for the interactive editor."""
    from .app import run_editor as _run

    return _run(config_path=config_path, debug=debug, theme_name=theme_name)
