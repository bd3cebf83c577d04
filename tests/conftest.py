"""Pytest fixtures for cchline tests."""

from __future__ import annotations

import json

import pytest

from cchline.config import StatusLineConfig
from cchline.editor.reducer import KeyPressed, update
from cchline.editor.state import EditorState


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config directory at a temp dir."""
    path = tmp_path / "cchline"
    monkeypatch.setenv("CCHLINE_CONFIG_DIR", str(path))
    return path


@pytest.fixture
def settings_path(tmp_path):
    """A Claude settings.json with an unrelated key already present."""
    path = tmp_path / ".claude" / "settings.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"model": "opus"}))
    return path


@pytest.fixture
def two_row_config():
    """model (on), git (off) on the first line; cost (on) on the second."""
    return StatusLineConfig(
        segment_order=["model", "git", "---", "cost"],
        segment_enabled=[True, False, True],
    )


@pytest.fixture
def editor(two_row_config):
    return EditorState.from_config(two_row_config)


def press(state, *keys):
    """Feed keys through the reducer, returning the final state and all commands."""
    commands = []
    for key in keys:
        state, cmds = update(state, KeyPressed(key))
        commands.extend(cmds)
    return state, commands
