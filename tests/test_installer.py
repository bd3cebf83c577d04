"""Tests for Claude Code settings install/uninstall."""

from __future__ import annotations

import json

import pytest

from cchline import installer


def test_install_adds_status_line(settings_path):
    path = installer.install_status_line(settings_path, command="/usr/local/bin/cchline")
    assert path == settings_path
    settings = json.loads(settings_path.read_text())
    assert settings["model"] == "opus"
    assert settings["statusLine"] == {"type": "command", "command": "/usr/local/bin/cchline", "padding": 0}


def test_install_creates_missing_file(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    installer.install_status_line(path, command="cchline")
    assert installer.get_status_line_command(path) == "cchline"


def test_install_defaults_to_executable_path(settings_path, monkeypatch):
    monkeypatch.setattr(installer, "get_executable_path", lambda: "/resolved/cchline")
    installer.install_status_line(settings_path)
    assert installer.get_status_line_command(settings_path) == "/resolved/cchline"


def test_install_refuses_malformed_settings(settings_path):
    settings_path.write_text("{not json")
    with pytest.raises(installer.InstallError):
        installer.install_status_line(settings_path, command="cchline")
    assert settings_path.read_text() == "{not json"


def test_uninstall_removes_only_status_line(settings_path):
    installer.install_status_line(settings_path, command="cchline")
    assert installer.uninstall_status_line(settings_path) is True
    assert json.loads(settings_path.read_text()) == {"model": "opus"}


def test_uninstall_when_not_installed(settings_path, tmp_path):
    assert installer.uninstall_status_line(settings_path) is False
    assert installer.uninstall_status_line(tmp_path / "missing.json") is False


def test_get_status_line_command_ignores_bad_shapes(settings_path):
    settings_path.write_text(json.dumps({"statusLine": "cchline"}))
    assert installer.get_status_line_command(settings_path) is None
    settings_path.write_text("[]")
    assert installer.get_status_line_command(settings_path) is None
