"""Shared fixtures for home-config tests."""

from pathlib import Path

import pytest


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the current user's home directory at a temporary directory."""
    home_path = tmp_path / "home"
    home_path.mkdir()
    monkeypatch.setenv("HOME", str(home_path))
    monkeypatch.setenv("USERPROFILE", str(home_path))
    monkeypatch.setenv("APPDATA", str(home_path / "AppData" / "Roaming"))
    return home_path
