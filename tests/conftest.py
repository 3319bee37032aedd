from pathlib import Path

import pytest


@pytest.fixture
def write(tmp_path):
    """Write a UTF-8 file under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def clean_env(monkeypatch):
    """Make sure EXORG_* variables are unset and restored after the test."""
    for name in ("EXORG_MAX_INCLUDE_DEPTH", "EXORG_ORPHAN_NAME"):
        # setenv first so that monkeypatch records the original state
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch
