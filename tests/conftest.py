"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from asgard.storage import ClickStore


@pytest.fixture
def isolate_xdg(tmp_path, monkeypatch):
    """Redirect settings and click data to a temp directory."""
    config_home = tmp_path / "config"
    data_home = tmp_path / "data"
    config_home.mkdir()
    data_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    return tmp_path


@pytest.fixture
def click_store(tmp_path) -> ClickStore:
    return ClickStore(tmp_path / "data" / "clicks.json")


@pytest.fixture
def make_tree(tmp_path) -> Callable[..., Path]:
    """Create files below ``tmp_path/scripts`` and return that folder."""

    def _make(*relative_paths: str) -> Path:
        root = tmp_path / "scripts"
        root.mkdir(exist_ok=True)
        for rel in relative_paths:
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("print('hi')\n")
        return root

    return _make
