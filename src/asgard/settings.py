"""JSON-backed preference store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from asgard.utils import atomic_write_text, xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "asgard"
_SETTINGS_FILE = "settings.json"

FOLDER_KEY = "scripts.folder"
EXTENSION_KEY = "scripts.extension"
PERCENTILE_KEY = "favorites.percentile"
MARKER_KEY = "favorites.marker"
RUNNER_KEY = "runner.command"

DEFAULT_EXTENSION = ".py"
DEFAULT_PERCENTILE = 0.25
DEFAULT_MARKER = "★"


def default_settings_path() -> Path:
    """Location of the settings file under XDG_CONFIG_HOME."""
    return xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE


class Settings:
    """Persistent settings backed by a JSON file.

    Uses dot-notation keys for nested access:
        settings.get("scripts.folder")  # reads data["scripts"]["folder"]
        settings.set("favorites.marker", "*")  # writes + saves
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-notation key and persist to disk."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            if part not in node or not isinstance(node[part], dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self._save()

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: top level is not an object", self._path)
            return
        self._data = data

    def _save(self) -> None:
        """Persist settings to disk."""
        try:
            atomic_write_text(self._path, json.dumps(self._data, indent=2, ensure_ascii=False) + "\n")
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self._path, e)
