"""JSON file storage for per-script click counts."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from asgard.errors import CorruptDataError, PersistError
from asgard.utils import atomic_write_text, xdg_data_home

log = logging.getLogger(__name__)

ClickDatabase = dict[str, int]

_DATA_DIR = "asgard"
_CLICKS_FILE = "clicks.json"


def default_clicks_path() -> Path:
    """Location of the click document under XDG_DATA_HOME."""
    return xdg_data_home() / _DATA_DIR / _CLICKS_FILE


class ClickStore:
    """Loads and saves the name -> invocation count mapping.

    The document is always rewritten in full. Callers hold the in-memory
    mapping; the store itself keeps no state besides its path.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_clicks_path()

    def load(self) -> ClickDatabase:
        """Read the click document, returning an empty mapping if missing.

        Raises:
            CorruptDataError: the file exists but does not hold a JSON
                object of non-negative integer counts.
        """
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CorruptDataError(f"{self.path}: {exc}") from exc
        except OSError as exc:
            raise CorruptDataError(f"{self.path}: could not be read ({exc})") from exc

        if not isinstance(data, dict):
            raise CorruptDataError(f"{self.path}: expected a JSON object")
        for name, count in data.items():
            # bool is an int subclass; reject it explicitly
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise CorruptDataError(f"{self.path}: invalid count for {name!r}: {count!r}")

        log.debug("Loaded %d click entries from %s", len(data), self.path)
        return data

    def save(self, db: ClickDatabase) -> None:
        """Overwrite the click document with *db*."""
        try:
            atomic_write_text(self.path, json.dumps(db, indent=4) + "\n")
        except OSError as exc:
            raise PersistError(f"Could not save click data to {self.path}: {exc}") from exc

    def increment(self, db: ClickDatabase, name: str) -> ClickDatabase:
        """Return a copy of *db* with *name* bumped by one, and persist it."""
        updated = dict(db)
        updated[name] = updated.get(name, 0) + 1
        self.save(updated)
        log.debug("Recorded click for '%s' (now %d)", name, updated[name])
        return updated

    def reset(self) -> ClickDatabase:
        """Clear all recorded clicks."""
        self.save({})
        log.info("Cleared click data at %s", self.path)
        return {}
