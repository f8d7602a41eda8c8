"""Shared utility functions."""

from __future__ import annotations

import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def xdg_data_home() -> Path:
    """Return XDG_DATA_HOME, defaulting to ~/.local/share."""
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def atomic_write_text(path: Path, text: str) -> None:
    """Replace *path* with *text* via a sibling temp file and ``os.replace``.

    Readers see either the old document or the new one, never a partial
    write. The temp file is removed if anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp.{os.getpid()}")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            log.debug("Could not remove temp file %s", tmp_path)
        raise


def pluralize(count: int, noun: str) -> str:
    """Return e.g. '1 script' or '3 scripts'."""
    return f"{count} {noun}{'s' if count != 1 else ''}"
