"""Recursive discovery of script files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from asgard.errors import NotFoundError
from asgard.models.entry import DirectoryEntry, DirectoryNode, FileNode
from asgard.models.script_file import ScriptFile
from asgard.settings import DEFAULT_EXTENSION

log = logging.getLogger(__name__)

# Platform metadata files that never hold scripts.
_SYSTEM_NAMES = frozenset({".DS_Store", "Thumbs.db", "desktop.ini"})


def is_hidden(name: str) -> bool:
    """Whether an entry should be ignored by the scan."""
    return name.startswith(".") or name in _SYSTEM_NAMES


def iter_entries(directory: Path) -> Iterator[DirectoryEntry]:
    """Yield the visible children of *directory* as tagged entries.

    Entries that are neither a directory nor a regular file (sockets,
    broken symlinks) and entries that fail to stat are skipped.
    """
    with os.scandir(directory) as it:
        for entry in it:
            if is_hidden(entry.name):
                continue
            try:
                if entry.is_dir():
                    yield DirectoryNode(Path(entry.path))
                elif entry.is_file():
                    yield FileNode(Path(entry.path))
            except OSError as e:
                log.debug("Skipping unreadable entry %s: %s", entry.path, e)


class FileScanner:
    """Walks a folder tree and collects files with the script extension."""

    def __init__(self, extension: str = DEFAULT_EXTENSION) -> None:
        if len(extension) < 2 or not extension.startswith("."):
            raise ValueError(f"Invalid script extension: {extension!r}")
        self.extension = extension

    def scan(self, root: Path | str) -> list[ScriptFile]:
        """Return every script below *root*, in no particular order.

        Symlinked directories are followed, but each real directory is
        visited once.

        Raises:
            NotFoundError: *root* is missing or not a directory.
        """
        root = Path(root).expanduser()
        if not root.is_dir():
            raise NotFoundError(f"Script folder not found: {root}")
        root = root.absolute()

        found: list[ScriptFile] = []
        visited: set[Path] = set()
        stack: list[Path] = [root]
        while stack:
            current = stack.pop()
            real = current.resolve()
            if real in visited:
                log.debug("Already visited %s, skipping", current)
                continue
            visited.add(real)
            try:
                for entry in iter_entries(current):
                    match entry:
                        case DirectoryNode(path=path):
                            stack.append(path)
                        case FileNode(path=path) if path.name.endswith(self.extension):
                            found.append(self._to_script(path))
            except OSError as e:
                log.warning("Cannot read directory %s: %s", current, e)

        log.info("Found %d scripts under %s", len(found), root)
        return found

    def _to_script(self, path: Path) -> ScriptFile:
        return ScriptFile(name=path.name[: -len(self.extension)], path=path)
