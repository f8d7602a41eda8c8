"""Directory entry variants yielded by the filesystem walk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DirectoryNode:
    """A directory to descend into."""

    path: Path


@dataclass(frozen=True, slots=True)
class FileNode:
    """A regular file."""

    path: Path


DirectoryEntry = DirectoryNode | FileNode
