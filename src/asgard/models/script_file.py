"""Script file dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ScriptFile:
    """A discovered script: display name plus absolute path.

    Two scripts in different folders may share a name; the path is what
    identifies a script.
    """

    name: str
    path: Path
