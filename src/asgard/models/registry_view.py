"""Registry view dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from asgard.models.script_file import ScriptFile


@dataclass(frozen=True, slots=True)
class RegistryView:
    """Scripts split into favorites and the rest, each sorted by name."""

    favorites: tuple[ScriptFile, ...] = ()
    standard: tuple[ScriptFile, ...] = ()

    @property
    def scripts(self) -> Iterator[ScriptFile]:
        """Favorites first, then standard scripts."""
        yield from self.favorites
        yield from self.standard

    def find(self, name: str) -> list[ScriptFile]:
        """Return every script with the given display name."""
        return [s for s in self.scripts if s.name == name]

    def is_favorite(self, script: ScriptFile) -> bool:
        return script in self.favorites

    def __len__(self) -> int:
        return len(self.favorites) + len(self.standard)
