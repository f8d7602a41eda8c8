"""Search filtering over script lists."""

from __future__ import annotations

from typing import Iterable

from asgard.models.script_file import ScriptFile


def filter_scripts(scripts: Iterable[ScriptFile], query: str | None) -> list[ScriptFile]:
    """Keep scripts whose name contains *query*, ignoring case.

    An empty or missing query keeps everything. Input order is preserved.
    """
    if not query:
        return list(scripts)
    needle = query.lower()
    return [s for s in scripts if needle in s.name.lower()]
