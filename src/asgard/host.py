"""Host collaborators: preferences, folder picker and script runner.

The core only talks to the host through these three protocols. The classes
below are the command-line implementations; tests substitute fakes.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Any, Protocol

import click

from asgard.errors import LaunchError

log = logging.getLogger(__name__)


class Preferences(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class DirectoryChooser(Protocol):
    def choose(self) -> Path | None: ...


class ScriptRunner(Protocol):
    def run(self, path: Path) -> None: ...


class PromptDirectoryChooser:
    """Asks for a folder on the terminal. An empty answer cancels."""

    def __init__(self, prompt: str = "Script folder") -> None:
        self.prompt = prompt

    def choose(self) -> Path | None:
        raw = click.prompt(self.prompt, default="", show_default=False)
        if not raw.strip():
            return None
        path = Path(raw.strip()).expanduser()
        if not path.is_dir():
            click.echo(f"Not a directory: {path}", err=True)
            return None
        return path.resolve()


def parse_command(value: Any) -> list[str]:
    """Normalize a ``runner.command`` preference into an argv prefix.

    Accepts a list of strings or a shell-style string. Anything else falls
    back to the running interpreter.
    """
    if isinstance(value, str) and value.strip():
        return shlex.split(value)
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return list(value)
    if value is not None:
        log.warning("Ignoring invalid runner command: %r", value)
    return [sys.executable]


class SubprocessRunner:
    """Runs a script as ``<command...> <path>`` and waits for it."""

    def __init__(self, command: list[str] | None = None) -> None:
        self.command = command or [sys.executable]

    def run(self, path: Path) -> None:
        argv = [*self.command, str(path)]
        log.info("Running %s", shlex.join(argv))
        try:
            proc = subprocess.run(argv, cwd=path.parent)
        except OSError as exc:
            raise LaunchError(f"Could not start {path.name}: {exc}") from exc
        if proc.returncode != 0:
            log.warning("%s exited with status %d", path.name, proc.returncode)
