"""Launcher session: ties the registry to the host collaborators."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from asgard.core.classifier import compute_threshold
from asgard.core.registry import ScriptRegistry
from asgard.core.scanner import FileScanner
from asgard.errors import AsgardError, CorruptDataError, EmptyPoolError, NotFoundError
from asgard.host import DirectoryChooser, Preferences, ScriptRunner
from asgard.models.registry_view import RegistryView
from asgard.models.script_file import ScriptFile
from asgard.settings import (
    DEFAULT_EXTENSION,
    DEFAULT_MARKER,
    DEFAULT_PERCENTILE,
    EXTENSION_KEY,
    FOLDER_KEY,
    MARKER_KEY,
    PERCENTILE_KEY,
)
from asgard.storage import ClickStore

log = logging.getLogger(__name__)

ErrorCallback = Callable[[AsgardError], None]


class Launcher:
    """One launcher session as seen by a host.

    Reads its parameters from the preference store on every refresh, so a
    changed folder or extension takes effect immediately.

    Error policy: each error type is reported once per session. A failed
    refresh keeps the previous view and is remembered in ``last_error``. A
    failure to record a click never stops the script from running.
    """

    def __init__(
        self,
        preferences: Preferences,
        chooser: DirectoryChooser,
        runner: ScriptRunner,
        store: ClickStore | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.preferences = preferences
        self.chooser = chooser
        self.runner = runner
        self.on_error = on_error
        self.registry = ScriptRegistry(FileScanner(self.extension), store or ClickStore())
        self.last_error: AsgardError | None = None
        self._reported: set[type[AsgardError]] = set()

    # ── preferences ──────────────────────────────────────────────────────

    @property
    def folder(self) -> Path | None:
        value = self.preferences.get(FOLDER_KEY)
        if not isinstance(value, str) or not value:
            return None
        return Path(value)

    @property
    def extension(self) -> str:
        value = self.preferences.get(EXTENSION_KEY, DEFAULT_EXTENSION)
        if not isinstance(value, str) or len(value) < 2 or not value.startswith("."):
            log.warning("Invalid script extension %r, using %s", value, DEFAULT_EXTENSION)
            return DEFAULT_EXTENSION
        return value

    @property
    def percentile(self) -> float:
        value = self.preferences.get(PERCENTILE_KEY, DEFAULT_PERCENTILE)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 < value < 1:
            log.warning("Invalid favorites percentile %r, using %s", value, DEFAULT_PERCENTILE)
            return DEFAULT_PERCENTILE
        return float(value)

    @property
    def marker(self) -> str:
        value = self.preferences.get(MARKER_KEY)
        return value if isinstance(value, str) else DEFAULT_MARKER

    def set_marker(self, marker: str) -> None:
        self.preferences.set(MARKER_KEY, marker)

    def set_folder(self, folder: Path | str) -> Path:
        """Store *folder* as the script folder.

        Raises:
            NotFoundError: *folder* is not an existing directory.
        """
        path = Path(folder).expanduser()
        if not path.is_dir():
            raise NotFoundError(f"Script folder not found: {path}")
        path = path.resolve()
        self.preferences.set(FOLDER_KEY, str(path))
        log.info("Script folder set to %s", path)
        return path

    def choose_folder(self) -> Path | None:
        """Let the user pick a folder; store it and refresh on success."""
        folder = self.chooser.choose()
        if folder is None:
            log.debug("Folder selection cancelled")
            return None
        path = self.set_folder(folder)
        self.refresh()
        return path

    # ── registry ─────────────────────────────────────────────────────────

    def refresh(self, query: str | None = None) -> RegistryView:
        """Recompute the view and return it, filtered by *query*.

        Without a configured folder the view is empty.
        """
        folder = self.folder
        if folder is None:
            log.info("No script folder configured")
            return RegistryView()

        extension = self.extension
        if extension != self.registry.scanner.extension:
            self.registry.scanner = FileScanner(extension)

        try:
            view = self.registry.refresh(folder, self.percentile)
        except (NotFoundError, CorruptDataError) as exc:
            self.last_error = exc
            self._report_once(exc)
            view = self.registry.view
        else:
            self.last_error = None
        return self.registry.apply_filter(view, query)

    def threshold(self) -> int | None:
        """Current favorite threshold, or None before any click."""
        try:
            return compute_threshold(self.registry.clicks, self.percentile)
        except EmptyPoolError:
            return None

    def reset_clicks(self) -> None:
        self.registry.reset_clicks()

    def stats(self) -> dict[str, Any]:
        """Click counts (busiest first) with the current threshold.

        Raises:
            CorruptDataError: the click document cannot be read.
        """
        clicks = self.registry.load_clicks()
        return {
            "percentile": self.percentile,
            "threshold": self.threshold(),
            "clicks": dict(sorted(clicks.items(), key=lambda kv: (-kv[1], kv[0]))),
        }

    def launch(self, script: ScriptFile) -> None:
        """Record a click for *script* and hand it to the runner.

        Raises:
            NotFoundError: the script file is gone.
        """
        if not script.path.is_file():
            raise NotFoundError(f"Script not found: {script.path}")
        try:
            self.registry.record_invocation(script.name)
        except AsgardError as exc:
            self._report_once(exc)
        self.runner.run(script.path)

    def format_entry(self, script: ScriptFile, view: RegistryView) -> str:
        """Display label for *script*, with the marker for favorites."""
        if view.is_favorite(script):
            return f"{self.marker} {script.name}"
        return script.name

    # ── error reporting ──────────────────────────────────────────────────

    def _report(self, exc: AsgardError) -> None:
        if self.on_error is not None:
            self.on_error(exc)
        else:
            log.error("%s", exc)

    def _report_once(self, exc: AsgardError) -> None:
        if type(exc) in self._reported:
            log.debug("Suppressing repeated error: %s", exc)
            return
        self._reported.add(type(exc))
        self._report(exc)

