"""Central script registry."""

from __future__ import annotations

import logging
from pathlib import Path

from asgard.core.classifier import classify
from asgard.core.scanner import FileScanner
from asgard.core.search import filter_scripts
from asgard.errors import CorruptDataError
from asgard.models.registry_view import RegistryView
from asgard.storage import ClickDatabase, ClickStore

log = logging.getLogger(__name__)


class ScriptRegistry:
    """Reconciles the script folder with recorded usage.

    Holds the latest view and the in-memory click counts. Both are only
    replaced by a refresh that succeeds end to end.
    """

    def __init__(self, scanner: FileScanner, store: ClickStore) -> None:
        self.scanner = scanner
        self.store = store
        self._view = RegistryView()
        self._clicks: ClickDatabase | None = None

    @property
    def view(self) -> RegistryView:
        """The view produced by the last successful refresh."""
        return self._view

    @property
    def clicks(self) -> ClickDatabase:
        """Click counts as of the last refresh or invocation."""
        return dict(self._clicks or {})

    def refresh(self, root: Path | str, percentile: float) -> RegistryView:
        """Scan *root*, load clicks and classify.

        Errors from the scan or the click document propagate and leave the
        previous view in place. A corrupt document also drops the in-memory
        counts, so later invocations reload and fail instead of overwriting it.
        """
        files = self.scanner.scan(root)
        try:
            clicks = self.store.load()
        except CorruptDataError:
            # the stale copy must not be written back over the document
            self._clicks = None
            raise
        view = classify(files, clicks, percentile)

        self._clicks = clicks
        self._view = view
        log.info("Refreshed %s: %d favorites, %d standard", root, len(view.favorites), len(view.standard))
        return view

    def record_invocation(self, name: str) -> None:
        """Count one launch of *name* and persist it.

        The view is not reclassified; call :meth:`refresh` for that.
        """
        if self._clicks is None:
            self.load_clicks()
        self._clicks = self.store.increment(self._clicks, name)

    def load_clicks(self) -> ClickDatabase:
        """Reload click counts from disk without rescanning."""
        try:
            self._clicks = self.store.load()
        except CorruptDataError:
            self._clicks = None
            raise
        return dict(self._clicks)

    def reset_clicks(self) -> None:
        """Forget all recorded clicks. Takes effect on the next refresh."""
        self._clicks = self.store.reset()

    def apply_filter(self, view: RegistryView, query: str | None) -> RegistryView:
        """Filter both groups of *view* independently."""
        if not query:
            return view
        return RegistryView(
            favorites=tuple(filter_scripts(view.favorites, query)),
            standard=tuple(filter_scripts(view.standard, query)),
        )
