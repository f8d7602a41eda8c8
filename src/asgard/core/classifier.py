"""Adaptive favorites classification.

A script is a favorite when its click count reaches the count found at the
``percentile`` position of all recorded counts, sorted busiest first. The
threshold therefore follows actual usage instead of a fixed number of
clicks: with the default of 0.25 a script has to be in the busiest quarter
of tracked scripts to be promoted.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

from asgard.errors import EmptyPoolError
from asgard.models.registry_view import RegistryView
from asgard.models.script_file import ScriptFile

log = logging.getLogger(__name__)


def _check_percentile(percentile: float) -> None:
    if not 0 < percentile < 1:
        raise ValueError(f"Percentile must be between 0 and 1 (exclusive), got {percentile!r}")


def sort_scripts(scripts: Iterable[ScriptFile]) -> tuple[ScriptFile, ...]:
    """Sort by name (ordinal), then by path so duplicates stay stable."""
    return tuple(sorted(scripts, key=lambda s: (s.name, str(s.path))))


def compute_threshold(clicks: Mapping[str, int], percentile: float) -> int:
    """Return the click count a script needs to count as a favorite.

    Raises:
        EmptyPoolError: no clicks have been recorded yet.
        ValueError: *percentile* is outside (0, 1).
    """
    _check_percentile(percentile)
    pool = sorted(clicks.values(), reverse=True)
    if not pool:
        raise EmptyPoolError("No click data recorded")
    index = math.floor(len(pool) * percentile)
    return pool[index]


def classify(
    files: Iterable[ScriptFile],
    clicks: Mapping[str, int],
    percentile: float,
) -> RegistryView:
    """Split *files* into favorites and standard scripts.

    Scripts that were never clicked count as zero. With no click data at
    all there are no favorites.
    """
    files = list(files)
    try:
        threshold = compute_threshold(clicks, percentile)
    except EmptyPoolError:
        log.debug("No click data yet, all %d scripts are standard", len(files))
        return RegistryView(standard=sort_scripts(files))

    favorites: list[ScriptFile] = []
    standard: list[ScriptFile] = []
    for script in files:
        if clicks.get(script.name, 0) >= threshold:
            favorites.append(script)
        else:
            standard.append(script)

    log.debug(
        "Threshold %d (percentile %.2f): %d favorites, %d standard",
        threshold, percentile, len(favorites), len(standard),
    )
    return RegistryView(favorites=sort_scripts(favorites), standard=sort_scripts(standard))
