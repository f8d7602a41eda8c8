"""Exception types raised by the launcher core."""

from __future__ import annotations


class AsgardError(Exception):
    """Base class for all launcher errors."""


class NotFoundError(AsgardError):
    """Raised when the script folder or a script file is missing."""


class CorruptDataError(AsgardError):
    """Raised when the click document exists but cannot be read as counts."""


class PersistError(AsgardError):
    """Raised when the click document cannot be written."""


class EmptyPoolError(AsgardError):
    """Raised when a threshold is requested with no click data at all."""


class LaunchError(AsgardError):
    """Raised when a script could not be started."""
