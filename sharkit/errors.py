"""Exception types raised across sharkit.

Only fatal conditions get a type here; recoverable problems (unreadable
previews, bad ignore files) are absorbed where they happen.
"""

from __future__ import annotations


class SharkitError(Exception):
    """Base class for fatal picker errors reported by the CLI."""


class DirectoryListingError(SharkitError):
    """Working directory could not be enumerated."""


class TerminalUnavailableError(SharkitError):
    """No interactive terminal could be opened for the UI."""


class LogSetupError(SharkitError):
    """Requested log file could not be created or opened."""
