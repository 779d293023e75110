"""Exceptions raised while scanning and rewriting catalogs.

Every error is terminal for a run: a partial result would misreport
which translations are actually unused.
"""


class CleanerError(Exception):
    """Base exception for all catalog cleaning errors."""


class PathError(CleanerError):
    """Raised when the root or a discovered path is invalid or unreadable."""


class IgnoreRuleError(CleanerError):
    """Raised when the project ignore file cannot be read or compiled."""


class ScanError(CleanerError):
    """Raised when a catalog or candidate file fails to read mid-scan."""


class WriteError(CleanerError):
    """Raised when a staged catalog cannot be written or renamed."""
