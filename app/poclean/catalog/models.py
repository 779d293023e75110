"""Catalog domain models for unused translation detection.

This module defines the data structures shared by the scanner, the
rewriter and the run controller: line classes, the scanner's write
state, catalog entries and per-file scan results.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class LineKind(str, Enum):
    """Classification of a single catalog line.

    Attributes:
        DECLARATION: A ``msgid "..."`` line declaring a translation key.
        COMMENT: A line starting with the ``#`` comment marker.
        OTHER: Anything else (msgstr, continuation strings, blank lines).
    """

    DECLARATION = "declaration"
    COMMENT = "comment"
    OTHER = "other"


class WriteState(str, Enum):
    """State of the line-local rewrite state machine.

    Attributes:
        WRITE: Lines are retained.
        SUPPRESS: Lines belong to a dropped entry and are elided.
    """

    WRITE = "write"
    SUPPRESS = "suppress"


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A translation entry discovered in a catalog file.

    Entries are never mutated. They are either retained or dropped
    wholesale when the catalog is rewritten.

    Attributes:
        path: Catalog file containing the entry.
        line_number: 1-based line number of the declaration line.
        key: Translation key with one layer of quotes trimmed.
        comments: Leading comment lines attached to the declaration.
    """

    path: Path
    line_number: int
    key: str
    comments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if self.line_number < 1:
            msg = f"Line number must be positive, got {self.line_number}"
            raise ValueError(msg)


@dataclass(slots=True)
class CatalogScanResult:
    """Outcome of scanning a single catalog file.

    Attributes:
        path: Scanned catalog file.
        declarations: Number of declaration lines seen.
        unused: Entries whose key is not referenced anywhere.
        lines_dropped: Number of lines elided from the rewritten output.
    """

    path: Path
    declarations: int = 0
    unused: list[CatalogEntry] = field(default_factory=list)
    lines_dropped: int = 0

    @property
    def unused_count(self) -> int:
        """Number of unused entries in this catalog."""
        return len(self.unused)

    @property
    def changed(self) -> bool:
        """Whether a rewrite would differ from the original file."""
        return self.lines_dropped > 0
