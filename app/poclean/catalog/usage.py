"""Literal usage lookup of translation keys in candidate files.

A key counts as used when it appears verbatim, as a contiguous
substring, on any line of any candidate file. No tokenization or
word-boundary check is done, so a key that is a substring of an
unrelated longer string is reported as used.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TextIO

from poclean.catalog.errors import ScanError

logger = logging.getLogger(__name__)

_LINE_BREAKS = ("\n", "\r")


def _open_candidate(path: Path, encoding: str) -> TextIO:
    try:
        return open(path, encoding=encoding, errors="surrogateescape")
    except OSError as e:
        msg = f"Cannot open candidate file {path}: {e}"
        raise ScanError(msg) from e


def is_used_in_paths(key: str, paths: Iterable[Path], encoding: str = "utf-8") -> bool:
    """Check whether ``key`` occurs on any line of any file in ``paths``.

    Files are read line by line and the scan stops at the first hit.
    Every query rereads the files; use UsageIndex for repeated lookups.

    Args:
        key: Literal text to look for.
        paths: Candidate source and template files.
        encoding: Text encoding of the candidate files.

    Returns:
        True if the key was found.

    Raises:
        ScanError: If a candidate file cannot be opened or read.
    """
    for path in paths:
        with _open_candidate(path, encoding) as f:
            try:
                for line in f:
                    if key in line.rstrip("\n"):
                        return True
            except (OSError, UnicodeError) as e:
                msg = f"Cannot read candidate file {path}: {e}"
                raise ScanError(msg) from e
    return False


class UsageIndex:
    """Searchable text of all candidate files, loaded once per run.

    Equivalent to calling :func:`is_used_in_paths` for every key, but
    each file is read only once. The candidate list is treated as
    read-only after construction.

    Args:
        paths: Candidate source and template files.
        encoding: Text encoding of the candidate files.
    """

    def __init__(self, paths: Sequence[Path], encoding: str = "utf-8") -> None:
        self._paths = tuple(paths)
        self._encoding = encoding
        self._texts: list[str] | None = None
        self._has_lines = False

    @property
    def paths(self) -> tuple[Path, ...]:
        """Candidate files searched by this index."""
        return self._paths

    def load(self) -> list[str]:
        """Read every candidate file into memory.

        Called lazily by :meth:`is_used`; later calls return the cached texts.

        Returns:
            Contents of the non-empty candidate files.

        Raises:
            ScanError: If a candidate file cannot be opened or read.
        """
        if self._texts is not None:
            return self._texts

        texts: list[str] = []
        for path in self._paths:
            with _open_candidate(path, self._encoding) as f:
                try:
                    text = f.read()
                except (OSError, UnicodeError) as e:
                    msg = f"Cannot read candidate file {path}: {e}"
                    raise ScanError(msg) from e
            if text:
                self._has_lines = True
                texts.append(text)

        self._texts = texts
        logger.debug("Loaded %d candidate file(s) into usage index", len(self._paths))
        return texts

    def is_used(self, key: str) -> bool:
        """Check whether ``key`` occurs on any line of any candidate file.

        The empty key matches as soon as any candidate file has a line.
        A key spanning a line break can never match a single line.
        """
        texts = self.load()

        if not key:
            return self._has_lines
        if any(brk in key for brk in _LINE_BREAKS):
            return False
        return any(key in text for text in texts)
