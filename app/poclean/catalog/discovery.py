"""Recursive discovery of catalog, source and template files."""

import fnmatch
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from poclean.catalog.errors import PathError

logger = logging.getLogger(__name__)


def resolve_root(root: Path | str) -> Path:
    """Return ``root`` as an absolute path to an existing directory.

    Symlinks are not resolved, so reported paths keep the user's spelling.

    Raises:
        PathError: If the root does not exist or is not a directory.
    """
    absolute = Path(os.path.abspath(root))
    if not absolute.exists():
        msg = f"Path does not exist: {absolute}"
        raise PathError(msg)
    if not absolute.is_dir():
        msg = f"Path is not a directory: {absolute}"
        raise PathError(msg)
    return absolute


def discover_files(root: Path | str, pattern: str) -> list[Path]:
    """Find every regular file below ``root`` whose name matches ``pattern``.

    The tree is walked top-down in lexical order without following
    directory symlinks. Only the base name is matched, using
    case-sensitive shell glob semantics.

    Args:
        root: Directory to walk.
        pattern: Shell glob such as ``*.po``.

    Returns:
        Absolute paths in traversal order.

    Raises:
        PathError: If the root is invalid or any directory cannot be listed.
    """
    base = resolve_root(root)

    def _on_error(error: OSError) -> None:
        msg = f"Cannot traverse {error.filename}: {error.strerror}"
        raise PathError(msg) from error

    matches: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(base, onerror=_on_error):
        dirnames.sort()
        for name in sorted(filenames):
            if not fnmatch.fnmatchcase(name, pattern):
                continue
            candidate = Path(dirpath) / name
            if candidate.is_file():
                matches.append(candidate)

    logger.debug("Discovered %d file(s) matching %s under %s", len(matches), pattern, base)
    return matches


def discover_many(root: Path | str, patterns: Iterable[str]) -> list[Path]:
    """Find files matching any of ``patterns``, without duplicates.

    Results keep first-seen order: all matches of the first pattern,
    then new matches of the second, and so on.
    """
    seen: set[Path] = set()
    result: list[Path] = []
    for pattern in patterns:
        for path in discover_files(root, pattern):
            if path not in seen:
                seen.add(path)
                result.append(path)
    return result
