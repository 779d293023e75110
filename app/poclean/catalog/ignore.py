"""Gitignore-style filtering of discovered paths.

Rules come from the project's ignore file plus a few always-ignored
patterns (virtual environments by default). Matching follows gitignore
semantics: later patterns override earlier ones, ``!`` negates, and a
leading ``/`` anchors a pattern to the project root.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import pathspec

from poclean.catalog.errors import IgnoreRuleError

logger = logging.getLogger(__name__)

# Always ignored, even without an ignore file
DEFAULT_EXTRA_IGNORE: tuple[str, ...] = (".venv",)


class IgnoreRules:
    """Compiled ignore rules anchored at a project root.

    Args:
        root: Directory the patterns are relative to.
        patterns: Gitignore-style pattern lines, in file order.

    Raises:
        IgnoreRuleError: If a pattern cannot be compiled.
    """

    def __init__(self, root: Path, patterns: Sequence[str]) -> None:
        self._root = root
        self._patterns = tuple(patterns)
        try:
            self._spec = pathspec.GitIgnoreSpec.from_lines(self._patterns)
        except ValueError as e:
            msg = f"Invalid ignore pattern: {e}"
            raise IgnoreRuleError(msg) from e

    @property
    def root(self) -> Path:
        """Directory the rules are anchored at."""
        return self._root

    @property
    def patterns(self) -> tuple[str, ...]:
        """Raw pattern lines, ignore file first, extras last."""
        return self._patterns

    def is_ignored(self, path: Path) -> bool:
        """Check whether ``path`` is excluded by the rules.

        Paths outside the root are never ignored.
        """
        try:
            relative = path.relative_to(self._root)
        except ValueError:
            return False
        return self._spec.match_file(relative.as_posix())


def load_ignore_rules(
    root: Path,
    ignore_file: str = ".gitignore",
    extra_patterns: Iterable[str] = DEFAULT_EXTRA_IGNORE,
) -> IgnoreRules:
    """Build the rule set for a project root.

    A missing ignore file is not an error: only the extra patterns apply.

    Args:
        root: Project root directory.
        ignore_file: Ignore file name, relative to ``root``.
        extra_patterns: Patterns appended after the ignore file's lines.

    Returns:
        Compiled IgnoreRules.

    Raises:
        IgnoreRuleError: If the ignore file exists but cannot be read,
            or if any pattern is malformed.
    """
    ignore_path = root / ignore_file
    lines: list[str] = []

    try:
        with open(ignore_path, encoding="utf-8", errors="surrogateescape") as f:
            lines = f.read().splitlines()
        logger.debug("Loaded %d ignore line(s) from %s", len(lines), ignore_path)
    except FileNotFoundError:
        logger.debug("No ignore file at %s", ignore_path)
    except OSError as e:
        msg = f"Cannot read ignore file {ignore_path}: {e}"
        raise IgnoreRuleError(msg) from e

    return IgnoreRules(root, [*lines, *extra_patterns])


def filter_ignored(paths: Iterable[Path], rules: IgnoreRules) -> list[Path]:
    """Drop ignored paths, keeping the relative order of the rest."""
    kept: list[Path] = []
    for path in paths:
        if rules.is_ignored(path):
            logger.debug("Ignoring %s", path)
            continue
        kept.append(path)
    return kept
