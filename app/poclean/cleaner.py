"""Run controller for unused translation detection and cleanup.

A run walks through fixed phases:

INIT -> DISCOVER -> FILTER -> SCAN -> APPLY -> DONE

DISCOVER builds the catalog, source and template file sets, FILTER
prunes them with the project's ignore rules, SCAN classifies every
catalog entry (staging rewrites in clean mode) and APPLY swaps the
staged catalogs into place. Check mode never writes.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from poclean.catalog.discovery import discover_files, discover_many, resolve_root
from poclean.catalog.ignore import filter_ignored, load_ignore_rules
from poclean.catalog.models import CatalogEntry, CatalogScanResult
from poclean.catalog.rewriter import CatalogRewriter
from poclean.catalog.scanner import CatalogScanner
from poclean.catalog.usage import UsageIndex
from poclean.config import CleanerConfig, get_default_config

logger = logging.getLogger(__name__)


class ScanMode(str, Enum):
    """Mode of a run, fixed for all catalogs.

    Attributes:
        CHECK: Report unused translations without touching any file.
        CLEAN: Remove unused translations from the catalogs.
    """

    CHECK = "check"
    CLEAN = "clean"


class RunPhase(str, Enum):
    """Phase of a run, in execution order."""

    INIT = "init"
    DISCOVER = "discover"
    FILTER = "filter"
    SCAN = "scan"
    APPLY = "apply"
    DONE = "done"


@dataclass(slots=True)
class RunResult:
    """Aggregate outcome of one run.

    Attributes:
        root: Absolute project root.
        mode: Mode the run executed in.
        catalogs: Per-catalog scan results, in scan order.
        candidate_count: Number of source and template files searched.
        report: Unused keys, one per line (check mode only).
        rewritten: Catalogs rewritten in place (clean mode only).
    """

    root: Path
    mode: ScanMode
    catalogs: list[CatalogScanResult] = field(default_factory=list)
    candidate_count: int = 0
    report: str = ""
    rewritten: list[Path] = field(default_factory=list)

    @property
    def unused(self) -> list[CatalogEntry]:
        """All unused entries across catalogs."""
        return [entry for catalog in self.catalogs for entry in catalog.unused]

    @property
    def unused_count(self) -> int:
        """Number of unused entries found."""
        return sum(catalog.unused_count for catalog in self.catalogs)

    @property
    def has_unused(self) -> bool:
        """Whether anything actionable was found."""
        return self.unused_count > 0


@dataclass(frozen=True, slots=True)
class FileSets:
    """Filtered file sets for a run.

    Attributes:
        catalogs: Catalog files to scan (and rewrite in clean mode).
        candidates: Source and template files searched for keys.
    """

    catalogs: tuple[Path, ...]
    candidates: tuple[Path, ...]


class TranslationCleaner:
    """Finds and optionally removes unused translations under a root.

    Args:
        config: Cleaner settings. Defaults to built-in settings.
        mode: CHECK to report only, CLEAN to rewrite catalogs.
    """

    def __init__(
        self,
        config: CleanerConfig | None = None,
        mode: ScanMode = ScanMode.CHECK,
    ) -> None:
        self._config = config if config is not None else get_default_config()
        self._mode = mode
        self._phase = RunPhase.INIT

    @property
    def mode(self) -> ScanMode:
        """Mode of this cleaner."""
        return self._mode

    @property
    def phase(self) -> RunPhase:
        """Last phase entered."""
        return self._phase

    def _enter(self, phase: RunPhase) -> None:
        self._phase = phase
        logger.debug("Entering phase %s", phase.value)

    def collect(self, root: Path) -> FileSets:
        """Discover and filter the file sets for ``root``.

        Raises:
            PathError: If the root or a directory below it is unusable.
            IgnoreRuleError: If the ignore file is unreadable or malformed.
        """
        config = self._config

        self._enter(RunPhase.DISCOVER)
        catalogs = discover_files(root, config.catalog_pattern)
        candidates = discover_many(root, config.candidate_patterns)

        self._enter(RunPhase.FILTER)
        rules = load_ignore_rules(root, config.ignore_file, config.extra_ignore)
        catalogs = filter_ignored(catalogs, rules)
        candidates = filter_ignored(candidates, rules)

        logger.info(
            "Found %d catalog(s) and %d candidate file(s) under %s",
            len(catalogs),
            len(candidates),
            root,
        )
        return FileSets(catalogs=tuple(catalogs), candidates=tuple(candidates))

    def run(self, root: Path | str) -> RunResult:
        """Execute a full run over ``root``.

        Returns:
            RunResult describing unused entries and rewritten catalogs.

        Raises:
            CleanerError: On any I/O failure. Staged rewrites that were not
                yet applied are discarded and their originals left as is.
        """
        self._enter(RunPhase.INIT)
        base = resolve_root(root)
        result = RunResult(root=base, mode=self._mode)

        files = self.collect(base)
        result.candidate_count = len(files.candidates)

        usage = UsageIndex(files.candidates, self._config.encoding)
        scanner = CatalogScanner(usage, self._config.encoding)

        self._enter(RunPhase.SCAN)
        if self._mode is ScanMode.CHECK:
            for path in files.catalogs:
                catalog = scanner.scan(path)
                result.catalogs.append(catalog)
                result.report += "".join(f"{entry.key}\n" for entry in catalog.unused)
        else:
            with CatalogRewriter(self._config.encoding) as rewriter:
                for path in files.catalogs:
                    staged = rewriter.stage(path)
                    catalog = scanner.scan(path, staged)
                    rewriter.finalize(staged, changed=catalog.changed)
                    result.catalogs.append(catalog)

                self._enter(RunPhase.APPLY)
                result.rewritten = rewriter.commit()

        self._enter(RunPhase.DONE)
        logger.info(
            "%s run finished: %d unused translation(s)",
            self._mode.value.capitalize(),
            result.unused_count,
        )
        return result
