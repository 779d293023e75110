"""Atomic in-place rewriting of catalog files.

Retained lines are streamed into a temporary file next to the original
catalog. Once every catalog of a run has been scanned, each changed
catalog is swapped into place with ``os.replace()``, which is atomic on
POSIX. Temporary files are cleaned up on failure.
"""

import logging
import os
import shutil
from pathlib import Path
from tempfile import NamedTemporaryFile
from types import TracebackType
from typing import IO

from poclean.catalog.errors import WriteError

logger = logging.getLogger(__name__)


class StagedCatalog:
    """A temporary sibling file receiving the rewritten catalog.

    Lines are written verbatim: no newline translation is applied and
    undecodable bytes round-trip through ``surrogateescape``.

    Args:
        target: Catalog file that will be replaced.
        encoding: Text encoding of the catalog.

    Raises:
        WriteError: If the temporary file cannot be created.
    """

    def __init__(self, target: Path, encoding: str = "utf-8") -> None:
        self.target = target
        try:
            self._file: IO[str] = NamedTemporaryFile(
                mode="w",
                encoding=encoding,
                errors="surrogateescape",
                newline="",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            )
        except OSError as e:
            msg = f"Cannot create temporary file for {target}: {e}"
            raise WriteError(msg) from e
        self.tmp_path = Path(self._file.name)

    @property
    def closed(self) -> bool:
        """Whether the temporary file has been closed."""
        return self._file.closed

    def write(self, line: str) -> None:
        """Append a retained line, including its line ending."""
        try:
            self._file.write(line)
        except (OSError, UnicodeError) as e:
            msg = f"Failed to write {self.tmp_path}: {e}"
            raise WriteError(msg) from e

    def close(self) -> None:
        """Flush the file to disk and copy the original's permissions."""
        if self.closed:
            return
        try:
            self._file.flush()
            os.fsync(self._file.fileno())
            self._file.close()
            shutil.copymode(self.target, self.tmp_path)
        except (OSError, UnicodeError) as e:
            msg = f"Failed to finalize {self.tmp_path}: {e}"
            raise WriteError(msg) from e

    def discard(self) -> None:
        """Close and remove the temporary file, leaving the original as is."""
        try:
            if not self.closed:
                self._file.close()
        finally:
            self.tmp_path.unlink(missing_ok=True)


class CatalogRewriter:
    """Stages catalog rewrites and commits them together.

    Usage::

        with CatalogRewriter() as rewriter:
            staged = rewriter.stage(path)
            ...  # stream retained lines into staged
            rewriter.finalize(staged, changed=True)
            rewritten = rewriter.commit()

    Leaving the ``with`` block removes every temporary file that was not
    committed, so the originals stay untouched on errors. Catalogs that
    were committed before a failure remain rewritten.

    Args:
        encoding: Text encoding of the catalogs.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._staged: list[StagedCatalog] = []
        self._pending: list[StagedCatalog] = []
        self._rewritten: list[Path] = []

    def __enter__(self) -> "CatalogRewriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.discard()

    @property
    def rewritten(self) -> list[Path]:
        """Catalogs replaced so far, including those before a failed commit."""
        return list(self._rewritten)

    def stage(self, target: Path) -> StagedCatalog:
        """Open a temporary file that will replace ``target``."""
        staged = StagedCatalog(target, self._encoding)
        self._staged.append(staged)
        logger.debug("Staged %s as %s", target, staged.tmp_path)
        return staged

    def finalize(self, staged: StagedCatalog, *, changed: bool) -> None:
        """Close a staged file and queue it for commit if it differs.

        Unchanged catalogs are discarded so their originals keep their
        modification time.

        Raises:
            WriteError: If the staged file cannot be flushed.
        """
        if not changed:
            staged.discard()
            self._staged.remove(staged)
            return
        staged.close()
        self._pending.append(staged)

    def commit(self) -> list[Path]:
        """Atomically replace every changed catalog with its staged file.

        Returns:
            Catalog paths that were rewritten, in commit order.

        Raises:
            WriteError: If a rename fails. Catalogs replaced before the
                failure stay rewritten.
        """
        while self._pending:
            staged = self._pending[0]
            try:
                os.replace(staged.tmp_path, staged.target)
            except OSError as e:
                msg = f"Failed to replace {staged.target}: {e}"
                raise WriteError(msg) from e
            self._pending.pop(0)
            self._staged.remove(staged)
            self._rewritten.append(staged.target)
            logger.info("Rewrote %s", staged.target)
        return self.rewritten

    def discard(self) -> None:
        """Remove every temporary file that has not been committed."""
        for staged in self._staged:
            try:
                staged.discard()
            except OSError as e:
                logger.warning("Could not remove temporary file %s: %s", staged.tmp_path, e)
        self._staged.clear()
        self._pending.clear()
