"""Line-oriented scanner for gettext catalog entries.

The scanner is not a PO parser. It recognizes two line
classes, ``msgid`` declarations and ``#`` comments, and treats every
other line as opaque passthrough. A two-state machine decides which
lines survive a rewrite:

- an unused declaration switches to SUPPRESS,
- a used declaration switches to WRITE,
- a comment switches to WRITE unconditionally,
- any other line keeps the current state.

Comments directly preceding a declaration form its leading block. The
block is held back until the declaration is classified and is dropped
together with an unused declaration. A blank line or the end of the
file releases a held block unchanged.
"""

import logging
import re
from pathlib import Path

from poclean.catalog.errors import ScanError
from poclean.catalog.models import CatalogEntry, CatalogScanResult, LineKind, WriteState
from poclean.catalog.rewriter import StagedCatalog
from poclean.catalog.usage import UsageIndex

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"

# "msgid" followed by whitespace; msgid_plural is passthrough
_DECLARATION_RE = re.compile(r"^msgid\s")


def classify_line(text: str) -> LineKind:
    """Classify a catalog line without its line ending."""
    if _DECLARATION_RE.match(text):
        return LineKind.DECLARATION
    if text.startswith(COMMENT_MARKER):
        return LineKind.COMMENT
    return LineKind.OTHER


def extract_key(text: str) -> str:
    """Extract the translation key from a declaration line.

    Takes everything after the ``msgid`` keyword, strips surrounding
    whitespace and trims one layer of double quotes.

    Example:
        >>> extract_key('msgid "Hello, world"')
        'Hello, world'
    """
    value = text[len("msgid") :].strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


class CatalogScanner:
    """Classifies catalog entries and streams the retained lines.

    Args:
        usage: Usage index over all candidate source and template files.
        encoding: Text encoding of the catalogs.
    """

    def __init__(self, usage: UsageIndex, encoding: str = "utf-8") -> None:
        self._usage = usage
        self._encoding = encoding

    def scan(self, path: Path, output: StagedCatalog | None = None) -> CatalogScanResult:
        """Scan a single catalog file.

        Args:
            path: Catalog file to scan.
            output: Staged rewrite receiving every retained line. When
                None, entries are only classified (check mode).

        Returns:
            CatalogScanResult with the unused entries of this file.

        Raises:
            ScanError: If the catalog or a candidate file cannot be read.
            WriteError: If writing to ``output`` fails.
        """
        result = CatalogScanResult(path=path)
        state = WriteState.WRITE
        pending: list[str] = []

        def emit(lines: list[str]) -> None:
            if output is not None:
                for line in lines:
                    output.write(line)

        try:
            f = open(path, encoding=self._encoding, errors="surrogateescape", newline="")
        except OSError as e:
            msg = f"Cannot open catalog {path}: {e}"
            raise ScanError(msg) from e

        with f:
            try:
                for number, line in enumerate(f, start=1):
                    text = line.rstrip("\r\n")
                    kind = classify_line(text)

                    if kind is LineKind.COMMENT:
                        state = WriteState.WRITE
                        pending.append(line)
                        continue

                    if kind is LineKind.DECLARATION:
                        result.declarations += 1
                        key = extract_key(text)
                        if self._usage.is_used(key):
                            state = WriteState.WRITE
                            emit([*pending, line])
                        else:
                            state = WriteState.SUPPRESS
                            comments = tuple(
                                p.rstrip("\r\n") for p in pending if p.startswith(COMMENT_MARKER)
                            )
                            result.unused.append(CatalogEntry(path, number, key, comments))
                            result.lines_dropped += len(pending) + 1
                            logger.debug("Unused translation %r at %s:%d", key, path, number)
                        pending = []
                        continue

                    if pending:
                        # Non-blank lines between comments and msgid (e.g. msgctxt)
                        # belong to the upcoming entry
                        if text.strip():
                            pending.append(line)
                            continue
                        emit(pending)
                        pending = []

                    if state is WriteState.WRITE:
                        emit([line])
                    else:
                        result.lines_dropped += 1
            except (OSError, UnicodeError) as e:
                msg = f"Failed reading catalog {path}: {e}"
                raise ScanError(msg) from e

        emit(pending)

        logger.debug(
            "Scanned %s: %d declaration(s), %d unused",
            path,
            result.declarations,
            result.unused_count,
        )
        return result
