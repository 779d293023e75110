"""Catalog scanning and cleanup module.

This module provides file discovery, ignore-rule filtering, literal
usage lookup, the line-oriented catalog scanner and the atomic catalog
rewriter.
"""

from poclean.catalog.discovery import discover_files, discover_many, resolve_root
from poclean.catalog.errors import CleanerError, IgnoreRuleError, PathError, ScanError, WriteError
from poclean.catalog.ignore import IgnoreRules, filter_ignored, load_ignore_rules
from poclean.catalog.models import CatalogEntry, CatalogScanResult, LineKind, WriteState
from poclean.catalog.rewriter import CatalogRewriter, StagedCatalog
from poclean.catalog.scanner import CatalogScanner, classify_line, extract_key
from poclean.catalog.usage import UsageIndex, is_used_in_paths

__all__ = [
    "CatalogEntry",
    "CatalogRewriter",
    "CatalogScanResult",
    "CatalogScanner",
    "CleanerError",
    "IgnoreRuleError",
    "IgnoreRules",
    "LineKind",
    "PathError",
    "ScanError",
    "StagedCatalog",
    "UsageIndex",
    "WriteError",
    "WriteState",
    "classify_line",
    "discover_files",
    "discover_many",
    "extract_key",
    "filter_ignored",
    "is_used_in_paths",
    "load_ignore_rules",
    "resolve_root",
]
