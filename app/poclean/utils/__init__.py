"""Utility modules for poclean.

This module exports commonly used utility functions.
"""

from poclean.utils.formatting import (
    configure_logging,
    console,
    create_catalog_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "configure_logging",
    "console",
    "create_catalog_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
