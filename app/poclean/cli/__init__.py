"""CLI package for poclean.

This package contains the Typer application.
"""

from poclean.cli.main import app

__all__ = ["app"]
