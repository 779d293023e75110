"""Allow running poclean with ``python -m poclean``."""

from poclean.cli.main import app

app(prog_name="poclean")
