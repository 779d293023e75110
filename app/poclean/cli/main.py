"""Main CLI application entry point.

Defines the Typer application, its options and the mapping from run
outcomes and errors to process exit codes.
"""

from enum import IntEnum
from pathlib import Path
from typing import Annotated

import typer
from rich.text import Text

from poclean import __version__
from poclean.catalog.errors import CleanerError, IgnoreRuleError, PathError, ScanError, WriteError
from poclean.cleaner import RunResult, ScanMode, TranslationCleaner
from poclean.config import ConfigError, load_config
from poclean.utils.formatting import (
    configure_logging,
    console,
    create_catalog_table,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    name="poclean",
    help="Find and remove unused translations from gettext catalogs.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


class ExitCode(IntEnum):
    """Process exit codes.

    UNUSED signals a successful run that found (check) or removed
    (clean) unused translations. Codes from 3 up are aborts.
    """

    SUCCESS = 0
    UNUSED = 1
    USAGE = 2
    PATH_ERROR = 3
    IGNORE_ERROR = 4
    SCAN_ERROR = 5
    WRITE_ERROR = 6
    ERROR = 7


def exit_code_for(error: Exception) -> ExitCode:
    """Map an aborting error to its exit code."""
    if isinstance(error, PathError):
        return ExitCode.PATH_ERROR
    if isinstance(error, (IgnoreRuleError, ConfigError)):
        return ExitCode.IGNORE_ERROR
    if isinstance(error, ScanError):
        return ExitCode.SCAN_ERROR
    if isinstance(error, WriteError):
        return ExitCode.WRITE_ERROR
    return ExitCode.ERROR


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"poclean version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    root: Annotated[
        Path,
        typer.Argument(
            help="Root of the project to scan.",
            show_default=False,
        ),
    ],
    check: Annotated[
        bool,
        typer.Option(
            "--check",
            "-c",
            help="Only report unused translations; exit 1 if any are found.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Read settings from this TOML file.",
            show_default=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Remove msgid entries that no source or template file uses.

    By default unused entries are deleted from every [bold].po[/bold]
    catalog under ROOT. With [bold]--check[/bold] they are only listed.
    """
    configure_logging(verbose)
    mode = ScanMode.CHECK if check else ScanMode.CLEAN

    try:
        config = load_config(root, config_path)
        result = TranslationCleaner(config, mode).run(root)
    except (CleanerError, ConfigError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=exit_code_for(e)) from e
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=ExitCode.ERROR) from e

    if not quiet:
        if not result.catalogs:
            print_warning(f"No files matching {config.catalog_pattern} found under {result.root}")
        elif verbose:
            print_info(
                f"Scanned {len(result.catalogs)} catalog(s) against "
                f"{result.candidate_count} candidate file(s)"
            )

    if mode is ScanMode.CHECK:
        _report_check(result, quiet)
    else:
        _report_clean(result, quiet)

    if result.has_unused:
        raise typer.Exit(code=ExitCode.UNUSED)


# === Private helper functions ===


def _report_check(result: RunResult, quiet: bool) -> None:
    """Print unused keys and a summary for a check run."""
    if not result.has_unused:
        if not quiet:
            print_success("All done! No unused translations found.")
        return

    for key in result.report.splitlines():
        console.print(Text(key, style="key"), soft_wrap=True)

    if not quiet:
        console.print(f"\n[summary]{result.unused_count} unused translations[/]")


def _report_clean(result: RunResult, quiet: bool) -> None:
    """Print rewritten catalogs and a summary for a clean run."""
    if quiet:
        return
    if not result.has_unused:
        print_success("No unused translations found.")
        return

    table = create_catalog_table()
    for catalog in result.catalogs:
        if catalog.unused_count == 0:
            continue
        try:
            name = str(catalog.path.relative_to(result.root))
        except ValueError:
            name = str(catalog.path)
        table.add_row(Text(name), str(catalog.unused_count))
    console.print(table)

    console.print(
        f"\n[summary]Removed {result.unused_count} unused translations "
        f"from {len(result.rewritten)} catalog file(s)[/]"
    )


if __name__ == "__main__":
    app()
