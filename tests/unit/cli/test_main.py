"""Unit tests for the poclean command line.

Tests for exit codes, check and clean output, and option handling.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from poclean import __version__
from poclean.catalog.errors import IgnoreRuleError, PathError, ScanError, WriteError
from poclean.cli.main import ExitCode, app, exit_code_for
from poclean.config import ConfigError
from typer.testing import CliRunner

runner = CliRunner()


class TestExitCodeFor:
    """Tests for the error to exit code mapping."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (PathError("missing"), ExitCode.PATH_ERROR),
            (IgnoreRuleError("bad pattern"), ExitCode.IGNORE_ERROR),
            (ConfigError("bad toml"), ExitCode.IGNORE_ERROR),
            (ScanError("unreadable"), ExitCode.SCAN_ERROR),
            (WriteError("read-only"), ExitCode.WRITE_ERROR),
            (RuntimeError("boom"), ExitCode.ERROR),
        ],
    )
    def test_mapping(self, error: Exception, code: ExitCode) -> None:
        """Each error family has its own exit code."""
        assert exit_code_for(error) is code


class TestCheckCommand:
    """Tests for poclean --check."""

    def test_lists_unused_keys(self, project: Path, catalog_path: Path) -> None:
        """Unused keys are printed one per line and the run exits 1."""
        before = catalog_path.read_bytes()

        result = runner.invoke(app, ["--check", str(project)])

        assert result.exit_code == ExitCode.UNUSED
        assert "bye" in result.output
        assert "1 unused translations" in result.output
        assert catalog_path.read_bytes() == before

    def test_clean_project(self, project: Path) -> None:
        """A project without unused keys exits 0."""
        (project / "more.py").write_text('_("bye")\n', encoding="utf-8")

        result = runner.invoke(app, ["-c", str(project)])

        assert result.exit_code == ExitCode.SUCCESS
        assert "No unused translations found" in result.output

    def test_quiet_prints_only_keys(self, project: Path) -> None:
        """Quiet mode keeps the key list but drops the summary."""
        result = runner.invoke(app, ["--check", "--quiet", str(project)])

        assert result.exit_code == ExitCode.UNUSED
        assert result.output.strip() == "bye"


class TestCleanCommand:
    """Tests for the default clean mode."""

    def test_removes_unused_entries(self, project: Path, catalog_path: Path) -> None:
        """Unused entries are removed and the run exits 1."""
        result = runner.invoke(app, [str(project)])

        content = catalog_path.read_text(encoding="utf-8")
        assert result.exit_code == ExitCode.UNUSED
        assert "Removed 1 unused translations from 1 catalog file(s)" in result.output
        assert 'msgid "hello"' in content
        assert 'msgid "bye"' not in content

    def test_second_run_is_clean(self, project: Path) -> None:
        """Running clean twice exits 0 the second time."""
        runner.invoke(app, [str(project)])

        result = runner.invoke(app, [str(project)])

        assert result.exit_code == ExitCode.SUCCESS
        assert "No unused translations found." in result.output

    def test_empty_root(self, tmp_path: Path) -> None:
        """An empty root is a successful run with nothing to do."""
        result = runner.invoke(app, [str(tmp_path)])

        assert result.exit_code == ExitCode.SUCCESS
        assert "No files matching" in result.output

    def test_verbose_summary(self, project: Path) -> None:
        """Verbose runs print how many files were scanned."""
        result = runner.invoke(app, ["--verbose", str(project)])

        assert result.exit_code == ExitCode.UNUSED
        assert "Scanned 1 catalog(s) against 1 candidate file(s)" in result.output

    def test_quiet_prints_nothing(self, project: Path) -> None:
        """Quiet clean runs print nothing on success."""
        result = runner.invoke(app, ["-q", str(project)])

        assert result.exit_code == ExitCode.UNUSED
        assert result.output == ""

    def test_write_error(self, project: Path) -> None:
        """A failed rename exits with the write error code."""
        with patch("poclean.catalog.rewriter.os.replace", side_effect=OSError("read-only")):
            result = runner.invoke(app, [str(project)])

        assert result.exit_code == ExitCode.WRITE_ERROR
        assert "Failed to replace" in result.output


class TestArguments:
    """Tests for argument and option handling."""

    def test_missing_root(self) -> None:
        """Omitting the root is a usage error."""
        result = runner.invoke(app, [])

        assert result.exit_code == ExitCode.USAGE

    def test_nonexistent_root(self, tmp_path: Path) -> None:
        """A root that does not exist exits with the path error code."""
        result = runner.invoke(app, [str(tmp_path / "missing")])

        assert result.exit_code == ExitCode.PATH_ERROR
        assert "Error:" in result.output

    def test_root_is_file(self, tmp_path: Path) -> None:
        """A root that is a regular file is a path error."""
        target = tmp_path / "a.po"
        target.write_text("", encoding="utf-8")

        result = runner.invoke(app, [str(target)])

        assert result.exit_code == ExitCode.PATH_ERROR

    def test_version(self) -> None:
        """--version prints the version and exits 0."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"poclean version {__version__}" in result.output

    def test_missing_config_file(self, project: Path) -> None:
        """A missing --config file exits with the ignore/config error code."""
        result = runner.invoke(app, ["--config", str(project / "nope.toml"), str(project)])

        assert result.exit_code == ExitCode.IGNORE_ERROR
        assert "Config file not found" in result.output

    def test_config_file_applies(self, project: Path) -> None:
        """Settings from --config change what counts as a candidate."""
        (project / "page.jinja").write_text("{{ _('bye') }}\n", encoding="utf-8")
        config = project / "ci.toml"
        config.write_text('template_patterns = ["*.jinja"]\n', encoding="utf-8")

        result = runner.invoke(app, ["--check", "--config", str(config), str(project)])

        assert result.exit_code == ExitCode.SUCCESS

    def test_undecodable_catalog(self, tmp_path: Path) -> None:
        """A decode failure is a scan error, not an unused-translations result."""
        (tmp_path / ".poclean.toml").write_text('encoding = "utf-16-le"\n', encoding="utf-8")
        (tmp_path / "de.po").write_bytes(
            'msgid "gone"\n'.encode("utf-16-le") + b"\x00\xd8" + "\n".encode("utf-16-le")
        )

        result = runner.invoke(app, ["--check", str(tmp_path)])

        assert result.exit_code == ExitCode.SCAN_ERROR
        assert "Failed reading catalog" in result.output

    def test_non_utf8_gitignore(self, project: Path) -> None:
        """Non-UTF-8 bytes in .gitignore do not abort the run."""
        (project / "more.py").write_text('_("bye")\n', encoding="utf-8")
        (project / ".gitignore").write_bytes(b"caf\xe9/\n")

        result = runner.invoke(app, ["--check", str(project)])

        assert result.exit_code == ExitCode.SUCCESS

    def test_unexpected_error(self, project: Path) -> None:
        """Errors outside the known families exit with the generic code."""
        with patch(
            "poclean.cli.main.TranslationCleaner.run",
            side_effect=RuntimeError("boom"),
        ):
            result = runner.invoke(app, [str(project)])

        assert result.exit_code == ExitCode.ERROR
        assert "Unexpected error: boom" in result.output

    def test_invalid_ignore_pattern(self, project: Path) -> None:
        """A broken ignore rule set exits with the ignore error code."""
        with patch(
            "poclean.cleaner.load_ignore_rules",
            side_effect=IgnoreRuleError("Invalid ignore pattern"),
        ):
            result = runner.invoke(app, [str(project)])

        assert result.exit_code == ExitCode.IGNORE_ERROR
