"""Unit tests for the development task runner."""

# pyright: reportPrivateUsage=false

import subprocess
from unittest.mock import patch

import devops
import pytest


class TestMain:
    """Tests for task dispatch."""

    def test_unknown_task(self) -> None:
        """Unknown tasks print usage and return 2."""
        assert devops.main(["deploy"]) == 2

    def test_missing_task(self) -> None:
        """Running without a task returns 2."""
        assert devops.main([]) == 2

    def test_lint_runs_ruff_on_sources(self) -> None:
        """The lint task checks app/ and tests/ with ruff."""
        with patch("devops.subprocess.run") as mock_run:
            assert devops.main(["lint"]) == 0

        commands = [call.args[0] for call in mock_run.call_args_list]
        assert commands[0][:3] == ["ruff", "format", "--check"]
        assert all("app" in cmd and "tests" in cmd for cmd in commands)


class TestRun:
    """Tests for command execution."""

    def test_stops_on_first_failure(self) -> None:
        """A failing command exits with its return code."""
        failure = subprocess.CalledProcessError(3, ["ruff", "check"])

        with (
            patch("devops.subprocess.run", side_effect=[None, failure, None]) as mock_run,
            pytest.raises(SystemExit) as exc_info,
        ):
            devops._run([["true"], ["ruff", "check"], ["echo", "never"]])

        assert exc_info.value.code == 3
        assert mock_run.call_count == 2
