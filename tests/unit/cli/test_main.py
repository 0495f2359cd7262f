"""Unit tests for the main CLI application."""

import logging

import pytest
from typer.testing import CliRunner
from wintune import __version__
from wintune.cli.main import app, configure_logging

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        """--help lists the top-level commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("search", "show", "list", "launch", "config", "fields"):
            assert command in result.output

    def test_verbose_flag(self) -> None:
        """--verbose is accepted before a command."""
        result = runner.invoke(app, ["-v", "list"])

        assert result.exit_code == 0


class TestConfigureLogging:
    """Tests for configure_logging function."""

    @pytest.mark.parametrize(
        ("verbose", "quiet", "level"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.DEBUG),
            (False, True, logging.ERROR),
            (True, True, logging.DEBUG),
        ],
    )
    def test_levels(self, verbose: bool, quiet: bool, level: int) -> None:
        """Verbosity flags select the root log level."""
        configure_logging(verbose, quiet)
        assert logging.getLogger().level == level
