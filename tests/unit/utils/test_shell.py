"""Unit tests for shell execution utilities."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from wintune.utils.shell import CommandResult, command_exists, run_command


class TestRunCommand:
    """Tests for run_command function."""

    @patch("wintune.utils.shell.subprocess.run")
    def test_wraps_completed_process(self, mock_run: MagicMock) -> None:
        """run_command returns the captured output as a CommandResult."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["winget", "--version"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        assert not result.success

    @patch("wintune.utils.shell.subprocess.run")
    def test_decodes_as_utf8_with_replacement(self, mock_run: MagicMock) -> None:
        """Output is decoded as UTF-8 and bad bytes are replaced."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["winget"], timeout=None, cwd="C:/work")

        kwargs = mock_run.call_args.kwargs
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"
        assert kwargs["timeout"] is None
        assert kwargs["cwd"] == "C:/work"

    @patch("wintune.utils.shell.subprocess.run")
    def test_propagates_timeout(self, mock_run: MagicMock) -> None:
        """Timeouts are raised to the caller."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="winget", timeout=1)

        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["winget"], timeout=1)

    def test_raises_file_not_found(self) -> None:
        """A missing executable raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            run_command(["nonexistent_command_xyz_12345"])


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("wintune.utils.shell.shutil.which")
    def test_found(self, mock_which: MagicMock) -> None:
        """command_exists is True when the command is on PATH."""
        mock_which.return_value = "/usr/bin/pwsh"
        assert command_exists("pwsh") is True

    @patch("wintune.utils.shell.shutil.which", return_value=None)
    def test_missing(self, mock_which: MagicMock) -> None:
        """command_exists is False when the command is not on PATH."""
        assert command_exists("winget") is False


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_detail_prefers_stderr(self) -> None:
        """detail is the last non-empty stderr line."""
        result = CommandResult(
            stdout="progress\n", stderr="first\nAccess denied\n\n", returncode=5
        )
        assert result.detail == "Access denied"

    def test_detail_falls_back_to_stdout(self) -> None:
        """detail uses stdout when stderr is empty."""
        result = CommandResult(
            stdout="Searching...\nSource 'winget' failed\n", stderr="", returncode=1
        )
        assert result.detail == "Source 'winget' failed"

    def test_detail_empty(self) -> None:
        """detail is empty when the process printed nothing."""
        assert CommandResult(stdout="", stderr="  \n", returncode=1).detail == ""
