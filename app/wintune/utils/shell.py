"""Subprocess helpers.

winget and the PowerShell import script are both run through
run_command, which captures their output as text.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output of a finished process.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        returncode: Process exit code.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the process exited with code 0."""
        return self.returncode == 0

    @property
    def detail(self) -> str:
        """Last non-empty line of stderr, falling back to stdout.

        winget reports most failures on stdout, so both streams are tried.
        """
        for stream in (self.stderr, self.stdout):
            lines = [line.strip() for line in stream.splitlines() if line.strip()]
            if lines:
                return lines[-1]
        return ""


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | Path | None = None,
) -> CommandResult:
    """Run a process to completion and capture its output.

    Output is decoded as UTF-8 with undecodable bytes replaced, so
    console codepage mismatches never abort a run.

    Args:
        args: Executable and arguments.
        check: Raise CalledProcessError on a non-zero exit.
        timeout: Seconds to wait; None waits until the process exits.
        cwd: Working directory of the process.

    Returns:
        CommandResult with the captured streams and exit code.

    Raises:
        subprocess.CalledProcessError: If check is set and the exit code is non-zero.
        subprocess.TimeoutExpired: If the timeout elapses.
        FileNotFoundError: If the executable does not exist.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=check,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )


def command_exists(name: str) -> bool:
    """Check whether an executable can be run.

    Accepts a bare command looked up on PATH or a path to an executable.
    """
    return shutil.which(name) is not None
