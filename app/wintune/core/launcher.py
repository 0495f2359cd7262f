"""Import launcher.

Exports the import list to a temporary CSV, runs the external Intune
import script against it and replays the script's log file once it
has finished.

The launch is synchronous: one import at a time, blocking until the
script exits. There are no retries and no cancellation.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from wintune.core.store import ImportListExportError, write_import_csv
from wintune.utils.shell import CommandResult, run_command

if TYPE_CHECKING:
    from wintune.core.config import LauncherConfig, TenantConfig
    from wintune.core.store import ImportListStore

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

LogSink = Callable[[str], None]


class LaunchError(Exception):
    """Base exception for import launch errors."""


class InvalidConfigError(LaunchError):
    """Raised when the tenant configuration is unusable."""


class MissingDependencyError(LaunchError):
    """Raised when required collaborator files are missing.

    Attributes:
        missing: Paths of every missing file.
    """

    def __init__(self, missing: list[Path]) -> None:
        self.missing = missing
        names = ", ".join(str(p) for p in missing)
        super().__init__(f"Required file(s) missing: {names}")


class ImportProcessError(LaunchError):
    """Raised when the import process cannot start or exits abnormally.

    Attributes:
        returncode: Exit code, or None if the process never started.
    """

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)


@dataclass(slots=True)
class LaunchResult:
    """Outcome of a completed import run.

    Attributes:
        returncode: Exit code of the import process.
        csv_path: Temporary CSV the process was given.
        log_path: Log file that was replayed, if one was found.
        lines: Log lines emitted to the sink.
    """

    returncode: int
    csv_path: Path
    log_path: Path | None = None
    lines: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if the import process exited cleanly."""
        return self.returncode == 0


def validate_tenant(tenant: TenantConfig) -> None:
    """Check that the tenant ID looks like a domain.

    Args:
        tenant: Tenant configuration to check.

    Raises:
        InvalidConfigError: If the tenant ID is empty, contains whitespace
            or has no dot.
    """
    tenant_id = tenant.tenant_id.strip()
    if not tenant_id:
        msg = "Tenant ID is not configured"
        raise InvalidConfigError(msg)
    if any(c.isspace() for c in tenant_id) or "." not in tenant_id:
        msg = f"Tenant ID '{tenant_id}' is not a domain (e.g. contoso.onmicrosoft.com)"
        raise InvalidConfigError(msg)


class ImportLauncher:
    """Runs the external Intune import script for an import list.

    Example:
        >>> launcher = ImportLauncher(config.launcher)
        >>> result = launcher.launch(store, config.tenant, sink=print)
    """

    def __init__(
        self,
        config: LauncherConfig,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize ImportLauncher.

        Args:
            config: Launcher settings. A relative working_dir is taken
                relative to the current directory at construction.
            clock: Source of the current local time, used for file names.
        """
        # The child runs inside working_dir, so script, CSV and
        # -WorkingFolder arguments must not be relative to it
        working_dir = config.working_dir.expanduser().resolve()
        self.config = config.model_copy(update={"working_dir": working_dir})
        self._clock = clock
        self._lock = threading.Lock()

    def missing_dependencies(self) -> list[Path]:
        """List required collaborator files that do not exist.

        Returns:
            Missing paths in configured order (empty if all present).
        """
        working_dir = self.config.working_dir
        candidates = [working_dir / name for name in self.config.required_files]
        if self.config.script_path not in candidates:
            candidates.insert(0, self.config.script_path)
        return [path for path in candidates if not path.is_file()]

    def build_command(self, csv_path: Path, tenant: TenantConfig) -> list[str]:
        """Build the import script command line.

        Args:
            csv_path: Import CSV handed to the script.
            tenant: Tenant identifiers.

        Returns:
            Argument list for the PowerShell executable.
        """
        return [
            self.config.shell,
            "-NoProfile",
            "-ExecutionPolicy",
            "Bypass",
            "-File",
            str(self.config.script_path),
            "-CsvFile",
            str(csv_path),
            "-TenantID",
            tenant.tenant_id.strip(),
            "-ClientID",
            tenant.client_id,
            "-RedirectURL",
            tenant.redirect_uri,
            "-WorkingFolder",
            str(self.config.working_dir),
            "-Force",
            "-SkipModuleCheck",
        ]

    def launch(
        self,
        store: ImportListStore,
        tenant: TenantConfig,
        sink: LogSink | None = None,
    ) -> LaunchResult:
        """Export the import list and run the import script.

        Args:
            store: Import list to import.
            tenant: Tenant identifiers passed to the script.
            sink: Receives each line of the script's log after it exits.
                Defaults to logging at INFO level.

        Returns:
            LaunchResult of a run that exited with code 0.

        Raises:
            InvalidConfigError: If the tenant ID is not a domain.
            MissingDependencyError: If collaborator files are missing.
            ImportProcessError: If the export fails, the process cannot
                start, or it exits with a non-zero code.
        """
        emit: LogSink = sink if sink is not None else logger.info

        validate_tenant(tenant)
        missing = self.missing_dependencies()
        if missing:
            raise MissingDependencyError(missing)

        with self._lock:
            started = self._clock().replace(microsecond=0)
            csv_path = self.config.working_dir / (
                f"{self.config.csv_prefix}_{started.strftime(TIMESTAMP_FORMAT)}.csv"
            )

            records = store.records
            try:
                write_import_csv(records, csv_path)
            except ImportListExportError as e:
                raise ImportProcessError(str(e)) from e
            logger.debug("Exported %d record(s) to %s", len(records), csv_path)

            try:
                result = self._run(csv_path, tenant)
            except ImportProcessError:
                self._remove_temp_csv(csv_path)
                raise

            log_path = self.find_log(started)
            lines = self._replay_log(log_path, emit)
            self._remove_temp_csv(csv_path)

        if not result.success:
            msg = f"Import process exited with code {result.returncode}"
            if result.detail:
                msg = f"{msg}: {result.detail}"
            raise ImportProcessError(msg, returncode=result.returncode)

        return LaunchResult(
            returncode=result.returncode,
            csv_path=csv_path,
            log_path=log_path,
            lines=lines,
        )

    def _run(self, csv_path: Path, tenant: TenantConfig) -> CommandResult:
        """Run the import script to completion."""
        command = self.build_command(csv_path, tenant)
        logger.debug("Starting import: %s", " ".join(command))
        try:
            result = run_command(command, timeout=None, cwd=str(self.config.working_dir))
        except (FileNotFoundError, OSError) as e:
            msg = f"Failed to start import process '{self.config.shell}': {e}"
            raise ImportProcessError(msg) from e
        return result

    def find_log(self, started: datetime) -> Path | None:
        """Find the log file the import script wrote for this run.

        Log files are named <log_prefix>_<yyyyMMddHHmmss>.log in the Logs
        directory. The newest one stamped at or after the launch wins.

        Args:
            started: Launch time, truncated to whole seconds.

        Returns:
            Path of the log file, or None if none was written.
        """
        logs_dir = self.config.logs_dir
        if not logs_dir.is_dir():
            return None

        prefix = f"{self.config.log_prefix}_"
        newest: tuple[datetime, Path] | None = None
        for path in logs_dir.glob(f"{prefix}*.log"):
            try:
                stamp = datetime.strptime(path.stem[len(prefix) :], TIMESTAMP_FORMAT)
            except ValueError:
                continue
            if stamp < started:
                continue
            if newest is None or stamp > newest[0]:
                newest = (stamp, path)

        return newest[1] if newest else None

    def _replay_log(self, log_path: Path | None, emit: LogSink) -> list[str]:
        """Send each line of the import log to the sink."""
        if log_path is None:
            logger.warning("No import log found in %s", self.config.logs_dir)
            return []

        try:
            text = log_path.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as e:
            logger.warning("Failed to read import log %s: %s", log_path, e)
            return []

        lines = text.splitlines()
        for line in lines:
            emit(line)
        return lines

    def _remove_temp_csv(self, csv_path: Path) -> None:
        """Delete the temporary import CSV, leaving it in place on failure."""
        try:
            csv_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not delete temporary import list %s: %s", csv_path, e)
