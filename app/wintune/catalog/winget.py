"""winget catalog query adapter.

Runs the winget executable for searches and package details and hands
the raw text to the parsers in wintune.catalog.parser.
"""

import logging
import subprocess

from wintune.catalog.parser import (
    is_empty_result,
    parse_search_output,
    parse_versions_output,
)
from wintune.models.package import SearchResult
from wintune.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Keep winget from prompting on first use of a source
_NON_INTERACTIVE_ARGS = ["--accept-source-agreements", "--disable-interactivity"]


class CatalogError(Exception):
    """Raised when the catalog executable is unavailable or fails."""


class WingetCatalog:
    """Query adapter for the winget package catalog.

    Example:
        >>> catalog = WingetCatalog()
        >>> if catalog.is_available():
        ...     for result in catalog.search("vlc"):
        ...         print(f"{result.package_id}: {result.version}")
    """

    def __init__(self, executable: str = "winget", timeout: float | None = 120.0) -> None:
        """Initialize WingetCatalog.

        Args:
            executable: winget executable name or path.
            timeout: Seconds to wait for each winget call.
        """
        self.executable = executable
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check if the winget executable can be found."""
        return command_exists(self.executable)

    def search(self, query: str) -> list[SearchResult]:
        """Search the catalog.

        Args:
            query: Free-text search query.

        Returns:
            Parsed search results; empty when nothing matched.

        Raises:
            CatalogError: If winget is unavailable or fails.
        """
        if not query.strip():
            msg = "Search query cannot be empty"
            raise CatalogError(msg)

        raw = self._run(["search", "--query", query])
        if is_empty_result(raw):
            return []
        results = parse_search_output(raw)
        logger.debug("Search %r returned %d result(s)", query, len(results))
        return results

    def show(self, package_id: str) -> str:
        """Return winget's detail text for a package.

        Args:
            package_id: Catalog identifier.

        Returns:
            Raw `winget show` output, or an empty string if not found.

        Raises:
            CatalogError: If winget is unavailable or fails.
        """
        raw = self._run(["show", "--id", package_id])
        if is_empty_result(raw):
            return ""
        return raw

    def versions(self, package_id: str) -> list[str]:
        """List the versions the catalog offers for a package.

        Args:
            package_id: Catalog identifier.

        Returns:
            Versions newest first; empty if the package is unknown.

        Raises:
            CatalogError: If winget is unavailable or fails.
        """
        raw = self._run(["show", "--id", package_id, "--versions"])
        if is_empty_result(raw):
            return []
        return parse_versions_output(raw)

    def _run(self, args: list[str]) -> str:
        """Run winget and return its stdout.

        A non-zero exit is accepted when winget printed the no-results
        sentinel, since that is how it reports an empty search.
        """
        if not self.is_available():
            msg = f"winget executable '{self.executable}' is not available on this system"
            raise CatalogError(msg)

        command = [self.executable, *args, *_NON_INTERACTIVE_ARGS]
        logger.debug("Running %s", " ".join(command))
        try:
            result = run_command(command, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            msg = f"winget {args[0]} timed out after {self.timeout}s"
            raise CatalogError(msg) from e
        except OSError as e:
            msg = f"Failed to run winget: {e}"
            raise CatalogError(msg) from e

        if not result.success and not is_empty_result(result.stdout):
            detail = result.detail or "unknown error"
            msg = f"winget {args[0]} failed (exit {result.returncode}): {detail}"
            raise CatalogError(msg)

        return result.stdout
