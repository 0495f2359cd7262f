"""Parsers for winget text output.

winget prints fixed-width tables meant for humans. The search parser
matches each line against SEARCH_LINE_PATTERN; anything that does not
match (headers, separators, progress spinner frames) is dropped.

The pattern and the cleanup rules below are a versioned contract with
winget's output format. Changing either needs the literal examples in
tests/unit/catalog/test_parser.py updated alongside.
"""

import logging
import re

from wintune.models.package import SearchResult

logger = logging.getLogger(__name__)

SEARCH_LINE_PATTERN = re.compile(
    r"^(?P<name>.+)\s+"
    # Identifier: two or more dot-joined segments with at least one letter,
    # so a bare numeric version never qualifies.
    r"(?P<id>(?=\S*[A-Za-z])[^\s.]+(?:\.[^\s.]+)+)\s+"
    r"(?P<version>\S+)"
    # Match/Source columns, when present, are ignored
    r"(?:\s+.*)?$"
)

# Column truncation marker, plus its UTF-8-read-as-cp1252 mojibake
TRUNCATION_ARTIFACTS: tuple[str, ...] = ("â€¦", "…")

NO_RESULTS_SENTINEL = "No package found matching input criteria."


def _strip_truncation(value: str) -> str:
    for artifact in TRUNCATION_ARTIFACTS:
        value = value.replace(artifact, "")
    return value


def is_empty_result(raw: str) -> bool:
    """Check whether winget reported that nothing matched.

    Args:
        raw: Raw stdout of a search or show command.

    Returns:
        True if the no-results sentinel line is present.
    """
    return any(line.strip() == NO_RESULTS_SENTINEL for line in raw.splitlines())


def parse_search_line(line: str) -> SearchResult | None:
    """Parse a single line of `winget search` output.

    Args:
        line: One line of search output.

    Returns:
        SearchResult if the line is a package row, None otherwise.
    """
    match = SEARCH_LINE_PATTERN.match(line)
    if match is None:
        logger.debug("Skipping non-package line: %r", line[:100])
        return None

    name = match.group("name").strip()
    package_id = _strip_truncation(match.group("id").strip())
    version = match.group("version").strip()

    if not name or not package_id:
        logger.debug("Skipping line with empty name/id: %r", line[:100])
        return None

    return SearchResult(name=name, package_id=package_id, version=version)


def parse_search_output(raw: str) -> list[SearchResult]:
    """Parse `winget search` output into search results.

    Output order follows input line order. Duplicates are kept; the
    import list deduplicates on insertion.

    Args:
        raw: Raw stdout of `winget search`.

    Returns:
        List of parsed search results (possibly empty).
    """
    results: list[SearchResult] = []
    for line in raw.splitlines():
        result = parse_search_line(line)
        if result is not None:
            results.append(result)
    return results


def parse_versions_output(raw: str) -> list[str]:
    """Parse `winget show --versions` output into a version list.

    The listing is a 'Version' header, a dashed separator and then one
    version per line. Everything before the separator is ignored.

    Args:
        raw: Raw stdout of `winget show --id <id> --versions`.

    Returns:
        Versions in the order winget lists them (newest first).
    """
    versions: list[str] = []
    in_table = False
    for line in raw.splitlines():
        stripped = line.strip()
        if not in_table:
            if stripped and set(stripped) == {"-"}:
                in_table = True
            continue
        if stripped:
            versions.append(stripped)
    return versions
