"""Unit tests for winget output parsers.

The literal lines here pin the search line pattern and cleanup rules.
"""

import pytest
from wintune.catalog.parser import (
    SEARCH_LINE_PATTERN,
    is_empty_result,
    parse_search_line,
    parse_search_output,
    parse_versions_output,
)
from wintune.models.package import SearchResult


class TestParseSearchLine:
    """Tests for parse_search_line function."""

    def test_parses_simple_row(self) -> None:
        """A name/id/version row parses into its three fields."""
        result = parse_search_line("VLC media player   VideoLAN.VLC   3.0.20")

        assert result == SearchResult(
            name="VLC media player",
            package_id="VideoLAN.VLC",
            version="3.0.20",
        )

    def test_dash_separator_produces_nothing(self) -> None:
        """A separator line of dashes is dropped."""
        assert parse_search_line("-----------") is None

    def test_header_produces_nothing(self) -> None:
        """The column header has no dotted identifier and is dropped."""
        assert parse_search_line("Name   Id   Version   Match   Source") is None

    def test_ignores_match_and_source_columns(self) -> None:
        """Columns after the version are ignored."""
        result = parse_search_line("VLC media player  VideoLAN.VLC  3.0.20  Moniker: vlc  winget")

        assert result is not None
        assert result.package_id == "VideoLAN.VLC"
        assert result.version == "3.0.20"

    def test_dotted_match_token_shifts_columns(self) -> None:
        """A lettered, dotted Match value is taken as the ID.

        The name column is matched greedily, so the last ID-shaped token
        followed by another token wins. This pins the known limitation.
        """
        line = "Node.js  OpenJS.NodeJS  20.10.0  Tag: node.js  winget"

        result = parse_search_line(line)

        assert result is not None
        assert result.name == "Node.js  OpenJS.NodeJS  20.10.0  Tag:"
        assert result.package_id == "node.js"
        assert result.version == "winget"

    def test_numeric_version_is_never_the_identifier(self) -> None:
        """A dotted version with no letters is not taken as the ID."""
        line = "Microsoft .NET SDK 8.0  Microsoft.DotNet.SDK.8  8.0.100  winget"

        result = parse_search_line(line)

        assert result is not None
        assert result.name == "Microsoft .NET SDK 8.0"
        assert result.package_id == "Microsoft.DotNet.SDK.8"
        assert result.version == "8.0.100"

    @pytest.mark.parametrize("artifact", ["â€¦", "…"])
    def test_strips_truncation_artifact_from_id(self, artifact: str) -> None:
        """The ellipsis truncation marker is removed from the ID."""
        line = f"Visual Studio Code Insiders  Microsoft.VisualStudioCode.Ins{artifact}  1.86.0"

        result = parse_search_line(line)

        assert result is not None
        assert result.package_id == "Microsoft.VisualStudioCode.Ins"

    def test_keeps_truncation_artifact_in_name(self) -> None:
        """Only the ID is cleaned; the name keeps its ellipsis."""
        line = "Microsoft Visual Studio Co…  Microsoft.VisualStudioCode  1.85.1"

        result = parse_search_line(line)

        assert result is not None
        assert result.name == "Microsoft Visual Studio Co…"

    def test_id_without_dot_is_dropped(self) -> None:
        """Store IDs without a dot do not match."""
        assert parse_search_line("VLC UWP   9NBLGGH4VVNH   Unknown   msstore") is None

    def test_whitespace_only_name_is_dropped(self) -> None:
        """A row whose name is blank is excluded."""
        assert parse_search_line("     VideoLAN.VLC   3.0.20") is None

    def test_truncated_row_is_dropped(self) -> None:
        """A row cut off before the version does not match."""
        assert parse_search_line("VLC media player   VideoLAN.VLC") is None

    def test_trims_fields(self) -> None:
        """Surrounding whitespace is trimmed from every field."""
        result = parse_search_line("  Git   Git.Git   2.43.0   ")

        assert result is not None
        assert (result.name, result.package_id, result.version) == ("Git", "Git.Git", "2.43.0")

    def test_pattern_is_anchored(self) -> None:
        """The pattern must match the whole line."""
        assert SEARCH_LINE_PATTERN.pattern.startswith("^")
        assert SEARCH_LINE_PATTERN.pattern.endswith("$")


class TestParseSearchOutput:
    """Tests for parse_search_output function."""

    def test_parses_winget_table(self, mock_search_output: str) -> None:
        """Package rows are parsed; header, separator and spinner are dropped."""
        results = parse_search_output(mock_search_output)

        assert [r.package_id for r in results] == [
            "VideoLAN.VLC",
            "Microsoft.VisualStudioCode",
            "Microsoft.DotNet.SDK.8",
        ]
        assert results[1].name == "Microsoft Visual Studio Code"

    def test_preserves_order_and_duplicates(self) -> None:
        """Output follows input order and keeps repeated IDs."""
        raw = "B app  Pub.B  1.0\nA app  Pub.A  2.0\nB app  Pub.B  1.0\n"

        results = parse_search_output(raw)

        assert [r.package_id for r in results] == ["Pub.B", "Pub.A", "Pub.B"]

    def test_empty_input(self) -> None:
        """Empty output yields no results."""
        assert parse_search_output("") == []

    def test_never_more_results_than_lines(self, mock_search_output: str) -> None:
        """Every emitted record has a non-empty name and ID."""
        results = parse_search_output(mock_search_output)

        assert len(results) <= len(mock_search_output.splitlines())
        assert all(r.name.strip() and r.package_id.strip() for r in results)


class TestParseVersionsOutput:
    """Tests for parse_versions_output function."""

    def test_parses_versions(self, mock_versions_output: str) -> None:
        """Versions after the separator are returned in order."""
        assert parse_versions_output(mock_versions_output) == ["3.0.20", "3.0.18", "3.0.17.4"]

    def test_no_separator(self) -> None:
        """Without a separator line nothing is returned."""
        assert parse_versions_output("Found VLC media player [VideoLAN.VLC]\n") == []


class TestIsEmptyResult:
    """Tests for is_empty_result function."""

    def test_detects_sentinel(self, mock_no_results_output: str) -> None:
        """The no-results sentinel line is recognized."""
        assert is_empty_result(mock_no_results_output) is True

    def test_regular_output(self, mock_search_output: str) -> None:
        """Regular search output is not empty."""
        assert is_empty_result(mock_search_output) is False
