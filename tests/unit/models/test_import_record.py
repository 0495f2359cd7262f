"""Unit tests for import record and search result models."""

import pytest
from wintune.models.import_record import (
    CSV_COLUMNS,
    ImportRecord,
    InstallContext,
    parse_bool,
)
from wintune.models.package import SearchResult


class TestSearchResult:
    """Tests for SearchResult dataclass."""

    def test_create(self) -> None:
        """SearchResult keeps its fields."""
        result = SearchResult(name="VLC media player", package_id="VideoLAN.VLC", version="3.0.20")
        assert result.package_id == "VideoLAN.VLC"

    def test_rejects_empty_name(self) -> None:
        """SearchResult rejects a blank name."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            SearchResult(name="  ", package_id="VideoLAN.VLC", version="3.0.20")

    def test_rejects_empty_id(self) -> None:
        """SearchResult rejects a blank ID."""
        with pytest.raises(ValueError, match="ID cannot be empty"):
            SearchResult(name="VLC", package_id="", version="3.0.20")


class TestInstallContext:
    """Tests for InstallContext enum."""

    @pytest.mark.parametrize("raw", ["Machine", "machine", " MACHINE "])
    def test_parse_machine(self, raw: str) -> None:
        """Context names parse case-insensitively."""
        assert InstallContext.parse(raw) is InstallContext.MACHINE

    def test_parse_invalid(self) -> None:
        """Unknown context names are rejected."""
        with pytest.raises(ValueError, match="Invalid context"):
            InstallContext.parse("System")


class TestImportRecord:
    """Tests for ImportRecord dataclass."""

    def test_defaults_from_search_result(self) -> None:
        """A moved search result gets the default deployment settings."""
        result = SearchResult(name="VLC media player", package_id="VideoLAN.VLC", version="3.0.20")

        record = ImportRecord.from_search_result(result)

        assert record.package_id == "VideoLAN.VLC"
        assert record.context is InstallContext.MACHINE
        assert record.accept_newer_version is True
        assert record.update_only is False
        assert record.target_version == ""
        assert record.group_id == ""
        assert record.custom_argument_list_install == ""

    def test_rejects_empty_package_id(self) -> None:
        """ImportRecord requires a package ID."""
        with pytest.raises(ValueError, match="PackageID cannot be empty"):
            ImportRecord(package_id="   ")

    def test_strips_package_id(self) -> None:
        """Surrounding whitespace is removed from the package ID."""
        assert ImportRecord(package_id=" Git.Git ").package_id == "Git.Git"

    def test_context_from_string(self) -> None:
        """A context string is converted to InstallContext."""
        record = ImportRecord(package_id="Git.Git", context="user")  # type: ignore[arg-type]
        assert record.context is InstallContext.USER

    def test_rejects_non_bool_flag(self) -> None:
        """Boolean settings must be real bools."""
        with pytest.raises(ValueError, match="update_only must be a bool"):
            ImportRecord(package_id="Git.Git", update_only="yes")  # type: ignore[arg-type]

    def test_none_text_becomes_empty(self) -> None:
        """None in an optional text field is normalized to an empty string."""
        record = ImportRecord(package_id="Git.Git", group_id=None)  # type: ignore[arg-type]
        assert record.group_id == ""

    def test_to_row_uses_canonical_columns(self) -> None:
        """to_row emits every column in canonical order."""
        row = ImportRecord(package_id="Git.Git", update_only=True).to_row()

        assert tuple(row) == CSV_COLUMNS
        assert row["PackageID"] == "Git.Git"
        assert row["Context"] == "Machine"
        assert row["AcceptNewerVersion"] == "True"
        assert row["UpdateOnly"] == "True"

    def test_from_row_applies_defaults_for_missing_cells(self) -> None:
        """Missing or empty cells take defaults."""
        record = ImportRecord.from_row({"PackageID": "Git.Git", "Context": "", "UpdateOnly": ""})

        assert record == ImportRecord(package_id="Git.Git")

    def test_from_row_parses_values(self) -> None:
        """Row cells are converted to typed fields."""
        record = ImportRecord.from_row(
            {
                "PackageID": "Git.Git",
                "Context": "User",
                "AcceptNewerVersion": "false",
                "UpdateOnly": "1",
                "CustomArgumentListInstall": "--silent, --norestart",
            }
        )

        assert record.context is InstallContext.USER
        assert record.accept_newer_version is False
        assert record.update_only is True
        assert record.custom_argument_list_install == "--silent, --norestart"

    def test_from_row_requires_package_id(self) -> None:
        """A row without PackageID is rejected."""
        with pytest.raises(ValueError, match="PackageID"):
            ImportRecord.from_row({"Context": "Machine"})

    def test_from_row_rejects_bad_bool(self) -> None:
        """An unrecognized boolean cell is rejected."""
        with pytest.raises(ValueError, match="UpdateOnly: invalid boolean"):
            ImportRecord.from_row({"PackageID": "Git.Git", "UpdateOnly": "maybe"})


class TestParseBool:
    """Tests for parse_bool function."""

    @pytest.mark.parametrize("raw", ["True", "true", "1", "yes", " TRUE "])
    def test_true_values(self, raw: str) -> None:
        """Recognized true spellings parse to True."""
        assert parse_bool(raw, "Flag") is True

    @pytest.mark.parametrize("raw", ["False", "false", "0", "no"])
    def test_false_values(self, raw: str) -> None:
        """Recognized false spellings parse to False."""
        assert parse_bool(raw, "Flag") is False
