"""Unit tests for the fields command."""

from unittest.mock import patch

from typer.testing import CliRunner
from wintune.cli.main import app
from wintune.core.config import WintuneConfig, save_config
from wintune.core.fields import FieldHelpError

runner = CliRunner()

DOC_URL = "https://example.org/fields.md"


class TestFieldsCommand:
    """Tests for wintune fields command."""

    def test_lists_columns(self) -> None:
        """Without a name every column is listed."""
        result = runner.invoke(app, ["fields"])

        assert result.exit_code == 0
        assert "PackageID" in result.output
        assert "GroupID" in result.output

    def test_describes_column(self) -> None:
        """A column name prints its built-in description."""
        result = runner.invoke(app, ["fields", "updateonly"])

        assert result.exit_code == 0
        assert "UpdateOnly:" in result.output

    def test_unknown_column(self) -> None:
        """An unknown column exits with code 1."""
        result = runner.invoke(app, ["fields", "Publisher"])

        assert result.exit_code == 1
        assert "Unknown column" in result.output

    def test_remote_without_url(self) -> None:
        """--remote without a configured URL falls back with a warning."""
        result = runner.invoke(app, ["fields", "GroupID", "--remote"])

        assert result.exit_code == 0
        assert "No description document configured" in result.output
        assert "GroupID:" in result.output

    def test_remote_description(self) -> None:
        """--remote uses the matching line of the fetched document."""
        save_config(WintuneConfig(fields_doc_url=DOC_URL))
        document = "| GroupID | Entra group to assign |\n"
        with patch("wintune.cli.commands.fields.fetch_document", return_value=document) as fetch:
            result = runner.invoke(app, ["fields", "GroupID", "--remote"])

        assert result.exit_code == 0
        assert "Entra group to assign" in result.output
        fetch.assert_called_once_with(DOC_URL)

    def test_remote_failure_is_not_fatal(self) -> None:
        """A failed fetch warns and prints the built-in description."""
        save_config(WintuneConfig(fields_doc_url=DOC_URL))
        with patch(
            "wintune.cli.commands.fields.fetch_document",
            side_effect=FieldHelpError("Could not fetch"),
        ):
            result = runner.invoke(app, ["fields", "GroupID", "--remote"])

        assert result.exit_code == 0
        assert "Description unavailable" in result.output
        assert "GroupID:" in result.output
