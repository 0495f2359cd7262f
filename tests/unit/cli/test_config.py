"""Unit tests for the config command group."""

from typer.testing import CliRunner
from wintune.cli.main import app
from wintune.core.config import load_config
from wintune.core.paths import get_config_path

runner = CliRunner()


class TestConfigCommand:
    """Tests for wintune config commands."""

    def test_show_defaults(self) -> None:
        """show prints the default configuration as TOML."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert 'winget = "winget"' in result.output
        assert "[launcher]" in result.output

    def test_path(self) -> None:
        """path prints the config file location."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert "config.toml" in result.output

    def test_set_saves(self) -> None:
        """set writes the new value to the config file."""
        result = runner.invoke(
            app, ["config", "set", "tenant.tenant_id", "contoso.onmicrosoft.com"]
        )

        assert result.exit_code == 0
        assert load_config(get_config_path()).tenant.tenant_id == "contoso.onmicrosoft.com"

    def test_set_unknown_key(self) -> None:
        """Unknown keys are rejected and nothing is written."""
        result = runner.invoke(app, ["config", "set", "tenant.region", "eu"])

        assert result.exit_code == 1
        assert "Unknown config key" in result.output
        assert not get_config_path().exists()

    def test_invalid_config_file(self) -> None:
        """A broken config file is reported by commands that load it."""
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("winget = [\n", encoding="utf-8")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
