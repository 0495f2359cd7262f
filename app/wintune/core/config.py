"""wintune configuration and settings.

This module provides the configuration models and I/O functions for the
catalog executable, the Intune tenant and the import launcher.

Configuration is stored in ~/.config/wintune/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wintune.core.paths import get_config_path, get_default_working_dir

logger = logging.getLogger(__name__)

DEFAULT_REDIRECT_URI = "https://login.microsoftonline.com/common/oauth2/nativeclient"
DEFAULT_IMPORT_SCRIPT = "Import-WingetToIntune.ps1"
DEFAULT_CONTENT_PREP_TOOL = "IntuneWinAppUtil.exe"


class TenantConfig(BaseModel):
    """Identifiers of the Intune tenant packages are imported into.

    Values are not validated here so a partial config can be saved;
    the launcher checks them before starting an import.

    Attributes:
        tenant_id: Tenant domain (e.g., 'contoso.onmicrosoft.com').
        client_id: App registration client ID used for sign-in.
        redirect_uri: Redirect URI of the app registration.
    """

    model_config = ConfigDict(extra="forbid")

    tenant_id: Annotated[str, Field(description="Tenant domain")] = ""
    client_id: Annotated[str, Field(description="App registration client ID")] = ""
    redirect_uri: Annotated[
        str,
        Field(description="App registration redirect URI"),
    ] = DEFAULT_REDIRECT_URI


class LauncherConfig(BaseModel):
    """Settings for running the external import process.

    Attributes:
        shell: PowerShell executable that runs the import script.
        working_dir: Directory holding the script, its tools and Logs/.
        import_script: Import script file name inside working_dir.
        required_files: Files that must exist in working_dir before launch.
        log_prefix: File name prefix of the import script's log files.
        csv_prefix: File name prefix of the temporary import CSV.
    """

    model_config = ConfigDict(extra="forbid")

    shell: Annotated[str, Field(description="PowerShell executable")] = "pwsh"
    working_dir: Path = Field(
        default_factory=get_default_working_dir,
        description="Import working directory",
    )
    import_script: Annotated[str, Field(description="Import script name")] = DEFAULT_IMPORT_SCRIPT
    required_files: list[str] = Field(
        default_factory=lambda: [DEFAULT_IMPORT_SCRIPT, DEFAULT_CONTENT_PREP_TOOL],
        description="Files required in the working directory",
    )
    log_prefix: Annotated[str, Field(min_length=1)] = "WingetIntuneImport"
    csv_prefix: Annotated[str, Field(min_length=1)] = "ImportList"

    @property
    def script_path(self) -> Path:
        """Full path of the import script."""
        return self.working_dir / self.import_script

    @property
    def logs_dir(self) -> Path:
        """Directory the import script writes its logs to."""
        return self.working_dir / "Logs"


class WintuneConfig(BaseModel):
    """Top-level wintune configuration.

    Attributes:
        winget: winget executable name or path.
        search_timeout: Seconds to wait for each winget call.
        fields_doc_url: Optional URL of a document describing import columns.
        tenant: Intune tenant identifiers.
        launcher: Import process settings.
    """

    model_config = ConfigDict(extra="forbid")

    winget: Annotated[str, Field(description="winget executable")] = "winget"
    search_timeout: Annotated[
        int,
        Field(ge=5, le=600, description="Timeout in seconds (5-600)"),
    ] = 120
    fields_doc_url: Annotated[
        str | None,
        Field(description="Column description document URL"),
    ] = None
    tenant: TenantConfig = Field(default_factory=TenantConfig)
    launcher: LauncherConfig = Field(default_factory=LauncherConfig)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> WintuneConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated WintuneConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return WintuneConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> WintuneConfig:
    """Load configuration, falling back to defaults if no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded or default WintuneConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return WintuneConfig()


def save_config(config: WintuneConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The WintuneConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: WintuneConfig) -> dict[str, Any]:
    """Convert WintuneConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.
    """
    return config.model_dump(mode="json", exclude_none=True)


def set_config_value(config: WintuneConfig, key: str, value: str) -> WintuneConfig:
    """Return a copy of the config with one dotted key changed.

    Args:
        config: Current configuration.
        key: Dotted key (e.g., 'tenant.tenant_id', 'launcher.shell').
        value: New value as text; list values are comma-separated.

    Returns:
        Validated WintuneConfig with the change applied.

    Raises:
        ConfigError: If the key is unknown or the value is invalid.
    """
    data = config.model_dump(mode="json")
    parts = key.split(".")

    target: dict[str, Any] = data
    for part in parts[:-1]:
        child = target.get(part)
        if not isinstance(child, dict):
            raise ConfigError(f"Unknown config key: {key}")
        target = child

    leaf = parts[-1]
    if leaf not in target or isinstance(target[leaf], dict):
        raise ConfigError(f"Unknown config key: {key}")

    if isinstance(target[leaf], list):
        target[leaf] = [item.strip() for item in value.split(",") if item.strip()]
    else:
        target[leaf] = value

    try:
        return WintuneConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid value for {key}: {e}") from e
