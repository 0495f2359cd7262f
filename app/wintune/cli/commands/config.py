"""Config command for viewing and editing settings.

This module provides the `wintune config` command group.
"""

from typing import Annotated

import tomli_w
import typer

from wintune.core.config import (
    ConfigError,
    config_to_dict,
    load_config_or_default,
    save_config,
    set_config_value,
)
from wintune.core.paths import get_config_path
from wintune.utils.formatting import console, print_error, print_success

app = typer.Typer(
    name="config",
    help="View and edit wintune settings.",
    no_args_is_help=True,
)


@app.command("show")
def show() -> None:
    """Print the effective configuration as TOML."""
    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    console.print(tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False)


@app.command("path")
def path() -> None:
    """Print the configuration file path."""
    console.print(str(get_config_path()), markup=False, highlight=False)


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Dotted key, e.g. tenant.tenant_id.")],
    value: Annotated[str, typer.Argument(help="New value; lists are comma-separated.")],
) -> None:
    """Change one setting and save the configuration.

    Examples:
        wintune config set tenant.tenant_id contoso.onmicrosoft.com
        wintune config set launcher.working_dir /srv/intune-import
        wintune config set launcher.required_files "Import.ps1,IntuneWinAppUtil.exe"
    """
    try:
        config = set_config_value(load_config_or_default(), key, value)
        saved = save_config(config)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Set {key} in {saved}")
