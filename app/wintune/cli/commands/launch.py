"""Launch command implementation.

Hands the import list to the Intune import script and replays its log.
"""

from pathlib import Path
from typing import Annotated

import typer

from wintune.cli.types import get_config, load_import_list
from wintune.core.launcher import (
    ImportLauncher,
    ImportProcessError,
    LaunchError,
    MissingDependencyError,
)
from wintune.utils.formatting import console, print_error, print_info, print_success


def launch_import(
    tenant_id: Annotated[
        str | None,
        typer.Option("--tenant-id", "-t", help="Tenant domain (overrides config)."),
    ] = None,
    client_id: Annotated[
        str | None,
        typer.Option("--client-id", help="App registration client ID (overrides config)."),
    ] = None,
    redirect_uri: Annotated[
        str | None,
        typer.Option("--redirect-uri", help="App registration redirect URI (overrides config)."),
    ] = None,
    working_dir: Annotated[
        Path | None,
        typer.Option("--working-dir", "-w", help="Import working directory (overrides config)."),
    ] = None,
) -> None:
    """Import every package in the import list into Intune.

    Blocks until the import script finishes, then prints its log.

    Examples:
        wintune launch                                  # Use configured tenant
        wintune launch -t contoso.onmicrosoft.com       # Override the tenant
    """
    config = get_config()

    tenant_overrides = {
        "tenant_id": tenant_id,
        "client_id": client_id,
        "redirect_uri": redirect_uri,
    }
    tenant = config.tenant.model_copy(
        update={key: value for key, value in tenant_overrides.items() if value is not None}
    )
    launcher_config = config.launcher
    if working_dir is not None:
        launcher_config = launcher_config.model_copy(update={"working_dir": working_dir})

    store = load_import_list()
    if not len(store):
        print_info("The import list is empty. Add packages with 'wintune list add'.")
        raise typer.Exit(code=1)

    launcher = ImportLauncher(launcher_config)
    print_info(f"Importing {len(store)} package(s) into {tenant.tenant_id or '?'}...")

    def sink(line: str) -> None:
        console.print(line, markup=False, highlight=False)

    try:
        result = launcher.launch(store, tenant, sink=sink)
    except MissingDependencyError as e:
        print_error("Required files are missing from the working directory:")
        for path in e.missing:
            console.print(f"  [error]-[/] {path}", highlight=False)
        raise typer.Exit(code=1) from e
    except ImportProcessError as e:
        print_error(str(e))
        code = e.returncode
        # Signals and Windows NTSTATUS values are not valid shell exit codes
        raise typer.Exit(code=code if code is not None and 0 < code < 256 else 1) from e
    except LaunchError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if result.log_path is None:
        print_info("The import script wrote no log file.")
    print_success(f"Import finished for {len(store)} package(s).")
