"""Show command implementation.

Prints catalog details or available versions of one package.
"""

from typing import Annotated

import typer

from wintune.catalog.winget import CatalogError
from wintune.cli.types import get_catalog, get_config
from wintune.utils.formatting import console, print_error, print_info, styled_table


def show_package(
    package_id: Annotated[str, typer.Argument(help="winget package ID.")],
    versions: Annotated[
        bool,
        typer.Option(
            "--versions",
            help="List available versions instead of details.",
        ),
    ] = False,
) -> None:
    """Show details of a catalog package.

    Examples:
        wintune show VideoLAN.VLC              # Package details
        wintune show VideoLAN.VLC --versions   # Available versions
    """
    catalog = get_catalog(get_config())

    try:
        if versions:
            available = catalog.versions(package_id)
        else:
            details = catalog.show(package_id)
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if versions:
        if not available:
            print_info(f"No versions found for '{package_id}'.")
            return
        table = styled_table(f"Versions of {package_id}", striped=False)
        table.add_column("Version", style="version")
        for version in available:
            table.add_row(version)
        console.print(table)
        return

    if not details:
        print_info(f"No package found with ID '{package_id}'.")
        return
    console.print(details.rstrip(), markup=False, highlight=False)
