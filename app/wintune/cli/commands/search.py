"""Search command implementation.

Searches the winget catalog and optionally moves the results into the
import list.
"""

import json
from typing import Annotated

import typer

from wintune.catalog.winget import CatalogError
from wintune.cli.types import get_catalog, get_config, load_import_list, save_import_list
from wintune.utils.formatting import (
    console,
    create_search_table,
    format_search_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def search_packages(
    query: Annotated[str, typer.Argument(help="Text to search the catalog for.")],
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of results to display.",
        ),
    ] = None,
    add: Annotated[
        bool,
        typer.Option(
            "--add",
            "-a",
            help="Add the displayed results to the import list.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Search the winget catalog.

    Examples:
        wintune search vlc                  # Show matching packages
        wintune search "visual studio" -n 5 # First 5 matches
        wintune search 7zip --add           # Add all matches to the import list
        wintune search git --json           # JSON output for scripting
    """
    config = get_config()
    catalog = get_catalog(config)

    try:
        results = catalog.search(query)
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not results:
        print_info(f"No packages found matching '{query}'.")
        return

    shown = results[:limit] if limit else results

    if json_output:
        console.print_json(
            json.dumps(
                [
                    {"name": r.name, "id": r.package_id, "version": r.version}
                    for r in shown
                ]
            )
        )
    else:
        table = create_search_table(f"Search Results for '{query}'")
        for result in shown:
            table.add_row(*format_search_row(result))
        console.print(table)
        console.print(f"\n[dim]Showing {len(shown)} of {len(results)} result(s)[/]")

    if not add:
        return

    store = load_import_list()
    added = 0
    for result in shown:
        if result.package_id in store:
            print_warning(f"{result.package_id} is already in the import list.")
            continue
        store.add_search_result(result)
        added += 1
    save_import_list(store)
    print_success(f"Added {added} package(s) to the import list ({len(store)} total).")
