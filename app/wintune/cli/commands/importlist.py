"""Import list commands.

This module provides the `wintune list` command group for curating the
working import list: adding and removing packages, editing deployment
settings and importing/exporting the list as CSV.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from wintune.catalog.winget import CatalogError
from wintune.cli.types import (
    ContextChoice,
    get_catalog,
    get_config,
    load_import_list,
    save_import_list,
)
from wintune.core.store import ImportListError
from wintune.models.import_record import IMPORT_FIELDS, ImportRecord
from wintune.utils.formatting import (
    console,
    create_import_list_table,
    format_import_row,
    print_error,
    print_info,
    print_success,
    print_warning,
    styled_table,
)

app = typer.Typer(
    name="list",
    help="Curate the import list.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_packages(ctx: typer.Context) -> None:
    """Show the import list.

    Examples:
        wintune list                         # Show the import list
        wintune list add VideoLAN.VLC        # Add a package
        wintune list set VideoLAN.VLC --context user
        wintune list export packages.csv     # Save the list as CSV
    """
    if ctx.invoked_subcommand is not None:
        return

    store = load_import_list()
    if not len(store):
        print_info("The import list is empty.")
        return

    table = create_import_list_table()
    for index, record in enumerate(store, start=1):
        table.add_row(*format_import_row(index, record))
    console.print(table)
    console.print(f"\n[dim]{len(store)} package(s)[/]")


@app.command("info")
def info(
    package_id: Annotated[str, typer.Argument(help="Package ID in the import list.")],
) -> None:
    """Show every setting of one package."""
    store = load_import_list()
    record = store.get(package_id)
    if record is None:
        print_error(f"{package_id} is not in the import list.")
        raise typer.Exit(code=1)

    table = styled_table(package_id, striped=False)
    table.add_column("Field", style="muted")
    table.add_column("Value")
    for column, value in record.to_row().items():
        table.add_row(column, escape(value))
    console.print(table)


@app.command("add")
def add(
    package_ids: Annotated[list[str], typer.Argument(help="winget package IDs to add.")],
    skip_check: Annotated[
        bool,
        typer.Option(
            "--skip-check",
            help="Add without confirming the IDs exist in the catalog.",
        ),
    ] = False,
) -> None:
    """Add packages to the import list with default settings.

    Each ID is looked up in the catalog first unless --skip-check is given.
    """
    store = load_import_list()
    catalog = None if skip_check else get_catalog(get_config())

    added = 0
    for package_id in package_ids:
        if catalog is None:
            try:
                record = ImportRecord(package_id=package_id)
            except ValueError as e:
                print_warning(f"Skipping '{package_id}': {e}")
                continue
        else:
            try:
                results = catalog.search(package_id)
            except CatalogError as e:
                print_error(str(e))
                raise typer.Exit(code=1) from e
            match = next(
                (r for r in results if r.package_id.lower() == package_id.lower()),
                None,
            )
            if match is None:
                print_warning(f"{package_id} was not found in the catalog.")
                continue
            record = ImportRecord.from_search_result(match)

        if record.package_id in store:
            print_warning(f"{record.package_id} is already in the import list.")
            continue
        store.add(record)
        added += 1

    save_import_list(store)
    print_success(f"Added {added} package(s) to the import list ({len(store)} total).")


@app.command("remove")
def remove(
    package_ids: Annotated[list[str], typer.Argument(help="Package IDs to remove.")],
) -> None:
    """Remove packages from the import list."""
    store = load_import_list()
    removed = 0
    for package_id in package_ids:
        count = store.remove_package(package_id)
        if not count:
            print_warning(f"{package_id} is not in the import list.")
        removed += count
    save_import_list(store)
    print_success(f"Removed {removed} package(s) ({len(store)} left).")


@app.command("set")
def set_fields(
    package_id: Annotated[str, typer.Argument(help="Package ID in the import list.")],
    context: Annotated[
        ContextChoice | None,
        typer.Option("--context", "-c", help="Install context.", case_sensitive=False),
    ] = None,
    accept_newer: Annotated[
        bool | None,
        typer.Option("--accept-newer/--no-accept-newer", help="Accept newer installed versions."),
    ] = None,
    update_only: Annotated[
        bool | None,
        typer.Option("--update-only/--no-update-only", help="Only update existing installs."),
    ] = None,
    version: Annotated[
        str | None,
        typer.Option("--version", help="Target version (empty for latest)."),
    ] = None,
    stop_process_install: Annotated[str | None, typer.Option(help="Process to stop.")] = None,
    stop_process_uninstall: Annotated[str | None, typer.Option(help="Process to stop.")] = None,
    pre_script_install: Annotated[str | None, typer.Option(help="Script path.")] = None,
    post_script_install: Annotated[str | None, typer.Option(help="Script path.")] = None,
    pre_script_uninstall: Annotated[str | None, typer.Option(help="Script path.")] = None,
    post_script_uninstall: Annotated[str | None, typer.Option(help="Script path.")] = None,
    args_install: Annotated[
        str | None,
        typer.Option("--args-install", help="Custom install arguments."),
    ] = None,
    args_uninstall: Annotated[
        str | None,
        typer.Option("--args-uninstall", help="Custom uninstall arguments."),
    ] = None,
    intent: Annotated[
        str | None,
        typer.Option("--intent", help="Install intent (required, available, uninstall)."),
    ] = None,
    notification: Annotated[
        str | None,
        typer.Option("--notification", help="Notification (showAll, showReboot, hideAll)."),
    ] = None,
    group_id: Annotated[str | None, typer.Option("--group-id", help="Target group ID.")] = None,
) -> None:
    """Edit the deployment settings of a package.

    Only the given options change; pass an empty string to clear a field.

    Examples:
        wintune list set VideoLAN.VLC --context user --no-accept-newer
        wintune list set Git.Git --intent required --group-id 1234-abcd
    """
    changes = {
        "accept_newer_version": accept_newer,
        "update_only": update_only,
        "target_version": version,
        "stop_process_install": stop_process_install,
        "stop_process_uninstall": stop_process_uninstall,
        "pre_script_install": pre_script_install,
        "post_script_install": post_script_install,
        "pre_script_uninstall": pre_script_uninstall,
        "post_script_uninstall": post_script_uninstall,
        "custom_argument_list_install": args_install,
        "custom_argument_list_uninstall": args_uninstall,
        "install_intent": intent,
        "notification": notification,
        "group_id": group_id,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    if context is not None:
        changes["context"] = context.to_context()

    if not changes:
        print_info("Nothing to change.")
        return

    store = load_import_list()
    try:
        store.update(package_id, **changes)
    except ImportListError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    save_import_list(store)

    columns = {attr: column for column, attr in IMPORT_FIELDS}
    print_success(f"Updated {package_id}: {', '.join(columns[key] for key in changes)}")


@app.command("clear")
def clear(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation.")] = False,
) -> None:
    """Remove every package from the import list."""
    store = load_import_list()
    if not len(store):
        print_info("The import list is already empty.")
        return
    if not yes:
        typer.confirm(f"Remove all {len(store)} package(s)?", abort=True)
    store.clear()
    save_import_list(store)
    print_success("Import list cleared.")


@app.command("import")
def import_csv(
    path: Annotated[Path, typer.Argument(help="CSV file to load.")],
) -> None:
    """Replace the import list with the contents of a CSV file.

    The current list is kept if the file cannot be loaded.
    """
    store = load_import_list()
    try:
        count = store.load_csv(path)
    except ImportListError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    save_import_list(store)
    print_success(f"Loaded {count} package(s) from {path}.")


@app.command("export")
def export_csv(
    path: Annotated[Path, typer.Argument(help="CSV file to write.")],
) -> None:
    """Write the import list to a CSV file, replacing it if present."""
    path = path.resolve()
    if path.is_dir():
        print_error(f"Export path is a directory: {path}")
        raise typer.Exit(code=1)

    store = load_import_list()
    try:
        store.export_csv(path)
    except ImportListError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Exported {len(store)} package(s) to {path}.")
