"""Fields command implementation.

Describes the columns of the import list.
"""

from typing import Annotated

import typer

from wintune.cli.types import get_config
from wintune.core.fields import (
    FIELD_DESCRIPTIONS,
    FieldHelpError,
    describe_field,
    fetch_document,
    find_description,
    resolve_column,
)
from wintune.models.import_record import CSV_COLUMNS
from wintune.utils.formatting import console, print_error, print_warning, styled_table


def describe_fields(
    name: Annotated[
        str | None,
        typer.Argument(help="Column to describe. Omit to list every column."),
    ] = None,
    remote: Annotated[
        bool,
        typer.Option(
            "--remote",
            "-r",
            help="Look the column up in the configured description document.",
        ),
    ] = False,
) -> None:
    """Describe the import list columns.

    Examples:
        wintune fields                    # All columns
        wintune fields InstallIntent      # One column
        wintune fields GroupID --remote   # From the configured document
    """
    if name is None:
        table = styled_table("Import List Columns", striped=False)
        table.add_column("Column", style="package_id", no_wrap=True)
        table.add_column("Description")
        for known in CSV_COLUMNS:
            table.add_row(known, FIELD_DESCRIPTIONS[known])
        console.print(table)
        return

    column = resolve_column(name)
    description = describe_field(name)
    if column is None or description is None:
        print_error(f"Unknown column '{name}'. Known columns: {', '.join(CSV_COLUMNS)}")
        raise typer.Exit(code=1)

    if remote:
        url = get_config().fields_doc_url
        if not url:
            print_warning("No description document configured (set fields_doc_url).")
        else:
            try:
                found = find_description(fetch_document(url), column)
            except FieldHelpError as e:
                print_warning(f"Description unavailable: {e}")
            else:
                if found:
                    description = found
                else:
                    print_warning(f"'{column}' is not described in {url}.")

    console.print(f"[package_id]{column}[/]: {description}", highlight=False)
