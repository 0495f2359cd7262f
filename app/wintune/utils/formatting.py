"""Rich output for the wintune CLI.

Results and tables go to stdout; warnings, errors and log records go
to stderr so piped output stays clean.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wintune.core.theme import get_theme

if TYPE_CHECKING:
    from wintune.models.import_record import ImportRecord
    from wintune.models.package import SearchResult

# Hex theme colors need truecolor; leave detection to Rich when piped
_COLOR_SYSTEM = "truecolor" if sys.stdout.isatty() else None

console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM)
err_console = Console(theme=get_theme(), stderr=True, color_system=_COLOR_SYSTEM)


def styled_table(title: str, *, striped: bool = True) -> Table:
    """Create an empty table in the CLI's house style.

    Args:
        title: Table title.
        striped: Alternate row backgrounds.
    """
    return Table(
        title=title,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"] if striped else None,
    )


def create_search_table(title: str = "Search Results") -> Table:
    """Create the table for catalog search results."""
    table = styled_table(title)
    table.add_column("Name", style="text")
    table.add_column("ID", no_wrap=True)
    table.add_column("Version")
    return table


def format_search_row(result: SearchResult) -> tuple[str, str, str]:
    """Format a search result as (name, id, version) cells."""
    return (
        escape(result.name),
        f"[package_id]{escape(result.package_id)}[/]",
        f"[version]{escape(result.version)}[/]",
    )


def create_import_list_table(title: str = "Import List") -> Table:
    """Create the table for the working import list.

    Only the commonly edited columns are shown; `wintune list info ID`
    prints every field of one record.
    """
    table = styled_table(title)
    table.add_column("#", style="muted", justify="right")
    table.add_column("Package ID", no_wrap=True)
    table.add_column("Context")
    table.add_column("Newer", justify="center")
    table.add_column("Update only", justify="center")
    table.add_column("Version", style="muted")
    table.add_column("Intent")
    table.add_column("Group", style="muted", overflow="ellipsis")
    return table


def _flag(value: bool) -> str:
    return "[flag_on]✓[/]" if value else "[flag_off]-[/]"


def format_import_row(index: int, record: ImportRecord) -> tuple[str, ...]:
    """Format an import record as table cells.

    Args:
        index: 1-based position in the list.
        record: The record to format.

    Returns:
        One cell per column of create_import_list_table, with Rich markup.
    """
    return (
        str(index),
        f"[package_id]{escape(record.package_id)}[/]",
        record.context.value,
        _flag(record.accept_newer_version),
        _flag(record.update_only),
        escape(record.target_version) or "latest",
        escape(record.install_intent) or "-",
        escape(record.group_id) or "-",
    )


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/] {message}")
