"""wintune command line.

Top-level Typer app: global flags, logging setup and command registration.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from wintune import __version__
from wintune.cli.commands import config, fields, importlist, launch, search, show
from wintune.utils.formatting import err_console

app = typer.Typer(
    name="wintune",
    help="Search winget and import packages into Intune.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wintune version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool = False) -> None:
    """Route library logging to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        quiet: Log only errors. Ignored when verbose is set.
    """
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Print the wintune version.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging, including winget calls."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only log errors."),
    ] = False,
) -> None:
    """wintune - Search winget and import packages into Intune.

    Build an import list from winget search results, tune the
    deployment settings of each package and hand the list to the
    Intune import script.
    """
    configure_logging(verbose, quiet)


app.command(name="search")(search.search_packages)
app.command(name="show")(show.show_package)
app.command(name="launch")(launch.launch_import)
app.command(name="fields")(fields.describe_fields)
app.add_typer(importlist.app, name="list")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
