"""CLI package for wintune.

This package contains the Typer application and all subcommands.
"""

from wintune.cli.main import app

__all__ = ["app"]
