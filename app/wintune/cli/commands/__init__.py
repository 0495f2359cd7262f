"""CLI commands for wintune.

This package contains all subcommand implementations.
"""

from wintune.cli.commands import config, fields, importlist, launch, search, show

__all__ = ["config", "fields", "importlist", "launch", "search", "show"]
