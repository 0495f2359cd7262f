"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from wintune.catalog.winget import WingetCatalog
from wintune.core.config import ConfigError, WintuneConfig, load_config_or_default
from wintune.core.paths import get_import_list_path
from wintune.core.store import ImportListError, ImportListStore
from wintune.models.import_record import InstallContext
from wintune.utils.formatting import print_error


class ContextChoice(str, Enum):
    """Install context options for CLI commands."""

    MACHINE = "machine"
    USER = "user"

    def to_context(self) -> InstallContext:
        """Convert to the model enum."""
        return InstallContext.parse(self.value)


def get_config() -> WintuneConfig:
    """Load the configuration, exiting with an error if it is invalid.

    Returns:
        Loaded or default configuration.
    """
    try:
        return load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_catalog(config: WintuneConfig) -> WingetCatalog:
    """Create the catalog adapter from configuration.

    Args:
        config: Loaded configuration.

    Returns:
        WingetCatalog for the configured executable.
    """
    return WingetCatalog(executable=config.winget, timeout=float(config.search_timeout))


def load_import_list(path: Path | None = None) -> ImportListStore:
    """Load the persisted working import list.

    A missing file yields an empty list.

    Args:
        path: List file. If None, uses the default state path.

    Returns:
        ImportListStore holding the persisted records.
    """
    list_path = path or get_import_list_path()
    store = ImportListStore()
    if not list_path.exists():
        return store
    try:
        store.load_csv(list_path)
    except ImportListError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return store


def save_import_list(store: ImportListStore, path: Path | None = None) -> None:
    """Persist the working import list.

    Args:
        store: The list to save.
        path: List file. If None, uses the default state path.
    """
    try:
        store.export_csv(path or get_import_list_path())
    except ImportListError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
