"""Catalog access for wintune.

This module exports the winget query adapter and output parsers.
"""

from wintune.catalog.parser import (
    NO_RESULTS_SENTINEL,
    parse_search_output,
    parse_versions_output,
)
from wintune.catalog.winget import CatalogError, WingetCatalog

__all__ = [
    "NO_RESULTS_SENTINEL",
    "CatalogError",
    "WingetCatalog",
    "parse_search_output",
    "parse_versions_output",
]
