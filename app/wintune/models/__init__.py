"""Data models for wintune.

This module exports the core data structures used throughout the application.
"""

from wintune.models.import_record import (
    CSV_COLUMNS,
    IMPORT_FIELDS,
    ImportRecord,
    InstallContext,
)
from wintune.models.package import SearchResult

__all__ = [
    "CSV_COLUMNS",
    "IMPORT_FIELDS",
    "ImportRecord",
    "InstallContext",
    "SearchResult",
]
