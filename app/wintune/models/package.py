"""Catalog package models.

This module defines the record produced by a catalog search.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A single row of catalog search output.

    Search results are transient: a new search replaces them entirely.

    Attributes:
        name: Display name (e.g., 'VLC media player')
        package_id: Catalog identifier (e.g., 'VideoLAN.VLC')
        version: Latest available version string
    """

    name: str
    package_id: str
    version: str

    def __post_init__(self) -> None:
        """Validate search result data after initialization."""
        if not self.name.strip():
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if not self.package_id.strip():
            msg = "Package ID cannot be empty"
            raise ValueError(msg)
