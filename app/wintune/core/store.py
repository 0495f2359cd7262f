"""Import list storage.

This module provides the ImportListStore class, the ordered collection
of import records that the CLI curates and the launcher exports.
"""

from __future__ import annotations

import csv
import logging
import os
import threading
from collections import Counter
from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import TYPE_CHECKING, Any

from wintune.models.import_record import CSV_COLUMNS, ImportRecord

if TYPE_CHECKING:
    from wintune.models.package import SearchResult

logger = logging.getLogger(__name__)


class ImportListError(Exception):
    """Base exception for import list errors."""


class ImportListLoadError(ImportListError):
    """Raised when an import list CSV cannot be loaded."""


class ImportListExportError(ImportListError):
    """Raised when an import list CSV cannot be written."""


class ImportListStore:
    """Ordered collection of import records keyed by package ID.

    Interactive insertion keeps package IDs unique: adding a record whose
    ID is already present is a no-op. Bulk loading from CSV replaces the
    whole list and keeps duplicate IDs (a warning is logged).

    Mutations and snapshots are serialized by an internal lock, so an
    export taken during a launch sees a stable list.
    """

    def __init__(self, records: list[ImportRecord] | None = None) -> None:
        """Initialize ImportListStore.

        Args:
            records: Initial records, taken in order without dedup.
        """
        self._lock = threading.RLock()
        self._records: list[ImportRecord] = list(records or [])

    @property
    def records(self) -> tuple[ImportRecord, ...]:
        """Snapshot of the current records in insertion order."""
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[ImportRecord]:
        return iter(self.records)

    def __contains__(self, package_id: object) -> bool:
        with self._lock:
            return any(r.package_id == package_id for r in self._records)

    def get(self, package_id: str) -> ImportRecord | None:
        """Find the first record with the given package ID.

        Args:
            package_id: Catalog identifier.

        Returns:
            Matching record, or None if absent.
        """
        with self._lock:
            for record in self._records:
                if record.package_id == package_id:
                    return record
        return None

    def add(self, record: ImportRecord) -> bool:
        """Append a record unless its package ID is already present.

        Args:
            record: The record to add.

        Returns:
            True if added, False if the ID already existed.
        """
        with self._lock:
            if record.package_id in self:
                logger.warning("Package %s is already in the import list", record.package_id)
                return False
            self._records.append(record)
            return True

    def add_search_result(self, result: SearchResult) -> ImportRecord | None:
        """Move a search result into the list with default settings.

        Args:
            result: Catalog search row.

        Returns:
            The new record, or None if the ID was already present.
        """
        record = ImportRecord.from_search_result(result)
        return record if self.add(record) else None

    def remove(self, record: ImportRecord) -> bool:
        """Remove a specific record by identity.

        Args:
            record: The record object to remove.

        Returns:
            True if removed, False if it was not in the list.
        """
        with self._lock:
            for index, existing in enumerate(self._records):
                if existing is record:
                    del self._records[index]
                    return True
        return False

    def remove_package(self, package_id: str) -> int:
        """Remove every record with the given package ID.

        Args:
            package_id: Catalog identifier.

        Returns:
            Number of records removed.
        """
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if r.package_id != package_id]
            return before - len(self._records)

    def update(self, package_id: str, /, **changes: Any) -> ImportRecord:
        """Edit deployment settings of a record in place.

        The edited record keeps its position. Changing the package ID to
        one that is already present is rejected.

        Args:
            package_id: Catalog identifier of the record to edit.
            **changes: ImportRecord attribute names and new values,
                including package_id to rename the record.

        Returns:
            The updated record.

        Raises:
            ImportListError: If the ID is absent, the new ID collides, or
                a value is invalid.
        """
        with self._lock:
            for index, existing in enumerate(self._records):
                if existing.package_id != package_id:
                    continue
                try:
                    updated = replace(existing, **changes)
                except (TypeError, ValueError) as e:
                    msg = f"Invalid settings for {package_id}: {e}"
                    raise ImportListError(msg) from e
                if updated.package_id != package_id and updated.package_id in self:
                    msg = f"Package {updated.package_id} is already in the import list"
                    raise ImportListError(msg)
                self._records[index] = updated
                return updated

        msg = f"Package {package_id} is not in the import list"
        raise ImportListError(msg)

    def clear(self) -> None:
        """Remove all records."""
        with self._lock:
            self._records = []

    def load_csv(self, path: Path) -> int:
        """Replace the list with the records of a CSV file.

        The file is parsed completely before the list is touched; any
        failure leaves the current records unchanged.

        Args:
            path: CSV file with a header row of import column names.

        Returns:
            Number of records loaded.

        Raises:
            ImportListLoadError: If the file cannot be read or parsed.
        """
        records = read_import_csv(path)

        counts = Counter(r.package_id for r in records)
        duplicates = sorted(pid for pid, n in counts.items() if n > 1)
        if duplicates:
            logger.warning(
                "Import list %s contains duplicate package IDs: %s",
                path,
                ", ".join(duplicates),
            )

        with self._lock:
            self._records = records
        logger.debug("Loaded %d record(s) from %s", len(records), path)
        return len(records)

    def export_csv(self, path: Path) -> Path:
        """Write every record to a CSV file, replacing it if present.

        Args:
            path: Target CSV path.

        Returns:
            Path where the list was written.

        Raises:
            ImportListExportError: If the file cannot be written.
        """
        write_import_csv(self.records, path)
        return path


def read_import_csv(path: Path) -> list[ImportRecord]:
    """Read import records from a CSV file.

    Args:
        path: CSV file to read.

    Returns:
        Records in file order.

    Raises:
        ImportListLoadError: If the file is unreadable, malformed, lacks a
            PackageID column or holds an invalid row.
    """
    records: list[ImportRecord] = []
    try:
        # utf-8-sig: PowerShell's Export-Csv writes a BOM
        with path.open(encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f, strict=True)
            header = reader.fieldnames or []
            if "PackageID" not in header:
                msg = f"{path}: missing required 'PackageID' column"
                raise ImportListLoadError(msg)

            unknown = [column for column in header if column not in CSV_COLUMNS]
            if unknown:
                logger.debug("Ignoring unknown columns in %s: %s", path, ", ".join(unknown))

            for row in reader:
                try:
                    records.append(ImportRecord.from_row(row))
                except ValueError as e:
                    msg = f"{path}, line {reader.line_num}: {e}"
                    raise ImportListLoadError(msg) from e
    except csv.Error as e:
        msg = f"Malformed CSV in {path}: {e}"
        raise ImportListLoadError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"{path} is not valid UTF-8: {e}"
        raise ImportListLoadError(msg) from e
    except OSError as e:
        msg = f"Failed to read import list {path}: {e}"
        raise ImportListLoadError(msg) from e

    return records


def write_import_csv(records: tuple[ImportRecord, ...] | list[ImportRecord], path: Path) -> None:
    """Write import records to a CSV file atomically.

    All cells are quoted so script paths and argument lists containing
    commas or quotes survive a round trip.

    Args:
        records: Records to write, in order.
        path: Target CSV path.

    Raises:
        ImportListExportError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS, quoting=csv.QUOTE_ALL)
            writer.writeheader()
            for record in records:
                writer.writerow(record.to_row())
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        msg = f"Failed to write import list {path}: {e}"
        raise ImportListExportError(msg) from e
