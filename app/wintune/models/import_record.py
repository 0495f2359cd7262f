"""Import record model.

An import record describes one catalog package plus the deployment
settings the Intune import applies to it. Records are serialized to CSV
using the column names in IMPORT_FIELDS, in that order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wintune.models.package import SearchResult


class InstallContext(str, Enum):
    """Install scope of a deployed package."""

    MACHINE = "Machine"
    USER = "User"

    @classmethod
    def parse(cls, value: str | InstallContext) -> InstallContext:
        """Parse a context name case-insensitively.

        Args:
            value: Context name or InstallContext.

        Returns:
            Matching InstallContext.

        Raises:
            ValueError: If the value names no known context.
        """
        if isinstance(value, InstallContext):
            return value
        normalized = value.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        msg = f"Invalid context '{value}' (expected Machine or User)"
        raise ValueError(msg)


# CSV column name -> attribute name, in canonical column order
IMPORT_FIELDS: tuple[tuple[str, str], ...] = (
    ("PackageID", "package_id"),
    ("Context", "context"),
    ("AcceptNewerVersion", "accept_newer_version"),
    ("UpdateOnly", "update_only"),
    ("TargetVersion", "target_version"),
    ("StopProcessInstall", "stop_process_install"),
    ("StopProcessUninstall", "stop_process_uninstall"),
    ("PreScriptInstall", "pre_script_install"),
    ("PostScriptInstall", "post_script_install"),
    ("PreScriptUninstall", "pre_script_uninstall"),
    ("PostScriptUninstall", "post_script_uninstall"),
    ("CustomArgumentListInstall", "custom_argument_list_install"),
    ("CustomArgumentListUninstall", "custom_argument_list_uninstall"),
    ("InstallIntent", "install_intent"),
    ("Notification", "notification"),
    ("GroupID", "group_id"),
)

CSV_COLUMNS: tuple[str, ...] = tuple(column for column, _ in IMPORT_FIELDS)

_BOOL_ATTRS = frozenset({"accept_newer_version", "update_only"})
_TRUE_VALUES = frozenset({"true", "1", "yes", "y"})
_FALSE_VALUES = frozenset({"false", "0", "no", "n"})


def parse_bool(value: str, column: str) -> bool:
    """Parse a CSV boolean cell.

    Args:
        value: Raw cell text ('True', 'false', '1', ...).
        column: Column name for error messages.

    Returns:
        Parsed boolean.

    Raises:
        ValueError: If the text is not a recognized boolean.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    msg = f"{column}: invalid boolean '{value}'"
    raise ValueError(msg)


@dataclass(slots=True)
class ImportRecord:
    """One package in the import list with its deployment settings.

    Attributes:
        package_id: Catalog identifier, unique within an import list
        context: Install scope (Machine or User)
        accept_newer_version: Let the deployment accept newer installed versions
        update_only: Only update devices that already have the package
        target_version: Pinned version; empty means latest
        stop_process_install: Process to stop before installing
        stop_process_uninstall: Process to stop before uninstalling
        pre_script_install: Script path run before install
        post_script_install: Script path run after install
        pre_script_uninstall: Script path run before uninstall
        post_script_uninstall: Script path run after uninstall
        custom_argument_list_install: Extra installer arguments
        custom_argument_list_uninstall: Extra uninstaller arguments
        install_intent: Assignment intent (e.g., 'required', 'available')
        notification: End-user notification mode (e.g., 'showAll')
        group_id: Entra ID group the assignment targets
    """

    package_id: str
    context: InstallContext = InstallContext.MACHINE
    accept_newer_version: bool = True
    update_only: bool = False
    target_version: str = field(default="")
    stop_process_install: str = field(default="")
    stop_process_uninstall: str = field(default="")
    pre_script_install: str = field(default="")
    post_script_install: str = field(default="")
    pre_script_uninstall: str = field(default="")
    post_script_uninstall: str = field(default="")
    custom_argument_list_install: str = field(default="")
    custom_argument_list_uninstall: str = field(default="")
    install_intent: str = field(default="")
    notification: str = field(default="")
    group_id: str = field(default="")

    def __post_init__(self) -> None:
        """Validate and normalize record data after initialization."""
        if not isinstance(self.package_id, str) or not self.package_id.strip():
            msg = "PackageID cannot be empty"
            raise ValueError(msg)
        self.package_id = self.package_id.strip()
        self.context = InstallContext.parse(self.context)

        for attr in _BOOL_ATTRS:
            if not isinstance(getattr(self, attr), bool):
                msg = f"{attr} must be a bool, got {getattr(self, attr)!r}"
                raise ValueError(msg)

        for f in fields(self):
            if f.name in _BOOL_ATTRS or f.name in ("package_id", "context"):
                continue
            value = getattr(self, f.name)
            if value is None:
                setattr(self, f.name, "")
            elif not isinstance(value, str):
                msg = f"{f.name} must be a string, got {value!r}"
                raise ValueError(msg)

    @classmethod
    def from_search_result(cls, result: SearchResult) -> ImportRecord:
        """Create a record with default deployment settings.

        Args:
            result: The catalog search row to import.

        Returns:
            ImportRecord for the result's package ID.
        """
        return cls(package_id=result.package_id)

    def to_row(self) -> dict[str, str]:
        """Convert to a CSV row keyed by column name."""
        row: dict[str, str] = {}
        for column, attr in IMPORT_FIELDS:
            value: Any = getattr(self, attr)
            if isinstance(value, bool):
                row[column] = "True" if value else "False"
            elif isinstance(value, InstallContext):
                row[column] = value.value
            else:
                row[column] = value
        return row

    @classmethod
    def from_row(cls, row: Mapping[str, str | None]) -> ImportRecord:
        """Create a record from a CSV row keyed by column name.

        Missing or empty optional cells take their defaults.

        Args:
            row: Mapping of column name to cell text.

        Returns:
            Parsed ImportRecord.

        Raises:
            ValueError: If PackageID is empty or a cell value is invalid.
        """
        kwargs: dict[str, Any] = {}
        for column, attr in IMPORT_FIELDS:
            raw = row.get(column)
            if raw is None:
                continue
            if attr in _BOOL_ATTRS:
                if raw.strip():
                    kwargs[attr] = parse_bool(raw, column)
            elif attr == "context":
                if raw.strip():
                    kwargs[attr] = InstallContext.parse(raw)
            else:
                kwargs[attr] = raw
        if "package_id" not in kwargs:
            msg = "PackageID cannot be empty"
            raise ValueError(msg)
        return cls(**kwargs)
