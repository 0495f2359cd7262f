"""Import column help.

Every import list column has a built-in one-line description. When a
description document URL is configured, the document is fetched and
searched for the column name instead; a failed fetch is reported and
never fatal.
"""

import logging
import re

import requests

from wintune.models.import_record import CSV_COLUMNS

logger = logging.getLogger(__name__)

FIELD_DESCRIPTIONS: dict[str, str] = {
    "PackageID": "winget package identifier, e.g. VideoLAN.VLC.",
    "Context": "Install scope of the Win32 app: Machine or User.",
    "AcceptNewerVersion": "Detection also succeeds when a newer version is installed.",
    "UpdateOnly": "Only update devices that already have the package installed.",
    "TargetVersion": "Package version to deploy. Empty deploys the latest version.",
    "StopProcessInstall": "Process name stopped before the install runs.",
    "StopProcessUninstall": "Process name stopped before the uninstall runs.",
    "PreScriptInstall": "Path of a script run before the install.",
    "PostScriptInstall": "Path of a script run after the install.",
    "PreScriptUninstall": "Path of a script run before the uninstall.",
    "PostScriptUninstall": "Path of a script run after the uninstall.",
    "CustomArgumentListInstall": "Extra arguments passed to the winget install call.",
    "CustomArgumentListUninstall": "Extra arguments passed to the winget uninstall call.",
    "InstallIntent": "Assignment intent: required, available or uninstall.",
    "Notification": "End-user notifications: showAll, showReboot or hideAll.",
    "GroupID": "Object ID of the Entra ID group the app is assigned to.",
}

# Markdown table pipes, list bullets and emphasis around a matched line
_MARKUP_CHARS = "|*-`# \t"


class FieldHelpError(Exception):
    """Raised when the description document cannot be fetched."""


def resolve_column(name: str) -> str | None:
    """Return the canonical spelling of an import column name.

    Args:
        name: Column name, matched case-insensitively.

    Returns:
        Canonical column name, or None for an unknown column.
    """
    normalized = name.strip().lower()
    for column in CSV_COLUMNS:
        if column.lower() == normalized:
            return column
    return None


def describe_field(name: str) -> str | None:
    """Return the built-in description of an import column.

    Args:
        name: Column name, matched case-insensitively.

    Returns:
        Description, or None for an unknown column.
    """
    column = resolve_column(name)
    return FIELD_DESCRIPTIONS[column] if column else None


def fetch_document(url: str, timeout: float = 10.0) -> str:
    """Download the column description document.

    Args:
        url: HTTPS URL of a text or Markdown document.
        timeout: Request timeout in seconds.

    Returns:
        Document text.

    Raises:
        FieldHelpError: If the request fails or returns an error status.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise FieldHelpError(f"Could not fetch {url}: {e}") from e
    return response.text


def find_description(document: str, name: str) -> str | None:
    """Find the first line of a document that mentions a column name.

    Args:
        document: Document text.
        name: Column name, matched as a whole word.

    Returns:
        The matching line without Markdown decoration, or None.
    """
    pattern = re.compile(rf"\b{re.escape(name)}\b")
    for line in document.splitlines():
        if pattern.search(line):
            cells = (cell.strip() for cell in line.strip(_MARKUP_CHARS).split("|"))
            return " ".join(cell for cell in cells if cell) or None
    return None

