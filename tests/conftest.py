"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories at a temporary location."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    return tmp_path


@pytest.fixture
def mock_search_output() -> str:
    """Sample winget search output for testing."""
    return (
        "   - \r   \\ \r"
        "Name                          Id                          Version  Match         Source\n"
        "----------------------------------------------------------------------------------------\n"
        "VLC media player              VideoLAN.VLC                3.0.20   Moniker: vlc  winget\n"
        "VLC UWP                       9NBLGGH4VVNH                Unknown                msstore\n"
        "Microsoft Visual Studio Code  Microsoft.VisualStudioCode  1.85.1   Tag: vlc      winget\n"
        "Microsoft .NET SDK 8.0        Microsoft.DotNet.SDK.8      8.0.100                winget\n"
    )


@pytest.fixture
def mock_versions_output() -> str:
    """Sample winget show --versions output for testing."""
    return """Found VLC media player [VideoLAN.VLC]
Version
-------
3.0.20
3.0.18
3.0.17.4
"""


@pytest.fixture
def mock_no_results_output() -> str:
    """winget output when nothing matches."""
    return "No package found matching input criteria.\n"
