"""File locations used by wintune.

Settings live under the XDG config home and the working import list
under the XDG state home:

- ~/.config/wintune/config.toml, ~/.config/wintune/theme.toml
- ~/.local/state/wintune/import-list.csv, ~/.local/state/wintune/work/

Nothing here creates directories; writers create parents on demand.
"""

import os
from pathlib import Path

APP_NAME = "wintune"


def _xdg_home(env_var: str, fallback: str) -> Path:
    """Resolve an XDG base directory for wintune.

    An unset or empty variable means the fallback under the home directory.
    """
    base = os.environ.get(env_var)
    root = Path(base) if base else Path.home() / fallback
    return root / APP_NAME


def get_config_dir() -> Path:
    """Directory holding config.toml and theme.toml."""
    return _xdg_home("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Directory holding the working import list and import workspace."""
    return _xdg_home("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Path of the main settings file."""
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Path of the optional color override file."""
    return get_config_dir() / "theme.toml"


def get_import_list_path() -> Path:
    """Path of the CSV the CLI keeps the working import list in."""
    return get_state_dir() / "import-list.csv"


def get_default_working_dir() -> Path:
    """Default folder for the import script, its tools and Logs/."""
    return get_state_dir() / "work"
