"""Console colors.

Tables and messages use named Rich styles. Their colors default to the
values below and can be overridden per name in the [colors] table of
~/.config/wintune/theme.toml. An unreadable or invalid override file
is reported and ignored.
"""

import logging
import sys
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from wintune.core.paths import get_theme_path

logger = logging.getLogger(__name__)


def _check_hex(value: str) -> str:
    color = value.strip()
    digits = color.removeprefix("#")
    if color == digits:
        raise ValueError("color must start with '#'")
    if len(digits) not in (3, 6):
        raise ValueError("color must be #RGB or #RRGGBB format")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid hex color '{color}'") from None
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Hex colors of the named console styles."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Search and import list tables
    package_id: HexColor = "#69B9A1"
    version: HexColor = "#b2bec3"
    flag_on: HexColor = "#c1ff62"
    flag_off: HexColor = "#226666"


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the string entries of the [colors] table.

    Returns:
        Color overrides, or None if the file is missing or unusable.
    """
    try:
        with open(path, "rb") as f:
            section = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        print(f"Warning: Failed to read {path}: {e}", file=sys.stderr)
        return None

    if not isinstance(section, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {name: value for name, value in section.items() if isinstance(value, str)}


def load_theme(path: Path | None = None) -> ThemeColors:
    """Build the color set from defaults and the user override file.

    Args:
        path: Override file. If None, uses ~/.config/wintune/theme.toml.
    """
    overrides = _load_toml_colors(path or get_theme_path())
    if not overrides:
        return ThemeColors()

    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Invalid theme overrides, using defaults: %s", e)
        print(f"Warning: Invalid theme configuration: {e}", file=sys.stderr)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Map the colors onto the Rich style names used by the CLI."""
    if colors is None:
        colors = load_theme()
    styles = colors.model_dump()
    styles.update(
        error=f"bold {colors.error}",
        package_id=f"bold {colors.package_id}",
        bold_header=f"bold {colors.header}",
        dim=colors.muted,
    )
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, building it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
