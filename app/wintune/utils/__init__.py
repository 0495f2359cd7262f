"""Utility modules for wintune.

This module exports commonly used utility functions.
"""

from wintune.utils.formatting import (
    console,
    create_import_list_table,
    create_search_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
    styled_table,
)
from wintune.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_import_list_table",
    "create_search_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "styled_table",
]
