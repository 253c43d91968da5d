"""Shared constants for niri-app-hotkey."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_FILENAME",
    "IPC_LINE_LIMIT",
    "NIRI_SOCKET_ENV",
    "REQUEST_WINDOWS",
    "REQUEST_WORKSPACES",
    "SHELL",
]

CONFIG_FILENAME = "niri-app-hotkey.kdl"

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "niri" / CONFIG_FILENAME

NIRI_SOCKET_ENV = "NIRI_SOCKET"

# stream line limit, niri replies on a single line
IPC_LINE_LIMIT = 16 * 1024 * 1024

# niri IPC requests
REQUEST_WINDOWS = "Windows"
REQUEST_WORKSPACES = "WorkspacesWithHidden"  # workspaces including `is_hidden`

# Used by spawn-sh
SHELL = ("sh", "-c")
