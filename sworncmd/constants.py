"""Shared constants for sworncmd."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SECTION",
]

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "sworncmd" / "config.toml"

CONFIG_SECTION = "sworncmd"
