"""Shared constants for cmdpalette."""

import os
from pathlib import Path

__all__ = [
    "ABSENT_DISPLAY",
    "BUILTIN_CATEGORY",
    "CONFIG_FILE",
    "CONFIG_SECTION",
    "DEFAULT_MAX_SUGGESTIONS",
    "DEFAULT_TYPE",
    "STRICT_ERRORS",
]

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "cmdpalette" / "config.toml"

CONFIG_SECTION = "palette"

# Upper bound on suggestions returned for one keystroke, whatever the type yields
DEFAULT_MAX_SUGGESTIONS = 50

DEFAULT_TYPE = "string"

BUILTIN_CATEGORY = "built-in"

ABSENT_DISPLAY = "<absent>"

STRICT_ERRORS = bool(os.environ.get("CMDPALETTE_STRICT_ERRORS"))
