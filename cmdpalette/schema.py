"""Schema of the `[palette]` configuration section."""

from .constants import DEFAULT_MAX_SUGGESTIONS
from .validation import ConfigField, ConfigItems

__all__ = ["PALETTE_CONFIG_SCHEMA"]


def _positive(value: int) -> list[str]:
    return [] if value >= 1 else ["must be 1 or more"]


PALETTE_CONFIG_SCHEMA = ConfigItems(
    ConfigField(
        "max_suggestions",
        int,
        default=DEFAULT_MAX_SUGGESTIONS,
        description="Maximum number of suggestions returned for one keystroke",
        validator=_positive,
    ),
    ConfigField(
        "strict_errors",
        bool,
        default=False,
        description="Re-raise handler exceptions instead of reporting them",
    ),
    ConfigField(
        "colored_handlers_log",
        bool,
        default=False,
        description="Colorize handler calls in the debug log",
    ),
    ConfigField(
        "extensions",
        list,
        description="Extension modules to load, as 'module' or 'module:ClassName'",
    ),
    ConfigField(
        "extensions_paths",
        list,
        description="Directories added to the import path before loading extensions",
    ),
    ConfigField(
        "include",
        list,
        description="Extra configuration files to merge",
    ),
)
