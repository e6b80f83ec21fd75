"""Schema checks for configuration sections.

A schema is a ConfigItems list of ConfigField. ConfigValidator reports, for one
section, the missing required fields and the values of the wrong type, outside
their choices or refused by the field's own validator. Keys the schema does not
know only produce warnings, with a close-match hint for typos.
"""

import difflib
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .config import BOOL_WORDS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


def _matches(value: Any, kind: type) -> bool:  # noqa: ANN401
    if kind is bool:
        return isinstance(value, bool) or (isinstance(value, str) and value.strip().lower() in BOOL_WORDS)
    if kind in (int, float):
        return isinstance(value, int | float) and not isinstance(value, bool)
    return isinstance(value, kind)


@dataclass
class ConfigField:
    """An expected configuration key.

    Attributes:
        name: The key
        field_type: Expected type, or a tuple of accepted types
        required: Report the key when missing
        default: Value used by Configuration when the key is missing
        description: Human-readable description
        choices: Accepted values, when the field is an enumeration
        validator: Extra check returning error messages (empty when fine)
    """

    name: str
    field_type: type | tuple[type, ...] = str
    required: bool = False
    default: Any = None
    description: str = ""
    choices: list | None = None
    validator: Callable[[Any], list[str]] | None = None

    @property
    def types(self) -> tuple[type, ...]:
        """Accepted types, as a tuple."""
        return self.field_type if isinstance(self.field_type, tuple) else (self.field_type,)

    @property
    def type_name(self) -> str:
        """Accepted types for messages, e.g. "int or float"."""
        return " or ".join(kind.__name__ for kind in self.types)

    def accepts_type(self, value: Any) -> bool:  # noqa: ANN401
        """Tell whether `value` has one of the accepted types (booleans may be spelled as words)."""
        return any(_matches(value, kind) for kind in self.types)


class ConfigItems(list):
    """The fields of one section, looked up by name."""

    def __init__(self, *fields: ConfigField) -> None:
        super().__init__(fields)

    def get(self, name: str) -> ConfigField | None:
        """Return the field called `name`, if any."""
        return next((field for field in self if field.name == name), None)

    def defaults(self) -> dict[str, Any]:
        """Map each field having a default to it."""
        return {field.name: field.default for field in self if field.default is not None}


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Build the message reported for a configuration problem.

    Eg:
        format_config_error("palette", "max_suggestions", "must be 1 or more")
        == "[palette] Config error for 'max_suggestions': must be 1 or more"
    """
    hint = f" -> {suggestion}" if suggestion else ""
    return f"[{section}] Config error for '{field}': {message}{hint}"


class ConfigValidator:
    """Checks one configuration section against a schema.

    Args:
        config: The section
        section: Section name, for messages
        logger: Receives the unknown key warnings
    """

    def __init__(self, config: Mapping[str, Any], section: str, logger: logging.Logger) -> None:
        self.config = config
        self.section = section
        self.log = logger

    def _error(self, field: ConfigField, message: str, suggestion: str = "") -> str:
        return format_config_error(self.section, field.name, message, suggestion)

    def check_field(self, field: ConfigField) -> list[str]:
        """Return the problems of one field (empty when fine)."""
        value = self.config.get(field.name)
        if value is None:
            return [self._error(field, "Missing required field")] if field.required else []
        if not field.accepts_type(value):
            return [self._error(field, f"Expected {field.type_name}, got {type(value).__name__}")]

        problems = []
        if field.choices is not None and value not in field.choices:
            options = ", ".join(repr(choice) for choice in field.choices)
            problems.append(self._error(field, f"Invalid value {value!r}", f"Valid options: {options}"))
        if field.validator is not None:
            problems.extend(self._error(field, message) for message in field.validator(value))
        return problems

    def validate(self, schema: ConfigItems) -> list[str]:
        """Return the problems of every field of `schema`, in schema order."""
        return [problem for field in schema for problem in self.check_field(field)]

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Warn about the keys `schema` does not define.

        Returns:
            The warnings, also sent to the logger
        """
        known = [field.name for field in schema]
        warnings = []
        for key in self.config:
            if key in known:
                continue
            close = difflib.get_close_matches(key, known, n=1)
            warning = format_config_error(self.section, key, "Unknown option", f"Did you mean '{close[0]}'?" if close else "")
            self.log.warning(warning)
            warnings.append(warning)
        return warnings
