"""Palette failures.

Every failure the engine reports derives from `PaletteError`, carries a
`FailureKind` and renders as the short message shown to the user.
"""

from __future__ import annotations

from enum import StrEnum

__all__ = [
    "ConfigError",
    "DuplicateName",
    "FailureKind",
    "HandlerError",
    "InvalidArgument",
    "InvalidDefinition",
    "LexError",
    "MissingRequiredArgument",
    "PaletteError",
    "RegistrationError",
    "TooManyArguments",
    "UnknownArgumentType",
    "UnknownCommand",
]


class FailureKind(StrEnum):
    """Stable identifiers for the failure kinds."""

    LEX_ERROR = "LexError"
    UNKNOWN_COMMAND = "UnknownCommand"
    MISSING_REQUIRED_ARGUMENT = "MissingRequiredArgument"
    INVALID_ARGUMENT = "InvalidArgument"
    TOO_MANY_ARGUMENTS = "TooManyArguments"
    UNKNOWN_ARGUMENT_TYPE = "UnknownArgumentType"
    DUPLICATE_NAME = "DuplicateName"
    INVALID_DEFINITION = "InvalidDefinition"
    HANDLER_ERROR = "HandlerError"


class PaletteError(Exception):
    """Base class for all palette failures."""

    kind: FailureKind


class LexError(PaletteError):
    """The command line could not be tokenized."""

    kind = FailureKind.LEX_ERROR

    def __init__(self, reason: str, offset: int) -> None:
        self.reason = reason
        self.offset = offset
        super().__init__(f"Unterminated quote at column {offset + 1}")


class UnknownCommand(PaletteError):
    """No command or alias matches the first token."""

    kind = FailureKind.UNKNOWN_COMMAND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown command: {name}")


class MissingRequiredArgument(PaletteError):
    """A required slot has no token."""

    kind = FailureKind.MISSING_REQUIRED_ARGUMENT

    def __init__(self, command: str, slot: str, index: int) -> None:
        self.command = command
        self.slot = slot
        self.index = index
        super().__init__(f"Missing required argument: {slot}")


class InvalidArgument(PaletteError):
    """A slot's type rejected the raw text."""

    kind = FailureKind.INVALID_ARGUMENT

    def __init__(self, command: str, slot: str, index: int, raw_text: str) -> None:
        self.command = command
        self.slot = slot
        self.index = index
        self.raw_text = raw_text
        super().__init__(f"Invalid value for argument '{slot}': {raw_text}")


class TooManyArguments(PaletteError):
    """More tokens than the command declares slots."""

    kind = FailureKind.TOO_MANY_ARGUMENTS

    def __init__(self, command: str, count: int, expected: int) -> None:
        self.command = command
        self.count = count
        self.expected = expected
        super().__init__(f"Too many arguments for {command}: got {count}, expected at most {expected}")


class UnknownArgumentType(PaletteError):
    """A slot refers to a type name which is not registered."""

    kind = FailureKind.UNKNOWN_ARGUMENT_TYPE

    def __init__(self, command: str, slot: str, type_name: str) -> None:
        self.command = command
        self.slot = slot
        self.type_name = type_name
        super().__init__(f"Unknown argument type '{type_name}' for argument '{slot}'")


class HandlerError(PaletteError):
    """The command handler raised."""

    kind = FailureKind.HANDLER_ERROR

    def __init__(self, command: str, cause: BaseException) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"{command} failed: {cause}")


class RegistrationError(PaletteError):
    """Base class for errors returned to registering code."""


class DuplicateName(RegistrationError):
    """The command name, alias or type name is already taken."""

    kind = FailureKind.DUPLICATE_NAME

    def __init__(self, name: str, holder: str = "") -> None:
        self.name = name
        self.holder = holder
        msg = f"Name already registered: {name}"
        if holder and holder != name:
            msg += f" (held by {holder})"
        super().__init__(msg)


class InvalidDefinition(RegistrationError):
    """The definition breaks a registration rule."""

    kind = FailureKind.INVALID_DEFINITION

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid definition for {name}: {reason}")


class ConfigError(Exception):
    """The configuration could not be read (already logged)."""
