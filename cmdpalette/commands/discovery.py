"""Command extraction from extensions."""

from __future__ import annotations

import inspect
from collections.abc import Mapping, Sequence

from ..errors import RegistrationError
from .models import CommandDefinition
from .parsing import parse_docstring

__all__ = ["COMMAND_PREFIX", "extract_commands_from_object"]

COMMAND_PREFIX = "run_"


def extract_commands_from_object(
    obj: object,
    source: str,
    category: str,
    aliases: Mapping[str, Sequence[str]] | None = None,
) -> tuple[list[CommandDefinition], list[RegistrationError]]:
    """Extract commands from an extension instance.

    Looks for methods starting with "run_"; the docstring gives the argument
    signature and the description.

    Args:
        obj: The extension instance
        source: The source identifier (extension name)
        category: Category label of the commands
        aliases: Optional mapping of command name to its aliases

    Returns:
        Tuple of (definitions, errors); a command with a malformed docstring
        signature lands in errors and does not prevent the others
    """
    aliases = aliases or {}
    commands: list[CommandDefinition] = []
    errors: list[RegistrationError] = []

    for name in dir(obj):
        if not name.startswith(COMMAND_PREFIX):
            continue

        method = getattr(obj, name)
        if not callable(method):
            continue

        command_name = name[len(COMMAND_PREFIX) :]
        try:
            args, _short, full_desc = parse_docstring(inspect.getdoc(method) or "")
        except RegistrationError as e:
            errors.append(e)
            continue

        commands.append(
            CommandDefinition(
                name=command_name,
                category=category,
                args=tuple(args),
                handler=method,
                aliases=tuple(aliases.get(command_name, ())),
                description=full_desc,
                source=source,
            )
        )

    return commands, errors
