"""Command registry - name and alias lookup.

Primary names and aliases share one case-insensitive namespace: a name taken by
any command, as primary name or alias, cannot be registered again. The first
registration wins and is never replaced.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Any

from ..constants import BUILTIN_CATEGORY
from ..errors import DuplicateName, InvalidDefinition
from .models import ArgumentSpec, CommandDefinition

__all__ = ["CommandRegistry", "check_definition", "make_definition"]


def _fold(name: str) -> str:
    return name.casefold()


def _is_word(name: str) -> bool:
    return bool(name) and not any(char.isspace() for char in name)


def check_definition(definition: CommandDefinition) -> None:
    """Check the registration rules which do not depend on other commands.

    Args:
        definition: The command to check

    Raises:
        InvalidDefinition: on malformed names, a required slot after an optional
            one, a default on a required slot, or a non callable handler
    """
    name = definition.name
    if not _is_word(name):
        raise InvalidDefinition(name or "<empty>", "command names must be non-empty and without whitespace")
    if not callable(definition.handler):
        raise InvalidDefinition(name, "handler must be callable")

    seen = {_fold(name)}
    for alias in definition.aliases:
        if not _is_word(alias):
            raise InvalidDefinition(name, f"invalid alias {alias!r}")
        if _fold(alias) in seen:
            raise InvalidDefinition(name, f"alias {alias!r} is listed twice")
        seen.add(_fold(alias))

    optional_from = ""
    slot_names: set[str] = set()
    for spec in definition.args:
        if not _is_word(spec.name):
            raise InvalidDefinition(name, f"invalid argument name {spec.name!r}")
        if spec.name in slot_names:
            raise InvalidDefinition(name, f"argument {spec.name!r} is declared twice")
        slot_names.add(spec.name)
        if not _is_word(spec.type_name):
            raise InvalidDefinition(name, f"invalid type name {spec.type_name!r} for argument {spec.name!r}")
        if spec.optional:
            optional_from = optional_from or spec.name
        else:
            if optional_from:
                raise InvalidDefinition(name, f"required argument {spec.name!r} follows optional argument {optional_from!r}")
            if spec.has_default:
                raise InvalidDefinition(name, f"required argument {spec.name!r} cannot have a default")


def make_definition(  # pylint: disable=too-many-arguments
    category: str,
    name: str,
    args: Sequence[ArgumentSpec],
    aliases: Sequence[str],
    description: str,
    handler: Callable[..., Any],
    source: str = "",
) -> CommandDefinition:
    """Build a CommandDefinition from registration call arguments."""
    return CommandDefinition(
        name=name,
        category=category or BUILTIN_CATEGORY,
        args=tuple(args),
        handler=handler,
        aliases=tuple(aliases),
        description=description,
        source=source,
    )


class CommandRegistry:
    """Append-only registry of commands, in registration order."""

    def __init__(self) -> None:
        self._primary: dict[str, CommandDefinition] = {}
        self._aliases: dict[str, CommandDefinition] = {}

    def register(self, definition: CommandDefinition) -> None:
        """Add a command.

        The registry is left untouched when the command is rejected.

        Args:
            definition: The command to add

        Raises:
            InvalidDefinition: if the definition breaks a registration rule
            DuplicateName: if the name or one of the aliases is taken
        """
        check_definition(definition)
        for candidate in definition.names:
            holder = self.resolve(candidate)
            if holder is not None:
                raise DuplicateName(candidate, holder.name)
        self._primary[_fold(definition.name)] = definition
        for alias in definition.aliases:
            self._aliases[_fold(alias)] = definition

    def resolve(self, name: str) -> CommandDefinition | None:
        """Find a command by primary name, then by alias, ignoring case."""
        key = _fold(name)
        found = self._primary.get(key)
        if found is None:
            found = self._aliases.get(key)
        return found

    def find_by_prefix(self, prefix: str) -> list[tuple[str, CommandDefinition]]:
        """List commands having a name or alias starting with `prefix`.

        Args:
            prefix: Partially typed name (case-insensitive)

        Returns:
            (matched name, definition) pairs in registration order, one per command;
            the primary name is preferred over aliases
        """
        key = _fold(prefix)
        matches: list[tuple[str, CommandDefinition]] = []
        for definition in self._primary.values():
            for candidate in definition.names:
                if _fold(candidate).startswith(key):
                    matches.append((candidate, definition))
                    break
        return matches

    def definitions(self) -> list[CommandDefinition]:
        """Return every command in registration order."""
        return list(self._primary.values())

    def categories(self) -> list[str]:
        """Return the category labels in order of first appearance."""
        return list(dict.fromkeys(definition.category for definition in self._primary.values()))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(self.definitions())

    def __len__(self) -> int:
        return len(self._primary)
