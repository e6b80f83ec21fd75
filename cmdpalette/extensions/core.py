"""Built-in extension.

Provides the `help`, `commands` and `version` commands and the `command` and
`category` argument types, which complete against the registry itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ..argtypes import TypeDescriptor
from ..constants import BUILTIN_CATEGORY
from ..help import get_command_help, get_help
from ..models import ABSENT
from ..version import VERSION
from .interface import Extension

if TYPE_CHECKING:
    from ..commands.models import CommandDefinition

__all__ = ["CoreExtension"]


class CoreExtension(Extension):
    """Commands describing the palette itself."""

    category = BUILTIN_CATEGORY
    aliases = {"help": ["?"]}  # noqa: RUF012

    def get_argument_types(self) -> list[TypeDescriptor]:
        """Return the `command` and `category` types."""
        return [
            TypeDescriptor(
                "command",
                validate=self._validate_command,
                suggest=self._suggest_command,
                color="ansiyellow",
                description="A command name or alias",
            ),
            TypeDescriptor(
                "category",
                validate=self._validate_category,
                suggest=self._suggest_category,
                color="ansiblue",
                description="A command category",
            ),
        ]

    def _validate_command(self, raw: str) -> CommandDefinition:
        definition = self.palette.commands.resolve(raw)
        if definition is None:
            raise ValueError(f"unknown command {raw!r}")
        return definition

    def _suggest_command(self, query: str, _previous: Sequence[Any]) -> list[str]:
        return [name for name, _definition in self.palette.commands.find_by_prefix(query)]

    def _validate_category(self, raw: str) -> str:
        for label in self.palette.commands.categories():
            if label.casefold() == raw.casefold():
                return label
        raise ValueError(f"unknown category {raw!r}")

    def _suggest_category(self, query: str, _previous: Sequence[Any]) -> list[str]:
        prefix = query.casefold()
        return [label for label in self.palette.commands.categories() if label.casefold().startswith(prefix)]

    def run_help(self, command: CommandDefinition = ABSENT) -> str:  # type: ignore[assignment]
        """[command:command] Show available commands or detailed help for one command."""
        if command is ABSENT:
            return get_help(self.palette)
        return get_command_help(command)

    def run_commands(self, category: str = ABSENT) -> str:  # type: ignore[assignment]
        """[category:category] List the commands, optionally only those of one category."""
        return get_help(self.palette, category or "")

    def run_version(self) -> str:
        """Show the palette version."""
        return f"{VERSION}\n"
