"""Help texts for palette commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .commands.tree import group_by_category

if TYPE_CHECKING:
    from .commands.models import CommandDefinition
    from .palette import Palette

__all__ = ["format_usage", "get_command_help", "get_help"]


def format_usage(definition: CommandDefinition) -> str:
    """Return the usage line of a command, e.g. `give <target:player> [amount:number=1]`."""
    return " ".join([definition.name, *(spec.signature for spec in definition.args)])


def get_help(palette: Palette, category: str = "") -> str:
    """List the commands grouped by category, built-in commands first.

    Args:
        palette: The palette holding the commands
        category: Only list this category when set

    Returns:
        The help text
    """
    lines: list[str] = []
    for label, definitions in group_by_category(palette.commands).items():
        if category and label != category:
            continue
        lines.append(f"{label}:")
        lines.extend(f"  {definition.name:20s} {definition.short_description}" for definition in definitions)
        lines.append("")
    if not lines:
        return f"No commands in category {category}\n" if category else "No commands available\n"
    return "\n".join(lines)


def get_command_help(definition: CommandDefinition) -> str:
    """Detailed help for one command: usage, aliases, category and description."""
    lines = [f"Usage: {format_usage(definition)}"]
    if definition.aliases:
        lines.append(f"Aliases: {', '.join(definition.aliases)}")
    lines.append(f"Category: {definition.category}")
    if definition.description:
        lines.extend(["", definition.description.strip()])
    return "\n".join(lines) + "\n"
