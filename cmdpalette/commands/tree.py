"""Category grouping for command listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import BUILTIN_CATEGORY

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import CommandDefinition

__all__ = ["group_by_category"]


def group_by_category(definitions: Iterable[CommandDefinition]) -> dict[str, list[CommandDefinition]]:
    """Group commands by category label.

    Built-in commands come first, other categories follow in order of first
    appearance; commands keep their registration order inside a category.

    Args:
        definitions: Commands in registration order

    Returns:
        Dict mapping category label to its commands
    """
    groups: dict[str, list[CommandDefinition]] = {}
    for definition in definitions:
        groups.setdefault(definition.category, []).append(definition)
    if BUILTIN_CATEGORY in groups:
        groups = {BUILTIN_CATEGORY: groups.pop(BUILTIN_CATEGORY), **groups}
    return groups
