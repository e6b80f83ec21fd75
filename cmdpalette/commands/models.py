"""Data models for command handling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..constants import DEFAULT_TYPE
from ..models import ABSENT

__all__ = ["ArgumentSpec", "CommandDefinition", "argument"]


@dataclass(frozen=True)
class ArgumentSpec:
    """One slot of a command.

    `type_name` is resolved when binding, not when registering, so a command may
    refer to a type registered later.
    """

    type_name: str
    name: str
    optional: bool = False
    has_default: bool = False
    default: Any = ABSENT
    default_is_raw: bool = False  # default is text to run through the type's validator

    @property
    def signature(self) -> str:
        """Usage form of the slot, e.g. `<target:player>` or `[amount:number=5]`."""
        label = f"{self.name}:{self.type_name}"
        if not self.optional:
            return f"<{label}>"
        if self.has_default:
            return f"[{label}={self.default}]"
        return f"[{label}]"


def argument(name: str, type_name: str = DEFAULT_TYPE, *, optional: bool = False, default: Any = ABSENT) -> ArgumentSpec:  # noqa: ANN401
    """Build an ArgumentSpec; passing `default` makes the slot optional.

    Args:
        name: Slot name, used in messages
        type_name: Name of the argument type
        optional: Whether the slot may be left out
        default: Value bound when the slot is left out

    Returns:
        The argument spec
    """
    has_default = default is not ABSENT
    return ArgumentSpec(
        type_name=type_name,
        name=name,
        optional=optional or has_default,
        has_default=has_default,
        default=default,
    )


@dataclass(frozen=True)
class CommandDefinition:  # pylint: disable=too-many-instance-attributes
    """A registered command.

    Immutable once built; the registry keeps it for the whole session.
    """

    name: str
    category: str
    args: tuple[ArgumentSpec, ...]
    handler: Callable[..., Any]
    aliases: tuple[str, ...] = ()
    description: str = ""
    source: str = ""  # extension which registered the command

    @property
    def short_description(self) -> str:
        """First line of the description."""
        if not self.description:
            return "No description available."
        return self.description.strip().split("\n", 1)[0]

    @property
    def required_count(self) -> int:
        """Number of leading required slots."""
        return sum(1 for arg in self.args if not arg.optional)

    @property
    def names(self) -> tuple[str, ...]:
        """Primary name followed by the aliases."""
        return (self.name, *self.aliases)
