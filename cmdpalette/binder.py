"""Argument binder.

Resolves the tokens following a command name into one value per slot:

1. a token is available: the slot's type validates its decoded text, and a
   rejected value fails the whole bind (no fallback to the default);
2. no token left: required slots fail, optional slots take their default or
   ABSENT when they have none;
3. tokens left over once every slot is bound fail the bind.

Binding is all or nothing: callers get either every slot bound or an error,
never a partial list.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import InvalidArgument, MissingRequiredArgument, TooManyArguments, UnknownArgumentType
from .models import ABSENT, INVALID, Token

if TYPE_CHECKING:
    import logging

    from .argtypes import TypeRegistry
    from .commands.models import ArgumentSpec, CommandDefinition

__all__ = ["BoundArgument", "BoundArguments", "bind", "bind_partial"]

TokenLike = Token | str


@dataclass(frozen=True)
class BoundArgument:
    """A slot and the value bound to it."""

    spec: ArgumentSpec
    value: Any
    raw: str | None = None  # None when the value comes from the default

    @property
    def type_name(self) -> str:
        """Declared type of the slot."""
        return self.spec.type_name

    @property
    def is_absent(self) -> bool:
        """True when an optional slot was left out without a default."""
        return self.value is ABSENT


@dataclass(frozen=True)
class BoundArguments:
    """Result of a successful bind, in slot order."""

    command: CommandDefinition
    arguments: tuple[BoundArgument, ...]

    @property
    def values(self) -> tuple[Any, ...]:
        """Bound values, in slot order, as passed to the handler."""
        return tuple(argument.value for argument in self.arguments)

    def __getitem__(self, name: str) -> Any:  # noqa: ANN401
        for argument in self.arguments:
            if argument.spec.name == name:
                return argument.value
        raise KeyError(name)

    def __iter__(self) -> Iterator[BoundArgument]:
        return iter(self.arguments)

    def __len__(self) -> int:
        return len(self.arguments)


def _text(token: TokenLike) -> str:
    return token.value if isinstance(token, Token) else token


def _validate(
    definition: CommandDefinition,
    index: int,
    spec: ArgumentSpec,
    raw: str,
    types: TypeRegistry,
    log: logging.Logger | None,
) -> Any:  # noqa: ANN401
    descriptor = types.get(spec.type_name)
    if descriptor is None:
        raise UnknownArgumentType(definition.name, spec.name, spec.type_name)
    value = descriptor.parse(raw, log)
    if value is INVALID:
        raise InvalidArgument(definition.name, spec.name, index, raw)
    return value


def bind(
    definition: CommandDefinition,
    tokens: Sequence[TokenLike],
    types: TypeRegistry,
    log: logging.Logger | None = None,
) -> BoundArguments:
    """Bind the tokens following the command name to the command's slots.

    Args:
        definition: The resolved command
        tokens: Tokens (or decoded strings) after the command name
        types: Registry used to resolve each slot's type
        log: Logger for validator crashes

    Returns:
        Every slot bound, in order

    Raises:
        TooManyArguments: more tokens than slots
        MissingRequiredArgument: a required slot has no token
        InvalidArgument: a type rejected the token (or a raw default)
        UnknownArgumentType: a slot's type is not registered
    """
    if len(tokens) > len(definition.args):
        raise TooManyArguments(definition.name, len(tokens), len(definition.args))

    bound: list[BoundArgument] = []
    for index, spec in enumerate(definition.args):
        if index < len(tokens):
            raw = _text(tokens[index])
            bound.append(BoundArgument(spec, _validate(definition, index, spec, raw, types, log), raw))
        elif not spec.optional:
            raise MissingRequiredArgument(definition.name, spec.name, index)
        elif spec.has_default and spec.default_is_raw:
            bound.append(BoundArgument(spec, _validate(definition, index, spec, str(spec.default), types, log)))
        elif spec.has_default:
            bound.append(BoundArgument(spec, spec.default))
        else:
            bound.append(BoundArgument(spec, ABSENT))
    return BoundArguments(definition, tuple(bound))


def bind_partial(
    definition: CommandDefinition,
    tokens: Sequence[TokenLike],
    types: TypeRegistry,
    log: logging.Logger | None = None,
) -> list[Any]:
    """Bind the completed tokens of a line being edited, never failing.

    Only slots having a token are bound; a token its type rejects (or whose
    type is unknown) is bound as ABSENT, and tokens beyond the last slot are
    ignored.

    Returns:
        Values for the leading slots, in order
    """
    values: list[Any] = []
    for index, (spec, token) in enumerate(zip(definition.args, tokens, strict=False)):
        try:
            values.append(_validate(definition, index, spec, _text(token), types, log))
        except (InvalidArgument, UnknownArgumentType):
            values.append(ABSENT)
    return values
