"""Argument types.

An argument type is a capability record keyed by name: a validator turning raw
text into a value, and optionally a suggestion provider and a render callback
for interactive completion. Types are shared by every slot declaring them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import DuplicateName, InvalidDefinition
from .models import INVALID

__all__ = [
    "BOOLEAN_FALSE_STRINGS",
    "BOOLEAN_TRUE_STRINGS",
    "NUMBER_PRESETS",
    "RenderCallback",
    "SuggestCallback",
    "TypeDescriptor",
    "TypeRegistry",
    "ValidateCallback",
    "builtin_types",
    "parse_boolean",
    "parse_number",
]

ValidateCallback = Callable[[str], Any]
SuggestCallback = Callable[[str, Sequence[Any]], Iterable[Any]]
RenderCallback = Callable[[Any], tuple[Any, Any]]

BOOLEAN_TRUE_STRINGS = frozenset({"t", "true", "1"})
BOOLEAN_FALSE_STRINGS = frozenset({"f", "false", "0"})

NUMBER_PRESETS = (1, 5, 10, 25, 50, 100)

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class TypeDescriptor:
    """An argument type.

    Attributes:
        name: Unique type name referenced by argument specs
        validate: Turns raw text into a value; rejects it by raising ValueError or
                  TypeError, or by returning INVALID
        suggest: Optional `(query, previous_values) -> suggestions` provider
        render: Optional `suggestion -> (bound_value, ui_descriptor)` callback
        color: Display color, passed through to the front-end untouched
        description: Human-readable description
    """

    name: str
    validate: ValidateCallback
    suggest: SuggestCallback | None = None
    render: RenderCallback | None = None
    color: Any = None
    description: str = ""

    @property
    def manual_entry_only(self) -> bool:
        """True when the type offers no suggestions."""
        return self.suggest is None

    def parse(self, raw: str, log: logging.Logger | None = None) -> Any:  # noqa: ANN401
        """Validate `raw`, returning the value or INVALID.

        Args:
            raw: The decoded token text
            log: Logger used to report validators crashing with unexpected errors

        Returns:
            The validated value, or INVALID
        """
        try:
            return self.validate(raw)
        except (ValueError, TypeError):
            return INVALID
        except Exception:  # pylint: disable=broad-exception-caught
            if log:
                log.exception("Validator of type %s failed on %r", self.name, raw)
            return INVALID


class TypeRegistry:
    """Append-only mapping of type names to descriptors, in registration order."""

    def __init__(self) -> None:
        self._types: dict[str, TypeDescriptor] = {}

    def register(self, descriptor: TypeDescriptor) -> None:
        """Add a type.

        Raises:
            DuplicateName: if the name is taken
            InvalidDefinition: if the name is empty or holds whitespace
        """
        name = descriptor.name
        if not name or any(char.isspace() for char in name):
            raise InvalidDefinition(name or "<empty>", "type names must be non-empty words")
        if not callable(descriptor.validate):
            raise InvalidDefinition(name, "validate must be callable")
        if name in self._types:
            raise DuplicateName(name)
        self._types[name] = descriptor

    def get(self, name: str) -> TypeDescriptor | None:
        """Return the type called `name`, if any."""
        return self._types.get(name)

    def names(self) -> list[str]:
        """Return type names in registration order."""
        return list(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)


def parse_number(raw: str) -> int | float:
    """Parse a numeric literal: an int for integer literals, a float otherwise.

    Raises:
        ValueError: if `raw` is not a plain decimal literal ("inf", "1_000", "0x1" are rejected)
    """
    if not _NUMBER_PATTERN.fullmatch(raw):
        raise ValueError(f"not a number: {raw!r}")
    if _INTEGER_PATTERN.fullmatch(raw):
        return int(raw)
    return float(raw)


def parse_boolean(raw: str) -> bool:
    """Parse t/true/1 and f/false/0, case-insensitively.

    Raises:
        ValueError: for anything else
    """
    text = raw.lower()
    if text in BOOLEAN_TRUE_STRINGS:
        return True
    if text in BOOLEAN_FALSE_STRINGS:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _suggest_number(query: str, _previous: Sequence[Any]) -> list[int | float]:
    presets: list[int | float] = [value for value in NUMBER_PRESETS if str(value).startswith(query)]
    try:
        typed = parse_number(query)
    except ValueError:
        return presets
    if typed not in presets:
        presets.insert(0, typed)
    return presets


def _suggest_boolean(query: str, _previous: Sequence[Any]) -> list[bool]:
    text = query.lower()
    return [value for value in (True, False) if str(value).lower().startswith(text)]


def _render_plain(suggestion: Any) -> tuple[Any, str]:  # noqa: ANN401
    return suggestion, (str(suggestion).lower() if isinstance(suggestion, bool) else str(suggestion))


def builtin_types() -> list[TypeDescriptor]:
    """Return the descriptors of the built-in `string`, `number` and `boolean` types."""
    return [
        TypeDescriptor(
            "string",
            validate=str,
            color="ansigreen",
            description="Free text",
        ),
        TypeDescriptor(
            "number",
            validate=parse_number,
            suggest=_suggest_number,
            render=_render_plain,
            color="ansicyan",
            description="A decimal number",
        ),
        TypeDescriptor(
            "boolean",
            validate=parse_boolean,
            suggest=_suggest_boolean,
            render=_render_plain,
            color="ansimagenta",
            description="true or false (t/f, 1/0)",
        ),
    ]
