"""Suggestion engine - per-keystroke completion.

For a (line, cursor) pair the engine finds the token being typed, works out
which slot it fills and asks that slot's type for suggestions. Filtering and
ordering belong to the type; the engine only caps the count and makes sure a
failing provider degrades to "no suggestions" instead of reaching the caller.
"""

from __future__ import annotations

import dataclasses
import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .binder import bind_partial
from .constants import DEFAULT_MAX_SUGGESTIONS
from .lexer import tokens_at_cursor
from .models import SuggestionKind, SuggestionResult

if TYPE_CHECKING:
    import logging

    from .argtypes import TypeRegistry
    from .commands.models import CommandDefinition
    from .commands.registry import CommandRegistry

__all__ = ["CommandSuggestion", "SuggestionEngine"]


@dataclass(frozen=True)
class CommandSuggestion:
    """A command offered while the first token is typed."""

    name: str  # the matched name: primary name or alias
    definition: CommandDefinition


class SuggestionEngine:
    """Computes suggestions against the current registry contents."""

    def __init__(
        self,
        commands: CommandRegistry,
        types: TypeRegistry,
        log: logging.Logger,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    ) -> None:
        self.commands = commands
        self.types = types
        self.log = log
        self.max_suggestions = max_suggestions

    def suggest(self, line: str, cursor: int) -> SuggestionResult:
        """Return the suggestions for `line` with the cursor at `cursor`.

        Only the text before the cursor is considered; an unclosed quote there is
        not an error.

        Args:
            line: The full input line
            cursor: Cursor offset in the line

        Returns:
            The suggestions, tied to this exact (line, cursor) pair
        """
        completed, active = tokens_at_cursor(line, cursor)
        query = active.value if active else ""
        replace_start = active.start if active else max(0, min(cursor, len(line)))
        empty = SuggestionResult(line=line, cursor=cursor, query=query, replace_start=replace_start)

        if not completed:
            matches = self.commands.find_by_prefix(query)[: self.max_suggestions]
            return dataclasses.replace(
                empty,
                kind=SuggestionKind.COMMAND,
                items=tuple(CommandSuggestion(name, definition) for name, definition in matches),
            )

        definition = self.commands.resolve(completed[0].value)
        if definition is None:
            return empty

        slot_index = len(completed) - 1
        if slot_index >= len(definition.args):
            return dataclasses.replace(empty, command=definition.name)

        spec = definition.args[slot_index]
        descriptor = self.types.get(spec.type_name)
        result = dataclasses.replace(
            empty,
            kind=SuggestionKind.ARGUMENT,
            command=definition.name,
            slot_index=slot_index,
            slot_name=spec.name,
            type_name=spec.type_name,
            color=descriptor.color if descriptor else None,
        )
        if descriptor is None or descriptor.suggest is None:
            return result

        previous = tuple(bind_partial(definition, completed[1:], self.types, self.log))
        try:
            items = tuple(itertools.islice(descriptor.suggest(query, previous), self.max_suggestions))
        except Exception:  # pylint: disable=broad-exception-caught
            self.log.exception("Suggestions for %s (%s) failed on %r", spec.name, spec.type_name, query)
            return result
        return dataclasses.replace(result, items=items)

    def render(self, result: SuggestionResult, suggestion: Any) -> tuple[Any, Any] | None:  # noqa: ANN401
        """Ask the active type to render one of `result`'s suggestions.

        Args:
            result: The result the suggestion comes from
            suggestion: One of `result.items`

        Returns:
            Tuple of (bound value, UI descriptor), or None if rendering failed.
            Types without a render callback yield `(suggestion, str(suggestion))`.
        """
        if result.kind == SuggestionKind.COMMAND:
            return (suggestion.definition, suggestion.name)
        descriptor = self.types.get(result.type_name)
        if descriptor is None or descriptor.render is None:
            return (suggestion, str(suggestion))
        try:
            return descriptor.render(suggestion)
        except Exception:  # pylint: disable=broad-exception-caught
            self.log.exception("Rendering %r with type %s failed", suggestion, result.type_name)
            return None
