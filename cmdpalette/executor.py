"""Executor - runs handlers with bound values.

A handler failure is caught, logged and reported as a HandlerError result;
it never reaches the caller and never leaves the registries half updated.
"""

from __future__ import annotations

import inspect
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .binder import BoundArguments
from .errors import HandlerError
from .logs import ASYNC_CALL_STYLE, CALL_STYLE, paint
from .models import CommandResult

if TYPE_CHECKING:
    import logging

    from .commands.models import CommandDefinition

__all__ = ["Executor"]


def _values(bound: BoundArguments | Sequence[Any]) -> tuple[Any, ...]:
    if isinstance(bound, BoundArguments):
        return bound.values
    return tuple(bound)


class Executor:
    """Invokes command handlers.

    Args:
        log: Logger for handler calls and failures
        strict: Re-raise handler exceptions after logging them
        colored: Colorize the handler call log
    """

    def __init__(self, log: logging.Logger, strict: bool = False, colored: bool = False) -> None:
        self.log = log
        self.strict = strict
        self.colored = colored

    def log_handler(self, definition: CommandDefinition, values: tuple[Any, ...], asynchronous: bool = False) -> None:
        """Log a handler call at debug level."""
        if self.colored:
            self.log.debug(paint(f"{definition.name}{values!r}", ASYNC_CALL_STYLE if asynchronous else CALL_STYLE))
        else:
            self.log.debug("%s%r", definition.name, values)

    def _failed(self, definition: CommandDefinition, values: tuple[Any, ...], error: Exception) -> CommandResult:
        self.log.exception("%s%r failed:", definition.name, values)
        return CommandResult(False, definition.name, error=HandlerError(definition.name, error))

    def execute(self, definition: CommandDefinition, bound: BoundArguments | Sequence[Any]) -> CommandResult:
        """Run the handler once with the bound values, in slot order.

        Coroutine handlers are refused here (see `aexecute`).

        Args:
            definition: The command to run
            bound: Bound arguments or plain values

        Returns:
            Success with the handler's return value as output, or a HandlerError failure
        """
        values = _values(bound)
        self.log_handler(definition, values)
        try:
            output = definition.handler(*values)
            if inspect.isawaitable(output):
                if inspect.iscoroutine(output):
                    output.close()
                raise TypeError(f"{definition.name} is asynchronous and must be run with asubmit")
        except Exception as e:  # pylint: disable=broad-exception-caught
            result = self._failed(definition, values, e)
            if self.strict:
                raise
            return result
        return CommandResult(True, definition.name, output)

    async def aexecute(self, definition: CommandDefinition, bound: BoundArguments | Sequence[Any]) -> CommandResult:
        """Run the handler, awaiting it when it returns an awaitable.

        Args:
            definition: The command to run
            bound: Bound arguments or plain values

        Returns:
            Success with the handler's return value as output, or a HandlerError failure
        """
        values = _values(bound)
        self.log_handler(definition, values, asynchronous=True)
        try:
            output = definition.handler(*values)
            if inspect.isawaitable(output):
                output = await output
        except Exception as e:  # pylint: disable=broad-exception-caught
            result = self._failed(definition, values, e)
            if self.strict:
                raise
            return result
        return CommandResult(True, definition.name, output)
