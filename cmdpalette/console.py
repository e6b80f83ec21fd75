"""Terminal front-end for the palette.

Syntax: cmdpalette [--debug] [--config PATH]

Reads command lines with completion on every keystroke, runs them and prints
the outcome. `exit`, `quit`, Ctrl-C or Ctrl-D leave the loop.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable, Iterator
from typing import TYPE_CHECKING, Any

import questionary
from prompt_toolkit.completion import Completer, Completion

from .config_loader import ConfigLoader
from .errors import ConfigError
from .lexer import quote
from .logs import get_logger, init_logger
from .models import CommandResult, ExitCode, SuggestionKind
from .palette import Palette

if TYPE_CHECKING:
    from prompt_toolkit.completion import CompleteEvent
    from prompt_toolkit.document import Document

__all__ = ["PaletteCompleter", "completion_text", "main", "run_console"]

EXIT_WORDS = frozenset({"exit", "quit"})

PROMPT = "›"

USAGE = "Syntax: cmdpalette [--debug] [--config PATH]"


def completion_text(value: Any) -> str:  # noqa: ANN401
    """Text inserted in the line for a bound value, quoted when needed."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value))


class PaletteCompleter(Completer):
    """prompt_toolkit completer backed by `Palette.suggest`."""

    def __init__(self, palette: Palette) -> None:
        self.palette = palette

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterator[Completion]:
        """Yield one completion per rendered suggestion."""
        result = self.palette.suggest(document.text, document.cursor_position)
        start_position = result.replace_start - document.cursor_position
        style = f"fg:{result.color}" if result.color else ""
        for item in result.items:
            rendered = self.palette.render_suggestion(result, item)
            if rendered is None:
                continue
            value, display = rendered
            if result.kind == SuggestionKind.COMMAND:
                yield Completion(
                    item.name,
                    start_position=start_position,
                    display=str(display),
                    display_meta=item.definition.short_description,
                )
            else:
                yield Completion(
                    completion_text(value),
                    start_position=start_position,
                    display=str(display),
                    display_meta=f"{result.slot_name}:{result.type_name}",
                    style=style,
                )


def report(result: CommandResult) -> None:
    """Print the outcome of a command."""
    message = result.message.rstrip("\n")
    if not result.success:
        questionary.print(message, style="fg:ansired bold")
    elif message:
        questionary.print(message)


def _make_reader(palette: Palette) -> Callable[[], Awaitable[str]]:
    completer = PaletteCompleter(palette)

    def _ask() -> Awaitable[str]:
        return questionary.text(PROMPT, qmark="", completer=completer, complete_while_typing=True).unsafe_ask_async()

    return _ask


async def run_console(palette: Palette, read_line: Callable[[], Awaitable[str]] | None = None) -> None:
    """Load the configured extensions, then run the read-submit-print loop until exit.

    Args:
        palette: The palette to drive
        read_line: Coroutine function returning the next line, defaults to a
            questionary prompt with palette completion
    """
    log = get_logger("console")
    read_line = read_line or _make_reader(palette)
    await palette.load_configured_extensions()
    while True:
        try:
            line = (await read_line()).strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue
        if line.lower() in EXIT_WORDS:
            break
        log.debug("Submitting %r", line)
        report(await palette.asubmit(line))
    await palette.exit_extensions()


def main() -> None:
    """Console entry point."""
    args = sys.argv[1:]
    if "--help" in args or "-h" in args:
        print(USAGE)
        sys.exit(ExitCode.SUCCESS)

    config_path = ""
    if "--config" in args:
        try:
            config_path = args[args.index("--config") + 1]
        except IndexError:
            print(USAGE)
            sys.exit(ExitCode.USAGE_ERROR)

    init_logger(force_debug="--debug" in args)
    log = get_logger("console")
    try:
        config = ConfigLoader(log).load(config_path)
    except ConfigError:
        sys.exit(ExitCode.CONFIG_ERROR)

    asyncio.run(run_console(Palette(config)))
    sys.exit(ExitCode.SUCCESS)


if __name__ == "__main__":
    main()
