"""Data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING, Any

from .constants import ABSENT_DISPLAY

if TYPE_CHECKING:
    from .errors import PaletteError

__all__ = [
    "ABSENT",
    "INVALID",
    "CommandResult",
    "ExitCode",
    "SuggestionKind",
    "SuggestionResult",
    "Token",
    "TokenKind",
]


class _Sentinel:
    """Named singleton marker, falsy."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Sentinel:
        return self

    def __deepcopy__(self, memo: dict) -> _Sentinel:
        return self


ABSENT = _Sentinel(ABSENT_DISPLAY)
" Bound to an optional slot with no token and no explicit default "

INVALID = _Sentinel("<invalid>")
" Returned by a validator to reject the raw text "


class TokenKind(StrEnum):
    """Lexical token kinds."""

    WORD = "word"
    QUOTED = "quoted"


@dataclass(frozen=True)
class Token:
    """A lexical unit of a command line.

    `start` and `end` index the source line (end excluded) and cover the quote
    delimiters of quoted tokens, so they differ from `len(value)` whenever
    escapes or quotes were consumed.
    """

    kind: TokenKind
    raw: str
    value: str
    start: int
    end: int
    terminated: bool = True  # False only for a quoted token cut by the cursor


class SuggestionKind(StrEnum):
    """What the active position of a line is completing."""

    NONE = "none"
    COMMAND = "command"
    ARGUMENT = "argument"


@dataclass(frozen=True)
class SuggestionResult:  # pylint: disable=too-many-instance-attributes
    """Suggestions computed for one (line, cursor) pair.

    The result is tied to the exact input it was computed for; front-ends
    compare `line` and `cursor` with the current input before applying it.
    """

    line: str
    cursor: int
    kind: SuggestionKind = SuggestionKind.NONE
    query: str = ""
    replace_start: int = 0  # offset where the token being completed starts
    command: str = ""
    slot_index: int = -1
    slot_name: str = ""
    type_name: str = ""
    color: str | None = None
    items: tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):  # noqa: ANN204
        return iter(self.items)


@dataclass
class CommandResult:
    """Outcome of submitting a command line."""

    success: bool
    command: str = ""
    output: Any = None
    error: PaletteError | None = field(default=None)

    @property
    def message(self) -> str:
        """Text to show the user: the error message or the handler's string output."""
        if self.error is not None:
            return str(self.error)
        if isinstance(self.output, str):
            return self.output
        return ""


class ExitCode(IntEnum):
    """Exit codes of the console."""

    SUCCESS = 0
    USAGE_ERROR = 1
    CONFIG_ERROR = 2
