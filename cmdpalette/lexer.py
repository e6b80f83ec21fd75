"""Command line lexer.

Splits a command line into word and quoted tokens.

- Tokens are separated by whitespace outside quotes.
- A token starting with `"` or `'` runs up to the next unescaped quote of the
  same character; the delimiters are not part of the decoded value.
- `\\"`, `\\'` and `\\\\` decode to the quoted character, in and out of quotes.
  Any other backslash sequence is kept as typed (backslash included), so paths
  and free text are never rejected. Outside quotes a backslash does not escape
  whitespace: it stays in the token and the whitespace still separates.
- A closing quote ends the token: text glued right after it starts a new one.
"""

from __future__ import annotations

from .errors import LexError
from .models import Token, TokenKind

__all__ = ["QUOTES", "UNTERMINATED_QUOTE", "quote", "tokenize", "tokenize_prefix", "tokens_at_cursor"]

QUOTES = frozenset("\"'")

UNTERMINATED_QUOTE = "UnterminatedQuote"

_ESCAPES = frozenset("\"'\\")


def _scan(line: str, strict: bool) -> list[Token]:
    """Run the lexer over `line`.

    Args:
        line: The text to tokenize
        strict: Raise on an unterminated quote instead of returning the partial token

    Returns:
        The tokens, left to right
    """
    tokens: list[Token] = []
    length = len(line)
    pos = 0
    while pos < length:
        if line[pos].isspace():
            pos += 1
            continue

        start = pos
        quote_char = line[pos] if line[pos] in QUOTES else ""
        if quote_char:
            pos += 1
        terminated = not quote_char
        chars: list[str] = []

        while pos < length:
            char = line[pos]
            if char == "\\":
                if pos + 1 < length and (quote_char or not line[pos + 1].isspace()):
                    following = line[pos + 1]
                    chars.append(following if following in _ESCAPES else char + following)
                    pos += 2
                else:
                    chars.append(char)
                    pos += 1
                continue
            if quote_char:
                if char == quote_char:
                    pos += 1
                    terminated = True
                    break
            elif char.isspace():
                break
            chars.append(char)
            pos += 1

        if not terminated and strict:
            raise LexError(UNTERMINATED_QUOTE, start)

        tokens.append(
            Token(
                kind=TokenKind.QUOTED if quote_char else TokenKind.WORD,
                raw=line[start:pos],
                value="".join(chars),
                start=start,
                end=pos,
                terminated=terminated,
            )
        )
    return tokens


def tokenize(line: str) -> list[Token]:
    """Tokenize a complete command line.

    Args:
        line: The raw command line

    Returns:
        The tokens in source order

    Raises:
        LexError: if a quoted token is not closed before the end of the line
    """
    return _scan(line, strict=True)


def tokenize_prefix(text: str) -> list[Token]:
    """Tokenize a line being edited, never failing.

    An unclosed quoted token at the end is returned with `terminated=False`.
    """
    return _scan(text, strict=False)


def tokens_at_cursor(line: str, cursor: int) -> tuple[list[Token], Token | None]:
    """Split the text before `cursor` into completed tokens and the token being typed.

    Args:
        line: The full line
        cursor: Cursor offset, clamped to the line boundaries

    Returns:
        Tuple of (completed tokens, active token). The active token is None when the
        cursor stands on a fresh slot (empty line or after a separator).
    """
    cursor = max(0, min(cursor, len(line)))
    prefix = line[:cursor]
    tokens = tokenize_prefix(prefix)
    if tokens and tokens[-1].end == len(prefix):
        return tokens[:-1], tokens[-1]
    return tokens, None


def quote(value: str) -> str:
    """Return `value` written so that `tokenize` yields it back as one token."""
    if value and not any(char.isspace() or char in QUOTES or char == "\\" for char in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
