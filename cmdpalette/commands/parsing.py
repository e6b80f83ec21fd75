"""Docstring signature parsing.

The first docstring line of an extension command lists its slots before the
short description::

    <team:team> [member:player=captain] Describe a team member

`<...>` is required and `[...]` optional. The type defaults to `string`; an
optional slot may carry a default, kept as raw text and validated by the slot's
type at bind time.
"""

from __future__ import annotations

import re

from ..constants import DEFAULT_TYPE
from ..errors import InvalidDefinition
from .models import ArgumentSpec

__all__ = ["parse_docstring", "parse_slot"]

_ARG_PATTERN = re.compile(r"\s*(?P<open>[<\[])(?P<content>[^>\]]+)[>\]]")
_SLOT_PATTERN = re.compile(r"(?P<name>[^:=\s]+)(?::(?P<type>[^=\s]+))?(?:=(?P<default>.*))?")

NO_DESCRIPTION = "No description available."


def parse_slot(content: str, required: bool) -> ArgumentSpec:
    """Parse the inside of one `<...>` or `[...]` group.

    Args:
        content: e.g. "member:player=captain"
        required: True for `<...>`

    Returns:
        The argument spec

    Raises:
        InvalidDefinition: on malformed content, or a default on a required slot
    """
    match = _SLOT_PATTERN.fullmatch(content.strip())
    if not match:
        raise InvalidDefinition(content, "malformed argument signature")
    default = match.group("default")
    if required and default is not None:
        raise InvalidDefinition(match.group("name"), "required arguments cannot have a default")
    return ArgumentSpec(
        type_name=match.group("type") or DEFAULT_TYPE,
        name=match.group("name"),
        optional=not required,
        has_default=default is not None,
        default=default,
        default_is_raw=default is not None,
    )


def parse_docstring(docstring: str) -> tuple[list[ArgumentSpec], str, str]:
    """Split a command docstring into its slots and descriptions.

    Args:
        docstring: The docstring, as returned by `inspect.getdoc`

    Returns:
        Tuple of (args, short_description, full_description). The full
        description is the docstring without the slot groups.
    """
    if not docstring:
        return [], NO_DESCRIPTION, ""

    first_line, _, body = docstring.strip().partition("\n")
    args: list[ArgumentSpec] = []
    position = 0
    while match := _ARG_PATTERN.match(first_line, position):
        args.append(parse_slot(match.group("content"), required=match.group("open") == "<"))
        position = match.end()

    short_description = first_line[position:].strip() or NO_DESCRIPTION
    full_description = f"{short_description}\n{body}".strip() if body else short_description
    return args, short_description, full_description
