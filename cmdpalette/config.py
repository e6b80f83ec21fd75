"""Typed access to configuration sections."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    import logging

    from .validation import ConfigItems

__all__ = ["BOOL_WORDS", "FALSY_WORDS", "TRUTHY_WORDS", "Configuration", "coerce_to_bool"]

T = TypeVar("T")

TRUTHY_WORDS = frozenset({"true", "yes", "on", "1", "enabled"})
FALSY_WORDS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_WORDS = TRUTHY_WORDS | FALSY_WORDS


def coerce_to_bool(value: Any, default: bool = False) -> bool:  # noqa: ANN401
    """Read a loosely typed boolean.

    None gives `default`. Strings are false when blank or one of FALSY_WORDS
    (case-insensitive) and true otherwise; other values use their truth value.
    """
    if value is None:
        return default
    if isinstance(value, str):
        word = value.strip().lower()
        return bool(word) and word not in FALSY_WORDS
    return bool(value)


class Configuration(dict):
    """One configuration section.

    Lookups fall back to the schema defaults, then to the caller's default. The
    typed getters log a warning and return the default when a value does not
    convert.

    Args:
        logger: Where conversion warnings go
        schema: Fields whose defaults back the lookups
    """

    def __init__(self, *args: Any, logger: logging.Logger, schema: ConfigItems | None = None, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self.log = logger
        self.defaults: dict[str, Any] = {}
        if schema is not None:
            self.set_schema(schema)

    def set_schema(self, schema: ConfigItems) -> None:
        """Use the defaults of `schema` for missing keys."""
        self.defaults = schema.defaults()

    def get(self, name: str, default: Any = None) -> Any:  # type: ignore[override]  # noqa: ANN401
        """Return the value of `name`, its schema default, or `default`."""
        if name in self:
            return self[name]
        return self.defaults.get(name, default)

    def _convert(self, name: str, convert: Callable[[Any], T], default: T) -> T:
        value = self.get(name)
        if value is None:
            return default
        try:
            return convert(value)
        except (TypeError, ValueError):
            self.log.warning("Ignoring %s = %r: not a valid %s", name, value, getattr(convert, "__name__", "value"))
            return default

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Boolean value of `name` (see `coerce_to_bool`)."""
        return coerce_to_bool(self.get(name), default)

    def get_int(self, name: str, default: int = 0) -> int:
        return self._convert(name, int, default)

    def get_float(self, name: str, default: float = 0.0) -> float:
        return self._convert(name, float, default)

    def get_str(self, name: str, default: str = "") -> str:
        return self._convert(name, str, default)

    def has_explicit(self, name: str) -> bool:
        """Tell whether `name` is set in the section itself rather than defaulted."""
        return name in self
