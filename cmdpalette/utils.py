"""Utilities."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["TimedCache", "merge"]

T = TypeVar("T")


def merge(merged: dict[str, Any], obj2: dict[str, Any], replace: bool = False) -> dict[str, Any]:
    """Deep-merge `obj2` into `merged`, in place, and return `merged`.

    Nested tables merge key by key and lists are concatenated, unless `replace`
    is set. Any other value from `obj2` overwrites the current one.

    Eg:
        merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}
    """
    for key, value in obj2.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merge(current, value, replace)
        elif isinstance(current, list) and isinstance(value, list) and not replace:
            current.extend(value)
        else:
            merged[key] = value
    return merged


@dataclass
class TimedCache(Generic[T]):
    """Time-boxed cache for a suggestion data source.

    Suggestion providers run on every keystroke; an argument type backed by an
    expensive lookup wraps it in a TimedCache so the lookup runs at most once
    per `retention_time` seconds.
    """

    loader: Callable[[], T]
    retention_time: float
    expiration_date: float = 0
    payload: T | None = None
    _clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    def get(self) -> T:
        """Return the cached payload, reloading it once expired."""
        now = self._clock()
        if self.payload is None or now >= self.expiration_date:
            self.payload = self.loader()
            self.expiration_date = now + self.retention_time
        return self.payload

    def invalidate(self) -> None:
        """Force a reload on the next `get`."""
        self.payload = None
        self.expiration_date = 0
