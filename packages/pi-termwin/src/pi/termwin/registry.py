"""Uniquely-keyed, insertion-ordered registry with a ``current`` pointer."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from pi.termwin.errors import InvariantViolationError, WindowNotFoundError

T = TypeVar("T")

_MISSING = object()


class Registry(Generic[T]):
    """Ordered mapping from name to value plus the current name.

    Membership is decided by key presence, never by the truthiness of the
    stored value, so falsy values are stored like any other.  ``current`` is
    either ``""`` or a key present in the registry.
    """

    def __init__(self) -> None:
        self._items: dict[str, T] = {}
        self._current: str = ""

    @property
    def current(self) -> str:
        return self._current

    def set_current(self, key: str) -> None:
        if key not in self._items:
            raise WindowNotFoundError(key)
        self._current = key

    def set(self, key: str, value: T) -> Registry[T]:
        """Store *value* under *key*; the first key stored becomes current."""
        self._items[key] = value
        if self._items.get(key, _MISSING) is not value:
            raise InvariantViolationError(f"Registry failed to store {key!r}")
        if not self._current:
            self._current = key
        return self

    def get(self, key: str) -> T | None:
        return self._items.get(key)

    def delete(self, key: str) -> Registry[T]:
        """Remove *key*; if it was current, the first remaining key takes over."""
        if key not in self._items:
            raise WindowNotFoundError(key)
        del self._items[key]
        if key in self._items:
            raise InvariantViolationError(f"Registry failed to delete {key!r}")
        if self._current == key:
            self._current = next(iter(self._items), "")
        return self

    def contains(self, key: str) -> bool:
        return key in self._items

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> list[tuple[str, T]]:
        return list(self._items.items())
