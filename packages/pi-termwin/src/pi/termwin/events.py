"""Minimal publish/subscribe capability embedded by every element.

An ``EventSource`` maps signal names to ordered handler lists and calls them
synchronously on ``emit``.  ``Element`` is the thin base the built-in widgets
share: it owns one ``EventSource`` and turns ``reload()`` into a ``RELOAD``
emission that containers bubble up to their window.  ``painted()`` is the
hook a window calls on its tree after each completed paint.
"""

from __future__ import annotations

from typing import Any, Callable

__all__ = ["RELOAD", "EventSource", "Element", "Handler"]

RELOAD = "reload"

Handler = Callable[..., Any]


class EventSource:
    """Synchronous, re-entrant signal dispatcher."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def subscribe(self, signal: str, handler: Handler) -> None:
        """Register *handler* for *signal* (duplicates are called twice)."""
        self._handlers.setdefault(signal, []).append(handler)

    def unsubscribe(self, signal: str, handler: Handler) -> None:
        """Remove one registration of *handler* (no-op if absent)."""
        handlers = self._handlers.get(signal)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            del self._handlers[signal]

    def emit(self, signal: str, *args: Any) -> None:
        """Call every handler of *signal* in subscription order.

        The handler list is copied first so a handler may unsubscribe itself
        (or subscribe others) while the signal is being delivered.
        """
        for handler in list(self._handlers.get(signal, ())):
            handler(*args)

    def listener_count(self, signal: str) -> int:
        return len(self._handlers.get(signal, ()))


class Element:
    """Base for renderable elements: embedded events plus ``reload``."""

    def __init__(self) -> None:
        self.events = EventSource()

    def reload(self) -> None:
        """Signal that this element's rendered content may have changed."""
        self.events.emit(RELOAD)

    def render(self) -> str | None:
        return None

    def painted(self) -> None:
        """Called once the owning window has written a full paint."""

    def finalize(self) -> None:
        pass
