"""Exception hierarchy for pi-termwin.

Every error is raised synchronously to the immediate caller. Each class also
derives from the closest built-in exception so callers may catch either.
"""

from __future__ import annotations


class TermwinError(Exception):
    """Base class for all pi-termwin errors."""


class WindowNotFoundError(TermwinError, LookupError):
    """A window name is not present in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Window not found: {name!r}")
        self.name = name


class InvariantViolationError(TermwinError):
    """A registry mutation did not produce the expected post-state."""


class WidgetIndexError(TermwinError, IndexError):
    """A container index is outside the container's bounds."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(
            f"Widget index {index} out of range for container of {length}"
        )
        self.index = index
        self.length = length


class InvalidChoicesError(TermwinError, ValueError):
    """A choice grid is empty or contains an empty row."""


class InvalidSizeError(TermwinError, ValueError):
    """A size preference could not be resolved."""


class ReloadRecursionError(TermwinError, RecursionError):
    """Nested reload-triggered repaints exceeded the configured depth."""
