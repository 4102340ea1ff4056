"""Widget composition: the ``Widget`` protocol, ``Container`` and ``Window``.

A ``Container`` owns an ordered list of widgets, concatenates their render
output and re-emits any child's ``reload`` as its own.  A ``Window`` owns one
root container and repaints the whole terminal whenever that container
reloads, so a state change anywhere in the tree reaches the screen without
the widget knowing which window it lives in.
"""

from __future__ import annotations

import logging
import weakref
from typing import Protocol, Sequence, Union, runtime_checkable

from pi.termwin.config import TermwinSettings, load_settings
from pi.termwin.errors import ReloadRecursionError, TermwinError, WidgetIndexError
from pi.termwin.events import RELOAD, Element, EventSource
from pi.termwin.terminal import Terminal, default_terminal

logger = logging.getLogger(__name__)

__all__ = ["Widget", "WidgetInit", "Container", "Window"]


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class Widget(Protocol):
    """A renderable, finalize-able element with an embedded event source."""

    events: EventSource

    def render(self) -> str | None:
        """Return this widget's text fragment, or ``None`` for nothing."""
        ...

    def painted(self) -> None:
        """Run work that must follow the window's write, e.g. a prompt."""
        ...

    def finalize(self) -> None:
        """Release any subscriptions held on external event sources."""
        ...

    def reload(self) -> None:
        """Emit ``RELOAD`` on this widget's event source."""
        ...


WidgetInit = Union[Widget, Sequence[Widget], None]

# Widget -> the one container that currently holds it
_owners: weakref.WeakKeyDictionary[Widget, Container] = weakref.WeakKeyDictionary()


def _as_widget_list(widgets: WidgetInit) -> list[Widget]:
    if widgets is None:
        return []
    if isinstance(widgets, Widget):
        return [widgets]
    return list(widgets)


# ---------------------------------------------------------------------------
# Container
# ---------------------------------------------------------------------------


class Container(Element):
    """An ordered owner of child widgets.

    Children are subscribed on insertion so their ``reload`` bubbles through
    this container's own event source.
    """

    def __init__(self, widgets: WidgetInit = None) -> None:
        super().__init__()
        self._children: list[Widget] = []
        for widget in _as_widget_list(widgets):
            self._attach(widget, len(self._children))

    @property
    def children(self) -> tuple[Widget, ...]:
        return tuple(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def add(self, widget: Widget, index: int = -1) -> Container:
        """Insert *widget* before *index*; a negative index appends."""
        position = len(self._children) if index < 0 else index
        self._attach(widget, position)
        return self

    def remove(self, index: int) -> Container:
        """Remove the child at *index* and finalize it."""
        position = self._normalize(index)
        self._detach(self._children.pop(position))
        return self

    def replace(self, widget: Widget, index: int) -> Container:
        """Swap the child at *index* for *widget*, finalizing the old one."""
        position = self._normalize(index)
        self._check_not_owned(widget)
        self._detach(self._children.pop(position))
        self._attach(widget, position)
        return self

    def render(self) -> str:
        """Concatenate each child's render output in order."""
        return "".join(child.render() or "" for child in self._children)

    def painted(self) -> None:
        for child in list(self._children):
            child.painted()

    def finalize(self) -> None:
        pass

    # -- internals ----------------------------------------------------------

    def _normalize(self, index: int) -> int:
        length = len(self._children)
        if not -length <= index < length:
            raise WidgetIndexError(index, length)
        return index % length

    def _check_not_owned(self, widget: Widget) -> None:
        if widget is self:
            raise TermwinError("A container cannot contain itself")
        owner = _owners.get(widget)
        if owner is self:
            raise TermwinError("Widget already belongs to this container")
        if owner is not None:
            raise TermwinError("Widget already belongs to another container")

    def _attach(self, widget: Widget, position: int) -> None:
        self._check_not_owned(widget)
        self._children.insert(position, widget)
        _owners[widget] = self
        widget.events.subscribe(RELOAD, self._bubble_reload)

    def _detach(self, widget: Widget) -> None:
        widget.events.unsubscribe(RELOAD, self._bubble_reload)
        _owners.pop(widget, None)
        widget.finalize()

    def _bubble_reload(self) -> None:
        self.reload()


# ---------------------------------------------------------------------------
# Window
# ---------------------------------------------------------------------------


class Window(Element):
    """A named, paintable root of one widget tree.

    Owns a root ``Container`` (composition, not inheritance) and repaints the
    terminal each time that container reloads.
    """

    def __init__(
        self,
        name: str,
        widgets: WidgetInit = None,
        *,
        terminal: Terminal | None = None,
        settings: TermwinSettings | None = None,
    ) -> None:
        super().__init__()
        self._name = name
        self._settings = settings if settings is not None else load_settings()
        self._terminal: Terminal = (
            terminal
            if terminal is not None
            else default_terminal(self._settings.write_log)
        )
        self._root = Container(widgets)
        self._root.events.subscribe(RELOAD, self.render)

        self._depth: int = 0
        self._repaint_count: int = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    @property
    def root(self) -> Container:
        return self._root

    @property
    def repaint_count(self) -> int:
        """Number of completed repaints."""
        return self._repaint_count

    # -- forwarding to the root container -----------------------------------

    def add(self, widget: Widget, index: int = -1) -> Window:
        self._root.add(widget, index)
        return self

    def remove(self, index: int) -> Window:
        self._root.remove(index)
        return self

    def replace(self, widget: Widget, index: int) -> Window:
        self._root.replace(widget, index)
        return self

    # -- painting -----------------------------------------------------------

    def render(self) -> None:
        """Clear the screen, hide the cursor and paint the whole tree once.

        Repaints nest when a widget reloads from inside another repaint;
        nesting deeper than ``max_reload_depth`` raises
        ``ReloadRecursionError``.  The tree's ``painted`` hook runs after the
        outermost write only, so anything it draws lands after the paint.
        """
        if self._depth >= self._settings.max_reload_depth:
            raise ReloadRecursionError(
                f"Window {self._name!r} exceeded "
                f"{self._settings.max_reload_depth} nested repaints"
            )
        self._depth += 1
        try:
            self._terminal.clear_screen()
            self._terminal.hide_cursor()
            output = self._root.render()
            self._terminal.write(output)
            if self._depth == 1:
                self._root.painted()
        finally:
            self._depth -= 1
        self._repaint_count += 1
        logger.debug(
            "Repainted window %r (%d chars, depth %d)",
            self._name,
            len(output),
            self._depth,
        )

    def finalize(self) -> None:
        pass
