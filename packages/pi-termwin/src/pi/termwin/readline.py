"""Line and keypress sources.

Widgets consume input through two small protocols: ``LineSource`` (submitted
lines plus a prompt) and ``KeypressSource`` (decoded key events).
``LineReader`` implements both on top of a ``Terminal``'s raw input stream.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from pi.termwin.events import EventSource
from pi.termwin.keys import KeyEvent, decode_key
from pi.termwin.terminal import Terminal

logger = logging.getLogger(__name__)

__all__ = [
    "KeypressHandler",
    "LineHandler",
    "KeypressSource",
    "LineSource",
    "LineReader",
]

LineHandler = Callable[[str], None]
KeypressHandler = Callable[[KeyEvent], None]

_LINE = "line"
_KEYPRESS = "keypress"


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class LineSource(Protocol):
    """Delivers submitted lines and owns the prompt text."""

    def on_line(self, handler: LineHandler) -> None: ...

    def off_line(self, handler: LineHandler) -> None: ...

    def prompt_now(self) -> None:
        """Re-display the current prompt (and any pending input)."""
        ...

    def get_prompt(self) -> str: ...

    def set_prompt(self, text: str) -> None: ...


class KeypressSource(Protocol):
    """Delivers one ``KeyEvent`` per keypress."""

    def on_keypress(self, handler: KeypressHandler) -> None: ...

    def off_keypress(self, handler: KeypressHandler) -> None: ...


# ---------------------------------------------------------------------------
# LineReader
# ---------------------------------------------------------------------------


class LineReader:
    """Keypress and line source fed by raw terminal input.

    Every input sequence is decoded and delivered to keypress handlers.
    While at least one line handler is registered the reader also keeps an
    editable line buffer: printable characters are echoed, backspace erases,
    and return submits the buffer to the line handlers.
    """

    def __init__(self, terminal: Terminal, prompt: str = "> ") -> None:
        self._terminal = terminal
        self._prompt = prompt
        self._buffer: str = ""
        self._events = EventSource()
        self._attached: bool = False

    # -- LineSource ---------------------------------------------------------

    def on_line(self, handler: LineHandler) -> None:
        self._events.subscribe(_LINE, handler)

    def off_line(self, handler: LineHandler) -> None:
        self._events.unsubscribe(_LINE, handler)

    def prompt_now(self) -> None:
        self._terminal.write("\r" + self._prompt + self._buffer)

    def get_prompt(self) -> str:
        return self._prompt

    def set_prompt(self, text: str) -> None:
        self._prompt = text

    # -- KeypressSource -----------------------------------------------------

    def on_keypress(self, handler: KeypressHandler) -> None:
        self._events.subscribe(_KEYPRESS, handler)

    def off_keypress(self, handler: KeypressHandler) -> None:
        self._events.unsubscribe(_KEYPRESS, handler)

    # -- introspection ------------------------------------------------------

    @property
    def line(self) -> str:
        """Text typed since the last submitted line."""
        return self._buffer

    def line_listener_count(self) -> int:
        return self._events.listener_count(_LINE)

    def keypress_listener_count(self) -> int:
        return self._events.listener_count(_KEYPRESS)

    # -- terminal wiring ----------------------------------------------------

    def attach(self, on_resize: Callable[[], None] | None = None) -> None:
        """Start the terminal with this reader as its input handler."""
        if self._attached:
            return
        self._terminal.start(self.handle_input, on_resize or (lambda: None))
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        self._terminal.stop()
        self._attached = False

    def handle_input(self, sequence: str) -> None:
        """Process one complete input sequence."""
        key = decode_key(sequence)
        self._events.emit(_KEYPRESS, key)

        if self._events.listener_count(_LINE) == 0:
            return

        if key.name in ("return", "enter"):
            line = self._buffer
            self._buffer = ""
            self._terminal.write("\n")
            logger.debug("Line submitted (%d chars)", len(line))
            self._events.emit(_LINE, line)
        elif key.name == "backspace":
            if self._buffer:
                self._buffer = self._buffer[:-1]
                self._terminal.write("\b \b")
        elif (
            not key.ctrl
            and not key.meta
            and len(sequence) == 1
            and sequence.isprintable()
        ):
            self._buffer += sequence
            self._terminal.write(sequence)
