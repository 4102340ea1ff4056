"""Host terminal for windows: painting primitives plus keyboard input.

Windows only ever clear the screen, toggle the cursor and write one
paint, so the ``Terminal`` protocol is kept to those calls plus the
dimensions and the input lifecycle that a ``LineReader`` drives.
``ProcessTerminal`` is the real host on the process's stdin/stdout, and
``default_terminal`` hands out the one instance that windows, input widgets
and the application share when none is passed explicitly.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
import termios
import tty
from typing import Callable, Protocol

from pi.termwin.keys import split_sequences

logger = logging.getLogger(__name__)

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
# Erase display and scrollback, then home the cursor
CLEAR_SCREEN = "\x1b[2J\x1b[3J\x1b[H"

FALLBACK_SIZE = os.terminal_size((80, 24))

_READ_CHUNK = 4096


class Terminal(Protocol):
    """What a window, widget or line reader needs from the screen."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_screen(self) -> None: ...


class ProcessTerminal:
    """The controlling terminal of this process.

    ``start`` switches stdin to cbreak mode, watches SIGWINCH and feeds
    each decoded key sequence to ``on_input``; ``stop`` undoes all three.
    Paints go to stdout and, when *write_log* names a file, are appended to
    it as well.
    """

    def __init__(self, write_log: str = "") -> None:
        self.write_log = write_log
        self._on_input: Callable[[str], None] | None = None
        self._on_resize: Callable[[], None] | None = None
        self._saved_mode: list | None = None
        self._saved_sigwinch: signal.Handlers | None = None
        self._reading: bool = False

    @property
    def size(self) -> os.terminal_size:
        try:
            return os.get_terminal_size(sys.stdout.fileno())
        except (ValueError, OSError):
            return FALLBACK_SIZE

    @property
    def columns(self) -> int:
        return self.size.columns

    @property
    def rows(self) -> int:
        return self.size.lines

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        self._on_input = on_input
        self._on_resize = on_resize

        fd = sys.stdin.fileno()
        self._saved_mode = termios.tcgetattr(fd)
        # Output post-processing stays on so "\n" still returns the carriage
        tty.setcbreak(fd)

        self._saved_sigwinch = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._handle_sigwinch)

        self._watch_stdin()
        logger.debug("Terminal started at %dx%d", self.columns, self.rows)

    def stop(self) -> None:
        self._unwatch_stdin()

        if self._saved_sigwinch is not None:
            signal.signal(signal.SIGWINCH, self._saved_sigwinch)
            self._saved_sigwinch = None

        if self._saved_mode is not None:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None

        self.show_cursor()
        self._on_input = None
        self._on_resize = None
        logger.debug("Terminal stopped")

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._emit(data)
        if not self.write_log:
            return
        try:
            with open(self.write_log, "a", encoding="utf-8") as log:
                log.write(data)
        except OSError as exc:
            logger.debug("Write log %s unavailable: %s", self.write_log, exc)

    def hide_cursor(self) -> None:
        self._emit(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._emit(SHOW_CURSOR)

    def clear_screen(self) -> None:
        self._emit(CLEAR_SCREEN)

    def _emit(self, data: str) -> None:
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            # stdout gone (closed pipe, detached tty); nothing left to paint on
            pass

    # -- input --------------------------------------------------------------

    def _watch_stdin(self) -> None:
        if self._reading:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; keyboard input disabled")
            return
        loop.add_reader(sys.stdin.fileno(), self._read_stdin)
        self._reading = True

    def _unwatch_stdin(self) -> None:
        if not self._reading:
            return
        self._reading = False
        try:
            asyncio.get_running_loop().remove_reader(sys.stdin.fileno())
        except (RuntimeError, ValueError):
            logger.debug("stdin reader already gone with its event loop")

    def _read_stdin(self) -> None:
        try:
            chunk = os.read(sys.stdin.fileno(), _READ_CHUNK)
        except OSError:
            return
        if not chunk or self._on_input is None:
            return
        for sequence in split_sequences(chunk.decode("utf-8", errors="replace")):
            self._on_input(sequence)

    def _handle_sigwinch(self, signum: int, frame: object) -> None:
        if self._on_resize is not None:
            self._on_resize()


_shared: ProcessTerminal | None = None


def default_terminal(write_log: str = "") -> ProcessTerminal:
    """Return the process-wide ``ProcessTerminal``, creating it on first use.

    Only the first caller's *write_log* takes effect.
    """
    global _shared
    if _shared is None:
        _shared = ProcessTerminal(write_log=write_log)
    return _shared
