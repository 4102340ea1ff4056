"""Top-level controller: window registry, navigation and render dispatch."""

from __future__ import annotations

import logging

from pi.termwin.config import TermwinSettings, load_settings
from pi.termwin.errors import WindowNotFoundError
from pi.termwin.readline import LineReader
from pi.termwin.registry import Registry
from pi.termwin.terminal import Terminal, default_terminal
from pi.termwin.window import Window

logger = logging.getLogger(__name__)


class Application:
    """Owns the windows and paints whichever one is current.

    Only the current window is painted; ``goto`` switches and repaints.
    """

    def __init__(
        self,
        start_window: Window | None = None,
        *,
        terminal: Terminal | None = None,
        settings: TermwinSettings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else load_settings()
        self._terminal: Terminal = (
            terminal
            if terminal is not None
            else default_terminal(self._settings.write_log)
        )
        self._windows: Registry[Window] = Registry()
        self._reader: LineReader | None = None

        if start_window is not None:
            self.add(start_window)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    @property
    def size(self) -> tuple[int, int]:
        """Terminal ``(columns, rows)``."""
        return self._terminal.columns, self._terminal.rows

    @property
    def current(self) -> str:
        """Name of the current window, or ``""`` before any window is added."""
        return self._windows.current

    @property
    def current_window(self) -> Window | None:
        if not self._windows.current:
            return None
        return self._windows.get(self._windows.current)

    @property
    def windows(self) -> list[str]:
        return list(self._windows)

    # ------------------------------------------------------------------
    # Window management
    # ------------------------------------------------------------------

    def add(self, window: Window) -> Application:
        """Register *window* under its name; the first one becomes current.

        A different window already registered under that name is replaced in
        place and finalized.
        """
        displaced = self._windows.get(window.name)
        self._windows.set(window.name, window)
        if displaced is not None and displaced is not window:
            displaced.finalize()
            logger.debug("Replaced window %r", window.name)
        else:
            logger.debug("Registered window %r", window.name)
        return self

    def remove(self, name: str) -> Application:
        """Unregister and finalize the window called *name*."""
        window = self._windows.get(name)
        self._windows.delete(name)
        if window is not None:
            window.finalize()
        logger.debug("Removed window %r", name)
        return self

    def goto(self, name: str) -> None:
        """Make *name* current and paint it.

        Raises ``WindowNotFoundError`` (leaving the current window untouched)
        when no window has that name.
        """
        if name not in self._windows:
            raise WindowNotFoundError(name)
        self._windows.set_current(name)
        logger.debug("Switched to window %r", name)
        self.render()

    def render(self) -> None:
        """Paint the current window (no-op before any window is added)."""
        window = self.current_window
        if window is None:
            logger.debug("Render requested with no window registered")
            return
        window.render()

    # ------------------------------------------------------------------
    # Terminal lifecycle
    # ------------------------------------------------------------------

    def start(self, reader: LineReader | None = None) -> LineReader:
        """Attach *reader* (or a new one) to the terminal and paint.

        Must be called from a running asyncio loop for input to flow.
        Returns the reader so widgets can be built against it.
        """
        if self._reader is None:
            self._reader = (
                reader
                if reader is not None
                else LineReader(self._terminal, self._settings.default_prompt)
            )
        self._reader.attach(on_resize=self.render)
        self.render()
        return self._reader

    def stop(self) -> None:
        if self._reader is not None:
            self._reader.detach()
