"""Input widget - line-driven prompt backed by a ``LineSource``."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pi.termwin.config import TermwinSettings, load_settings
from pi.termwin.events import Element
from pi.termwin.sizing import SizeValue, WidgetSize
from pi.termwin.terminal import default_terminal

if TYPE_CHECKING:
    from pi.termwin.readline import LineHandler, LineSource
    from pi.termwin.terminal import Terminal

logger = logging.getLogger(__name__)


class InputWidget(Element):
    """Input widget - calls *callback* with every line the reader submits.

    The line subscription is made on the first ``render`` only.  After each
    render the cursor is shown and the prompt re-issued once the window has
    finished clearing and repainting: on the next turn of the event loop, or
    from the window's ``painted`` hook when no loop is running.
    """

    def __init__(
        self,
        reader: LineSource,
        callback: LineHandler,
        *,
        prompt: str | None = None,
        height: SizeValue | None = None,
        width: SizeValue | None = None,
        terminal: Terminal | None = None,
        settings: TermwinSettings | None = None,
    ) -> None:
        super().__init__()
        settings = settings if settings is not None else load_settings()
        self._reader = reader
        self._callback = callback
        self._terminal: Terminal = (
            terminal if terminal is not None else default_terminal(settings.write_log)
        )
        self.size = WidgetSize.from_preferences(self._terminal, height, width)
        self.subscribed: bool = False
        self._pending: asyncio.Handle | None = None
        self._prompt_due: bool = False

        self.set_prompt(prompt if prompt is not None else settings.default_prompt)

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    # -- prompt pass-through ------------------------------------------------

    def get_prompt(self) -> str:
        return self._reader.get_prompt()

    def set_prompt(self, text: str) -> None:
        self._reader.set_prompt(text)

    @property
    def prompt(self) -> str:
        return self.get_prompt()

    @prompt.setter
    def prompt(self, value: str) -> None:
        self.set_prompt(value)

    # -- Widget -------------------------------------------------------------

    def render(self) -> None:
        if not self.subscribed:
            self._reader.on_line(self._callback)
            self.subscribed = True
            logger.debug("Input widget subscribed to line events")
        self._schedule_prompt()

    def painted(self) -> None:
        if self._prompt_due:
            self._show_prompt()

    def finalize(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._prompt_due = False
        self._reader.off_line(self._callback)
        self.subscribed = False
        logger.debug("Input widget released line events")

    # -- internals ----------------------------------------------------------

    def _schedule_prompt(self) -> None:
        """Queue the prompt to follow the paint currently in progress."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running event loop -- wait for the window's painted hook
            self._prompt_due = True
            return
        if self._pending is not None:
            self._pending.cancel()
        self._pending = loop.call_soon(self._show_prompt)

    def _show_prompt(self) -> None:
        self._pending = None
        self._prompt_due = False
        self._terminal.show_cursor()
        self._reader.prompt_now()


class QuestionWidget(InputWidget):
    """Input widget whose prompt is a question."""

    def __init__(
        self,
        reader: LineSource,
        question: str,
        callback: LineHandler,
        **kwargs: object,
    ) -> None:
        super().__init__(reader, callback, prompt=question, **kwargs)  # type: ignore[arg-type]
