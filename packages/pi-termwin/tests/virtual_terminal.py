"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

All output is captured in a buffer for assertions, and every screen/cursor
primitive is counted so tests can check exactly how a repaint was issued.
"""

from __future__ import annotations

from typing import Callable


class VirtualTerminal:
    """In-memory terminal that records all writes for test inspection.

    Parameters
    ----------
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    """

    def __init__(self, rows: int = 24, columns: int = 80) -> None:
        self._rows = rows
        self._columns = columns
        self._buffer: list[str] = []
        self._started = False
        self._input_handler: Callable[[str], None] | None = None
        self._resize_handler: Callable[[], None] | None = None
        self.cursor_visible = True
        self.clear_count = 0
        # One entry per output primitive, in call order
        self.calls: list[str] = []

    # -- Terminal protocol: properties --------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def started(self) -> bool:
        return self._started

    # -- Terminal protocol: lifecycle ---------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        self._input_handler = on_input
        self._resize_handler = on_resize
        self._started = True

    def stop(self) -> None:
        self._started = False
        self._input_handler = None
        self._resize_handler = None

    # -- Terminal protocol: output ------------------------------------------

    def write(self, data: str) -> None:
        self._buffer.append(data)
        self.calls.append("write")

    def hide_cursor(self) -> None:
        self.cursor_visible = False
        self.calls.append("hide_cursor")

    def show_cursor(self) -> None:
        self.cursor_visible = True
        self.calls.append("show_cursor")

    def clear_screen(self) -> None:
        self.clear_count += 1
        self._buffer.clear()
        self.calls.append("clear_screen")

    # -- Test helpers -------------------------------------------------------

    @property
    def output(self) -> str:
        """Everything written since the last screen clear."""
        return "".join(self._buffer)

    @property
    def writes(self) -> list[str]:
        return list(self._buffer)

    def simulate_input(self, data: str) -> None:
        """Feed *data* into the registered input handler."""
        if self._input_handler is None:
            raise RuntimeError(
                "No input handler registered -- call start() first"
            )
        self._input_handler(data)

    def simulate_resize(self, rows: int | None = None, columns: int | None = None) -> None:
        if rows is not None:
            self._rows = rows
        if columns is not None:
            self._columns = columns
        if self._resize_handler is not None:
            self._resize_handler()
