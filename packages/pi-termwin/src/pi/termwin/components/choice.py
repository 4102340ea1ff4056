"""Choice widget - a ragged grid of labels navigated with the arrow keys."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence, Union

from pi.termwin.config import TermwinSettings, load_settings
from pi.termwin.errors import InvalidChoicesError
from pi.termwin.events import Element
from pi.termwin.utils import pad_to_width, visible_width

if TYPE_CHECKING:
    from pi.termwin.keys import KeyEvent
    from pi.termwin.readline import KeypressSource

logger = logging.getLogger(__name__)

ChoiceGrid = tuple[tuple[str, ...], ...]
ChoiceInput = Sequence[Union[str, Sequence[str]]]


@dataclass(frozen=True)
class MatrixIndex:
    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.row}-{self.column}"


ChoiceCallback = Callable[[MatrixIndex, str, ChoiceGrid], None]


def normalize_choices(choices: ChoiceInput) -> ChoiceGrid:
    """Turn bare strings into single-label rows and freeze the grid."""
    grid = tuple(
        (item,) if isinstance(item, str) else tuple(item) for item in choices
    )
    if not grid:
        raise InvalidChoicesError("Choice grid has no rows")
    for row_index, row in enumerate(grid):
        if not row:
            raise InvalidChoicesError(f"Choice row {row_index} is empty")
    return grid


class ChoiceWidget(Element):
    """Grid of choices with wrap-around arrow-key navigation.

    Up/down move between rows and left/right within the current row, all
    wrapping at the edges.  Every move reloads the owning window; return
    commits the selection to *callback* without reloading.
    """

    def __init__(
        self,
        choices: ChoiceInput,
        callback: ChoiceCallback,
        *,
        keys: KeypressSource,
        settings: TermwinSettings | None = None,
    ) -> None:
        super().__init__()
        self._grid = normalize_choices(choices)
        self._callback = callback
        self._keys = keys
        self._settings = settings if settings is not None else load_settings()
        self._row: int = 0
        self._column: int = 0
        self.subscribed: bool = False

    @property
    def grid(self) -> ChoiceGrid:
        return self._grid

    @property
    def selection(self) -> MatrixIndex:
        return MatrixIndex(self._row, self._column)

    @property
    def selected_label(self) -> str:
        return self._grid[self._row][self._column]

    # -- Widget -------------------------------------------------------------

    def render(self) -> str:
        if not self.subscribed:
            self._keys.on_keypress(self.handle_key)
            self.subscribed = True
            logger.debug("Choice widget subscribed to keypress events")

        widths = self._column_widths()
        selected = self._settings.selected_prefix
        unselected = self._settings.unselected_prefix

        lines: list[str] = []
        for row_index, row in enumerate(self._grid):
            cells: list[str] = []
            for column_index, label in enumerate(row):
                is_selected = (
                    row_index == self._row and column_index == self._column
                )
                prefix = selected if is_selected else unselected
                cells.append(pad_to_width(prefix + label, widths[column_index]))
            lines.append(self._settings.cell_separator.join(cells).rstrip() + "\n")
        return "".join(lines)

    def finalize(self) -> None:
        self._keys.off_keypress(self.handle_key)
        self.subscribed = False
        logger.debug("Choice widget released keypress events")

    # -- navigation ---------------------------------------------------------

    def handle_key(self, key: KeyEvent) -> None:
        row_count = len(self._grid)
        name = key.name

        if name == "up":
            self._move_to_row((self._row - 1 + row_count) % row_count)
        elif name == "down":
            self._move_to_row((self._row + 1) % row_count)
        elif name == "left":
            column_count = len(self._grid[self._row])
            self._column = (self._column - 1 + column_count) % column_count
        elif name == "right":
            column_count = len(self._grid[self._row])
            self._column = (self._column + 1) % column_count
        elif name in ("return", "enter"):
            index = self.selection
            logger.debug("Choice committed at %s", index)
            self._callback(index, self.selected_label, self._grid)
            return
        else:
            return

        logger.debug("Choice selection moved to %s", self.selection)
        self.reload()

    def _move_to_row(self, row: int) -> None:
        self._row = row
        # Keep the column inside the (possibly shorter) new row
        self._column = min(self._column, len(self._grid[row]) - 1)

    def _column_widths(self) -> list[int]:
        prefix_width = max(
            visible_width(self._settings.selected_prefix),
            visible_width(self._settings.unselected_prefix),
        )
        widths: list[int] = []
        for row in self._grid:
            for column_index, label in enumerate(row):
                width = prefix_width + visible_width(label)
                if column_index == len(widths):
                    widths.append(width)
                elif width > widths[column_index]:
                    widths[column_index] = width
        return widths
