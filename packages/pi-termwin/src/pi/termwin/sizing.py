"""Size preferences for interactive widgets.

A preference is recorded, never enforced: there is no layout engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from pi.termwin.errors import InvalidSizeError

if TYPE_CHECKING:
    from pi.termwin.terminal import Terminal

# int    ->  exact number of columns/rows
# "50%"  ->  percentage of the terminal dimension
# "full" ->  the whole terminal dimension
SizeValue = Union[int, str]

UNBOUNDED = -1


def resolve_size(value: SizeValue | None, reference_size: int) -> int | None:
    """Resolve a ``SizeValue`` against *reference_size*.

    * ``None``   -> ``None``
    * ``int``    -> returned as-is
    * ``"50%"``  -> ``math.floor(reference_size * 50 / 100)``
    * ``"full"`` -> ``reference_size``
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidSizeError(f"Invalid size value: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if value == "full":
            return reference_size
        if value.endswith("%"):
            try:
                pct = float(value[:-1])
            except ValueError:
                raise InvalidSizeError(f"Invalid size value: {value!r}") from None
            return math.floor(reference_size * pct / 100)
    raise InvalidSizeError(f"Invalid size value: {value!r}")


@dataclass(frozen=True)
class WidgetSize:
    height: int = UNBOUNDED
    width: int = UNBOUNDED

    @classmethod
    def from_preferences(
        cls,
        terminal: Terminal,
        height: SizeValue | None = None,
        width: SizeValue | None = None,
    ) -> WidgetSize:
        """Resolve preferences; height defaults to unbounded, width to the terminal."""
        resolved_height = resolve_size(height, terminal.rows)
        resolved_width = resolve_size(width, terminal.columns)
        return cls(
            height=UNBOUNDED if resolved_height is None else resolved_height,
            width=terminal.columns if resolved_width is None else resolved_width,
        )
