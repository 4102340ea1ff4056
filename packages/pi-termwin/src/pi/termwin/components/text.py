"""Text widget - a static line of text."""

from __future__ import annotations

from pi.termwin.events import Element


class TextWidget(Element):
    """Renders its text followed by a newline."""

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        # Plain assignment does not repaint; callers batch changes and render.
        self._text = value

    def set_text(self, text: str) -> None:
        """Replace the text and reload the owning window."""
        self._text = text
        self.reload()

    def render(self) -> str:
        return f"{self._text}\n"
