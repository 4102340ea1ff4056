"""Terminal text utilities: visible width measurement and padding."""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences and OSC 8 hyperlinks carry no visible width
_STRIP_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|\x1b\]8;;[^\x07]*\x07")

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # Emoji presentation, ZWJ sequences and flags render two cells wide
    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D) or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2
    if ord(g[0]) >= 0x1F000:
        return 2

    if unicodedata.category(g[0]) in ("Mn", "Me", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    ANSI escape sequences are ignored; non-ASCII text is measured per
    grapheme cluster and cached.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[stripped] = total
    return total


def pad_to_width(text: str, width: int) -> str:
    """Right-pad *text* with spaces to *width* visible columns."""
    return text + " " * max(0, width - visible_width(text))
