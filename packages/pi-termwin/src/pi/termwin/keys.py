"""Keyboard input decoding for terminal applications.

Turns raw terminal input into ``KeyEvent`` descriptors (name plus modifier
flags), the shape keypress handlers receive.  Legacy xterm/VT sequences are
covered: arrows (plain, SS3, and ``CSI 1;<mod>`` modified forms), navigation
keys, control characters, and ESC-prefixed meta keys.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ESC = "\x1b"

# ---------------------------------------------------------------------------
# KeyEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """A decoded keypress.

    ``name`` is ``None`` for sequences that have no known name.
    """

    name: str | None = None
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    sequence: str = ""


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

_CSI_FINAL_TO_NAME: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

_CSI_TILDE_TO_NAME: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageup",
    6: "pagedown",
    7: "home",
    8: "end",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

_SIMPLE_KEYS: dict[str, str] = {
    "\r": "return",
    "\r\n": "return",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    " ": "space",
    ESC: "escape",
}

# CSI [<number>][;<modifier>]<final>
_CSI_RE = re.compile(r"^\x1b\[(\d*)(?:;(\d+))?([A-Za-z~])$")
# SS3 <final>
_SS3_RE = re.compile(r"^\x1bO([A-DHFPQRS])$")

_MOD_SHIFT = 1
_MOD_ALT = 2
_MOD_CTRL = 4


def _modifier_flags(raw: str | None) -> tuple[bool, bool, bool]:
    """Return ``(ctrl, meta, shift)`` for an xterm modifier parameter."""
    if not raw:
        return False, False, False
    bits = int(raw) - 1
    return bool(bits & _MOD_CTRL), bool(bits & _MOD_ALT), bool(bits & _MOD_SHIFT)


# ---------------------------------------------------------------------------
# decode_key
# ---------------------------------------------------------------------------


def decode_key(sequence: str) -> KeyEvent:  # noqa: C901
    """Decode one complete input *sequence* into a ``KeyEvent``."""
    if not sequence:
        return KeyEvent(sequence=sequence)

    if sequence in _SIMPLE_KEYS:
        return KeyEvent(name=_SIMPLE_KEYS[sequence], sequence=sequence)

    # --- CSI sequences ---
    csi = _CSI_RE.match(sequence)
    if csi is not None:
        number, modifier, final = csi.groups()
        ctrl, meta, shift = _modifier_flags(modifier)
        if final == "~":
            name = _CSI_TILDE_TO_NAME.get(int(number)) if number else None
        elif final == "Z":
            return KeyEvent(name="tab", shift=True, sequence=sequence)
        else:
            name = _CSI_FINAL_TO_NAME.get(final)
        return KeyEvent(
            name=name, ctrl=ctrl, meta=meta, shift=shift, sequence=sequence
        )

    # --- SS3 sequences (application cursor mode) ---
    ss3 = _SS3_RE.match(sequence)
    if ss3 is not None:
        return KeyEvent(name=_CSI_FINAL_TO_NAME[ss3.group(1)], sequence=sequence)

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(sequence) == 1 and 1 <= ord(sequence) <= 26:
        return KeyEvent(
            name=chr(ord(sequence) + ord("a") - 1), ctrl=True, sequence=sequence
        )

    # --- Meta + key (ESC prefix) ---
    if len(sequence) == 2 and sequence[0] == ESC:
        inner = decode_key(sequence[1])
        return KeyEvent(
            name=inner.name,
            ctrl=inner.ctrl,
            meta=True,
            shift=inner.shift,
            sequence=sequence,
        )

    # --- Plain printable character ---
    if len(sequence) == 1 and sequence.isprintable():
        if sequence.isalpha():
            return KeyEvent(
                name=sequence.lower(),
                shift=sequence.isupper(),
                sequence=sequence,
            )
        return KeyEvent(name=sequence, sequence=sequence)

    return KeyEvent(sequence=sequence)


# ---------------------------------------------------------------------------
# split_sequences
# ---------------------------------------------------------------------------


def _escape_length(data: str, pos: int) -> int:
    """Length of the escape sequence starting at ``data[pos]`` (an ESC)."""
    if pos + 1 >= len(data):
        return 1
    nxt = data[pos + 1]
    if nxt == "[":
        end = pos + 2
        while end < len(data):
            if 0x40 <= ord(data[end]) <= 0x7E:
                return end - pos + 1
            end += 1
        return len(data) - pos
    if nxt == "O":
        return min(3, len(data) - pos)
    # Meta key: ESC followed by a single character
    return 2


def split_sequences(data: str) -> list[str]:
    """Split a chunk of raw input into escape sequences and characters.

    A chunk read from stdin may hold several keypresses (fast typing,
    key repeat); each one is returned separately.
    """
    sequences: list[str] = []
    pos = 0
    while pos < len(data):
        if data[pos] == ESC:
            length = _escape_length(data, pos)
        elif data[pos] == "\r" and data[pos + 1 : pos + 2] == "\n":
            length = 2
        else:
            length = 1
        sequences.append(data[pos : pos + length])
        pos += length
    return sequences
