"""Tests for key decoding and input splitting."""

from __future__ import annotations

import pytest

from pi.termwin.keys import KeyEvent, decode_key, split_sequences


class TestDecodeKey:
    @pytest.mark.parametrize(
        ("sequence", "name"),
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1b[C", "right"),
            ("\x1b[D", "left"),
            ("\x1bOA", "up"),
            ("\x1bOD", "left"),
            ("\r", "return"),
            ("\n", "enter"),
            ("\t", "tab"),
            ("\x7f", "backspace"),
            ("\x1b", "escape"),
            (" ", "space"),
            ("\x1b[3~", "delete"),
            ("\x1b[5~", "pageup"),
            ("\x1b[H", "home"),
        ],
    )
    def test_named_keys(self, sequence: str, name: str) -> None:
        key = decode_key(sequence)
        assert key.name == name
        assert key.sequence == sequence
        assert not (key.ctrl or key.meta)

    def test_modified_arrow(self) -> None:
        assert decode_key("\x1b[1;5A") == KeyEvent(
            name="up", ctrl=True, sequence="\x1b[1;5A"
        )
        assert decode_key("\x1b[1;2C").shift is True
        assert decode_key("\x1b[1;3D").meta is True

    def test_shift_tab(self) -> None:
        key = decode_key("\x1b[Z")
        assert key.name == "tab"
        assert key.shift is True

    def test_ctrl_letter(self) -> None:
        key = decode_key("\x03")
        assert key.name == "c"
        assert key.ctrl is True

    def test_meta_letter(self) -> None:
        key = decode_key("\x1bx")
        assert key.name == "x"
        assert key.meta is True

    def test_printable_letters(self) -> None:
        assert decode_key("a") == KeyEvent(name="a", sequence="a")
        assert decode_key("A") == KeyEvent(name="a", shift=True, sequence="A")
        assert decode_key("7").name == "7"

    def test_unknown_sequence_has_no_name(self) -> None:
        assert decode_key("\x1b[99~").name is None
        assert decode_key("").name is None


class TestSplitSequences:
    def test_plain_characters(self) -> None:
        assert split_sequences("abc") == ["a", "b", "c"]

    def test_mixed_input(self) -> None:
        assert split_sequences("a\x1b[Ab\r") == ["a", "\x1b[A", "b", "\r"]

    def test_repeated_arrows(self) -> None:
        assert split_sequences("\x1b[B\x1b[B\x1b[1;5C") == [
            "\x1b[B",
            "\x1b[B",
            "\x1b[1;5C",
        ]

    def test_crlf_is_one_return(self) -> None:
        assert split_sequences("x\r\n") == ["x", "\r\n"]
        assert decode_key("\r\n").name == "return"

    def test_lone_escape(self) -> None:
        assert split_sequences("\x1b") == ["\x1b"]

    def test_meta_and_ss3(self) -> None:
        assert split_sequences("\x1bx\x1bOB") == ["\x1bx", "\x1bOB"]
