"""Tests for InputWidget and QuestionWidget."""

from __future__ import annotations

import asyncio

import pytest

from pi.termwin.components.input import InputWidget, QuestionWidget
from pi.termwin.components.text import TextWidget
from pi.termwin.config import TermwinSettings
from pi.termwin.readline import LineReader
from pi.termwin.window import Window

from .virtual_terminal import VirtualTerminal


def _make(
    prompt: str | None = None, **kwargs: object
) -> tuple[InputWidget, LineReader, VirtualTerminal, list[str]]:
    term = VirtualTerminal()
    reader = LineReader(term)
    lines: list[str] = []
    widget = InputWidget(
        reader,
        lines.append,
        prompt=prompt,
        terminal=term,
        settings=TermwinSettings(),
        **kwargs,  # type: ignore[arg-type]
    )
    return widget, reader, term, lines


def _type(reader: LineReader, text: str) -> None:
    for ch in text:
        reader.handle_input(ch)


class TestInputPrompt:
    def test_default_prompt(self) -> None:
        widget, reader, _, _ = _make()
        assert widget.get_prompt() == "> "
        assert reader.get_prompt() == "> "

    def test_prompt_from_settings(self) -> None:
        reader = LineReader(VirtualTerminal())
        InputWidget(
            reader,
            lambda line: None,
            terminal=VirtualTerminal(),
            settings=TermwinSettings(default_prompt="$ "),
        )
        assert reader.get_prompt() == "$ "

    def test_prompt_is_backed_by_reader(self) -> None:
        widget, reader, _, _ = _make("name? ")
        assert reader.get_prompt() == "name? "
        widget.set_prompt("age? ")
        assert reader.get_prompt() == "age? "
        reader.set_prompt("city? ")
        assert widget.prompt == "city? "

    def test_prompt_property_setter(self) -> None:
        widget, reader, _, _ = _make()
        widget.prompt = ">> "
        assert reader.get_prompt() == ">> "

    def test_question_widget_uses_question_as_prompt(self) -> None:
        term = VirtualTerminal()
        reader = LineReader(term)
        QuestionWidget(
            reader, "Your name? ", lambda line: None, terminal=term,
            settings=TermwinSettings(),
        )
        assert reader.get_prompt() == "Your name? "


class TestInputRenderSync:
    def test_render_returns_nothing(self) -> None:
        widget, _, _, _ = _make()
        assert widget.render() is None

    def test_render_subscribes_once(self) -> None:
        widget, reader, _, _ = _make()
        for _ in range(4):
            widget.render()
        assert widget.subscribed is True
        assert reader.line_listener_count() == 1

    def test_without_loop_prompt_follows_window_paint(self) -> None:
        widget, _, term, _ = _make("? ")
        window = Window("main", [TextWidget("Title"), widget], terminal=term)
        window.render()
        assert term.calls == [
            "clear_screen", "hide_cursor", "write", "show_cursor", "write",
        ]
        assert term.writes == ["Title\n", "\r? "]
        assert term.cursor_visible is True

    def test_without_loop_prompt_waits_for_painted(self) -> None:
        widget, _, term, _ = _make("? ")
        widget.render()
        widget.render()
        assert term.calls == []
        widget.painted()
        assert term.calls == ["show_cursor", "write"]
        assert term.output == "\r? "
        widget.painted()
        assert term.calls.count("show_cursor") == 1

    def test_without_loop_nested_repaint_prompts_once_at_the_end(self) -> None:
        widget, _, term, _ = _make("? ")
        label = TextWidget("first")
        window = Window("main", [label, widget], terminal=term)

        class SwapsLabel(TextWidget):
            def render(self) -> str:
                if label.text == "first":
                    label.set_text("second")
                return super().render()

        window.add(SwapsLabel("tail"))
        window.render()
        assert window.repaint_count == 2
        assert term.calls.count("show_cursor") == 1
        assert term.calls[-2:] == ["show_cursor", "write"]
        assert term.output.endswith("\r? ")

    def test_finalize_drops_queued_prompt(self) -> None:
        widget, _, term, _ = _make("? ")
        widget.render()
        widget.finalize()
        widget.painted()
        assert term.calls == []

    def test_default_terminal_is_shared(self) -> None:
        reader = LineReader(VirtualTerminal())
        widget = InputWidget(reader, lambda line: None, settings=TermwinSettings())
        window = Window("main", settings=TermwinSettings())
        assert widget.terminal is window.terminal

    def test_submitted_lines_reach_callback(self) -> None:
        widget, reader, _, lines = _make()
        widget.render()
        _type(reader, "hello\r")
        _type(reader, "again\r")
        assert lines == ["hello", "again"]

    def test_no_callback_before_render(self) -> None:
        _, reader, _, lines = _make()
        _type(reader, "early\r")
        assert lines == []

    def test_finalize_unsubscribes(self) -> None:
        widget, reader, _, lines = _make()
        widget.render()
        widget.finalize()
        assert widget.subscribed is False
        assert reader.line_listener_count() == 0
        _type(reader, "late\r")
        assert lines == []

    def test_window_removal_finalizes_input(self) -> None:
        widget, reader, term, _ = _make()
        window = Window("main", [TextWidget("Name:"), widget], terminal=term)
        window.render()
        window.remove(1)
        assert reader.line_listener_count() == 0


class TestInputSize:
    def test_defaults(self) -> None:
        widget, _, _, _ = _make()
        assert widget.size.height == -1
        assert widget.size.width == 80

    def test_percentages_and_full(self) -> None:
        widget, _, _, _ = _make(height="50%", width="full")
        assert widget.size.height == 12
        assert widget.size.width == 80

    def test_fixed_numbers(self) -> None:
        widget, _, _, _ = _make(height=3, width=20)
        assert (widget.size.height, widget.size.width) == (3, 20)


class TestInputRenderDeferred:
    @pytest.mark.asyncio
    async def test_prompt_waits_for_next_tick(self) -> None:
        widget, _, term, _ = _make("? ")
        widget.render()
        assert term.calls == []
        await asyncio.sleep(0)
        assert term.calls == ["show_cursor", "write"]
        assert term.cursor_visible is True

    @pytest.mark.asyncio
    async def test_prompt_follows_window_paint(self) -> None:
        widget, _, term, _ = _make("? ")
        window = Window("main", [TextWidget("Name:"), widget], terminal=term)
        window.render()
        assert term.calls == ["clear_screen", "hide_cursor", "write"]
        assert term.cursor_visible is False
        await asyncio.sleep(0)
        assert term.calls[3:] == ["show_cursor", "write"]
        assert term.output == "Name:\n\r? "
        assert term.cursor_visible is True

    @pytest.mark.asyncio
    async def test_back_to_back_renders_prompt_once(self) -> None:
        widget, _, term, _ = _make("? ")
        widget.render()
        widget.render()
        await asyncio.sleep(0)
        assert term.calls.count("show_cursor") == 1

    @pytest.mark.asyncio
    async def test_finalize_cancels_pending_prompt(self) -> None:
        widget, _, term, _ = _make("? ")
        widget.render()
        widget.finalize()
        await asyncio.sleep(0)
        assert term.calls == []

    @pytest.mark.asyncio
    async def test_reload_after_line_repaints_and_prompts(self) -> None:
        term = VirtualTerminal()
        reader = LineReader(term)
        greeting = TextWidget("Who are you?")

        def on_line(line: str) -> None:
            greeting.set_text(f"Hello, {line}")

        widget = InputWidget(
            reader, on_line, prompt="> ", terminal=term, settings=TermwinSettings()
        )
        window = Window("main", [greeting, widget], terminal=term)
        window.render()
        await asyncio.sleep(0)
        _type(reader, "ann\r")
        await asyncio.sleep(0)
        assert window.repaint_count == 2
        assert term.output == "Hello, ann\n\r> "
