from __future__ import annotations

from typing import List

from textual.widgets.text_area import Selection

from markdown_engine.adapters.textual import TextualMarkdownAdapter, TextualUIHooks
from markdown_engine.buffer import MarkdownDocument


class FakeTextArea:
    """Stand-in for ``textual.widgets.TextArea`` exposing the used surface."""

    def __init__(self, text: str, *, read_only: bool = False) -> None:
        self.text = text
        self.selection = Selection.cursor((0, 0))
        self.read_only = read_only

    def replace(self, insert: str, start, end) -> None:
        document = MarkdownDocument.from_text(self.text)
        lo = document.offset_for_location(start)
        hi = document.offset_for_location(end)
        self.text = self.text[:lo] + insert + self.text[hi:]


def make_adapter(text_area: FakeTextArea, **hooks) -> TextualMarkdownAdapter:
    return TextualMarkdownAdapter(text_area, TextualUIHooks(**hooks))


def test_apply_formats_widget_selection() -> None:
    area = FakeTextArea("first\nhello world")
    area.selection = Selection((1, 0), (1, 5))
    adapter = make_adapter(area)

    caret = adapter.apply("bold")

    assert area.text == "first\n**hello** world"
    assert caret == 8
    assert area.selection == Selection.cursor((1, 2))


def test_apply_handles_reversed_selection() -> None:
    area = FakeTextArea("abc")
    area.selection = Selection((0, 2), (0, 1))
    adapter = make_adapter(area)

    adapter.apply("heading2")

    assert area.text == "a## bc"


def test_handle_key_dispatches_shortcut() -> None:
    area = FakeTextArea("hello world")
    area.selection = Selection((0, 6), (0, 11))
    statuses: List[str] = []
    events: List[str] = []
    adapter = make_adapter(
        area,
        update_status=statuses.append,
        handle_event=lambda name, payload: events.append(name),
    )

    result = adapter.handle_key("ctrl+i")

    assert result.consumed
    assert area.text == "hello *world*"
    assert area.selection == Selection.cursor((0, 7))
    assert statuses == ["italic"]
    assert events == ["format.applied"]


def test_handle_key_respects_read_only_widget() -> None:
    area = FakeTextArea("hello", read_only=True)
    adapter = make_adapter(area)

    result = adapter.handle_key("ctrl+b")

    assert not result.consumed
    assert area.text == "hello"


def test_unbound_key_leaves_widget_untouched() -> None:
    area = FakeTextArea("hello")
    logs: List[str] = []
    adapter = make_adapter(area, log=logs.append)

    result = adapter.handle_key("ctrl+z")

    assert result.status == "unbound"
    assert area.text == "hello"
    assert any(line.startswith("key ->") for line in logs)


def test_host_edits_sync_into_buffer() -> None:
    area = FakeTextArea("one")
    adapter = make_adapter(area)
    adapter.handle_key("ctrl+q")

    area.text = "one two"
    area.selection = Selection((0, 4), (0, 7))
    adapter.handle_key("ctrl+b")

    mirror = adapter.pull_buffer()
    assert mirror.text == "one **two**"
    assert area.text == mirror.text


def test_handle_key_accepts_separate_modifiers() -> None:
    area = FakeTextArea("hello world")
    area.selection = Selection((0, 0), (0, 5))
    adapter = make_adapter(area)

    result = adapter.handle_key("b", modifiers=("meta",))

    assert result.consumed
    assert area.text == "**hello** world"
