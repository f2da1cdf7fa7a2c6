import pytest

from markdown_engine.transform import (
    Operation,
    SelectionRangeError,
    apply_markdown,
    clamp_selection,
    insert_markdown,
)


@pytest.mark.parametrize(
    ("operation", "expected"),
    [
        ("bold", "a **word** b"),
        ("italic", "a *word* b"),
        ("strikethrough", "a ~~word~~ b"),
        ("heading1", "a # word b"),
        ("heading2", "a ## word b"),
        ("heading3", "a ### word b"),
        ("unorderedList", "a - word b"),
        ("orderedList", "a 1. word b"),
        ("quote", "a > word b"),
        ("code", "a `word` b"),
        ("codeblock", "a ```\nword\n``` b"),
        ("link", "a [word](url) b"),
        ("image", "a ![word](image-url) b"),
        ("horizontalRule", "a \n---\nword b"),
    ],
)
def test_templates_wrap_selection(operation: str, expected: str) -> None:
    assert insert_markdown("a word b", 2, 6, operation) == expected


def test_concrete_cases() -> None:
    assert insert_markdown("hello world", 0, 5, "bold") == "**hello** world"
    assert insert_markdown("hello world", 6, 6, "link") == "hello [link text](url)world"
    assert insert_markdown("line", 0, 4, "codeblock") == "```\nline\n```"
    assert insert_markdown("abc", 1, 2, "heading2") == "a## bc"


def test_empty_selection_still_applies_template() -> None:
    assert insert_markdown("ab", 1, 1, Operation.BOLD) == "a****b"
    assert insert_markdown("", 0, 0, "image") == "![alt text](image-url)"


def test_wrapping_twice_does_not_toggle() -> None:
    once = insert_markdown("text", 0, 4, "bold")
    twice = insert_markdown(once, 0, len(once), "bold")
    assert twice == "****text****"


def test_unknown_operation_is_identity() -> None:
    text = "some *markdown* here"
    result = apply_markdown(text, 0, len(text), "underline")
    assert result.text == text
    assert result.operation is None
    assert not result.applied


def test_horizontal_rule_goes_before_selection_mid_line() -> None:
    assert insert_markdown("one two", 4, 7, "horizontalRule") == "one \n---\ntwo"


@pytest.mark.parametrize("operation", [op.value for op in Operation] + ["nope"])
def test_boundaries_never_fail(operation: str) -> None:
    text = "boundary"
    assert insert_markdown(text, 0, 0, operation).endswith(text)
    assert insert_markdown(text, len(text), len(text), operation).startswith(text)


@pytest.mark.parametrize(
    ("operation", "selection", "caret"),
    [
        (Operation.BOLD, (0, 5), 2),
        (Operation.HEADING3, (0, 5), 4),
        (Operation.ORDERED_LIST, (0, 5), 3),
        (Operation.CODEBLOCK, (0, 5), 3),
        (Operation.HORIZONTAL_RULE, (0, 5), 5),
        (Operation.LINK, (0, 0), 10),
        (Operation.IMAGE, (0, 0), 10),
    ],
)
def test_suggested_caret(operation: Operation, selection: tuple[int, int], caret: int) -> None:
    result = apply_markdown("hello world", *selection, operation)
    assert result.caret == selection[0] + caret


def test_link_caret_lands_before_closing_paren() -> None:
    result = apply_markdown("go hello", 3, 8, "link")
    assert result.text == "go [hello](url)"
    assert result.text[result.caret] == ")"


def test_out_of_range_offsets_are_clamped() -> None:
    assert clamp_selection(5, -3, 99) == (0, 5)
    assert clamp_selection(5, 4, 1) == (1, 4)
    assert insert_markdown("abc", -1, 10, "italic") == "*abc*"
    assert insert_markdown("abc", 2, 1, "code") == "a`b`c"


def test_strict_mode_rejects_bad_offsets() -> None:
    with pytest.raises(SelectionRangeError) as excinfo:
        apply_markdown("abc", 0, 4, "bold", strict=True)
    assert excinfo.value.length == 3
    assert excinfo.value.end == 4


def test_operation_parse() -> None:
    assert Operation.parse("unorderedList") is Operation.UNORDERED_LIST
    assert Operation.parse(Operation.QUOTE) is Operation.QUOTE
    assert Operation.parse("Bold") is None
    assert Operation.HEADING2.heading_level == 2
    assert Operation.BOLD.heading_level == 0
