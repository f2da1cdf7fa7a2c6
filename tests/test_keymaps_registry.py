import pytest

from markdown_engine.actions import ActionContext, ActionResult
from markdown_engine.buffer import MarkdownBuffer
from markdown_engine.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    WhenClause,
    format_action_id,
    load_default_keymaps,
    toolbar_entries,
)
from markdown_engine.transform import Operation


def make_action(action_id: str = "test.action") -> ActionRef:
    return ActionRef(
        id=action_id,
        handler=lambda context, match: ActionResult(consumed=True, status=action_id),
    )


def make_binding(
    *,
    binding_id: str,
    token: str = "ctrl+k",
    action_id: str = "test.action",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        scope="editor",
        stroke=KeyStroke.parse(token),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def make_context(text: str = "hello world") -> ActionContext:
    return ActionContext(buffer=MarkdownBuffer.from_text(text))


def test_keystroke_normalizes_modifiers() -> None:
    assert KeyStroke.parse("Shift+Control+B").token == "ctrl+shift+b"
    assert KeyStroke("Tab").token == "tab"
    with pytest.raises(ValueError):
        KeyStroke.parse("+")


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="editor.ctrl+k")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(scope="editor")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="second"))
    assert [b.id for b in excinfo.value.conflicts] == ["first"]


def test_replace_binding_drops_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    registry.register_binding(make_binding(binding_id="second"), replace=True)

    assert [b.id for b in registry.iter_bindings()] == ["second"]


def test_disjoint_when_clauses_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action("a"))
    registry.register_action(make_action("b"))
    registry.register_binding(
        make_binding(binding_id="one", action_id="a", when=(WhenClause("readonly"),))
    )
    registry.register_binding(
        make_binding(binding_id="two", action_id="b", when=(WhenClause("readonly", False),))
    )

    match = registry.resolve(KeyStroke.parse("ctrl+k"), flags={"readonly": True})
    assert match is not None and match.action.id == "a"
    match = registry.resolve(KeyStroke.parse("ctrl+k"))
    assert match is not None and match.action.id == "b"


def test_binding_to_unknown_action_raises() -> None:
    registry = KeymapRegistry()
    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_default_shortcuts_format_selection() -> None:
    registry = load_default_keymaps(KeymapRegistry())
    context = make_context()
    context.buffer.select(0, 5)
    events: list[object] = []
    context.bus.subscribe("format.applied", events.append)

    result = registry.dispatch(context, KeyStroke.parse("ctrl+b"))

    assert result.consumed
    assert result.message == "bold"
    assert context.buffer.text == "**hello** world"
    assert events and events[0]["range"] == (0, 5)


def test_tab_indents_with_two_spaces() -> None:
    registry = load_default_keymaps(KeymapRegistry())
    context = make_context("ab")
    context.buffer.set_caret(1)

    registry.dispatch(context, KeyStroke("tab"))

    assert context.buffer.text == "a  b"
    assert context.buffer.state.caret == 3


def test_readonly_flag_blocks_default_shortcuts() -> None:
    registry = load_default_keymaps(KeymapRegistry())
    context = make_context()

    result = registry.dispatch(context, KeyStroke.parse("ctrl+i"), flags={"readonly": True})

    assert not result.consumed
    assert result.status == "unbound"
    assert context.buffer.text == "hello world"


def test_every_operation_has_an_action() -> None:
    registry = load_default_keymaps(KeymapRegistry())
    for operation in Operation:
        context = make_context("x")
        context.buffer.select(0, 1)
        result = registry.run_action(context, format_action_id(operation))
        assert result.message == operation.value


def test_toolbar_entries_follow_toolbar_order() -> None:
    registry = load_default_keymaps(KeymapRegistry())

    entries = toolbar_entries(registry)

    assert entries[0].action_id == "format.bold"
    assert entries[0].label == "Bold (Ctrl+B)"
    assert entries[0].shortcut == "ctrl+b"
    assert entries[-1].action_id == "document.export"
    assert entries[-1].shortcut is None
    assert len(entries) == len(Operation) + 1


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("meta+b", "**hello** world"),
        ("meta+i", "*hello* world"),
        ("cmd+b", "**hello** world"),
    ],
)
def test_meta_shortcuts_mirror_ctrl(token: str, expected: str) -> None:
    registry = load_default_keymaps(KeymapRegistry())
    context = make_context()
    context.buffer.select(0, 5)

    result = registry.dispatch(context, KeyStroke.parse(token))

    assert result.consumed
    assert context.buffer.text == expected
