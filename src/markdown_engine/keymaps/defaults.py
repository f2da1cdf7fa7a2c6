"""Built-in toolbar actions and keyboard shortcuts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from markdown_engine.actions import FORMAT_HANDLERS, export_document, indent
from markdown_engine.transform import Operation

from .models import ActionRef, Binding, KeyStroke
from .registry import DEFAULT_SCOPE, KeymapRegistry


def format_action_id(operation: Operation) -> str:
    return f"format.{operation.name.lower()}"


# (operation, tooltip, icon) in toolbar order.
_TOOLBAR_FORMATS: tuple[tuple[Operation, str, str], ...] = (
    (Operation.BOLD, "Bold (Ctrl+B)", "bold"),
    (Operation.ITALIC, "Italic (Ctrl+I)", "italic"),
    (Operation.STRIKETHROUGH, "Strikethrough", "strikethrough"),
    (Operation.HEADING1, "Heading 1", "heading-1"),
    (Operation.HEADING2, "Heading 2", "heading-2"),
    (Operation.HEADING3, "Heading 3", "heading-3"),
    (Operation.UNORDERED_LIST, "Bullet List", "list"),
    (Operation.ORDERED_LIST, "Numbered List", "list-ordered"),
    (Operation.QUOTE, "Quote", "quote"),
    (Operation.CODE, "Inline Code", "code"),
    (Operation.CODEBLOCK, "Code Block", "code-block"),
    (Operation.LINK, "Link", "link"),
    (Operation.IMAGE, "Image", "image"),
    (Operation.HORIZONTAL_RULE, "Horizontal Line", "minus"),
)

EXPORT_ACTION = ActionRef(
    id="document.export",
    handler=export_document,
    label="Export .md File",
    icon="file-down",
)

INDENT_ACTION = ActionRef(id="format.indent", handler=indent, label="Indent")

DEFAULT_ACTIONS: tuple[ActionRef, ...] = tuple(
    ActionRef(
        id=format_action_id(operation),
        handler=FORMAT_HANDLERS[operation],
        label=label,
        icon=icon,
        metadata={"operation": operation.value},
    )
    for operation, label, icon in _TOOLBAR_FORMATS
) + (EXPORT_ACTION, INDENT_ACTION)

TOOLBAR_ACTION_IDS: tuple[str, ...] = tuple(
    format_action_id(operation) for operation, _, _ in _TOOLBAR_FORMATS
) + (EXPORT_ACTION.id,)

_DEFAULT_SHORTCUTS: tuple[tuple[str, str], ...] = (
    ("ctrl+b", format_action_id(Operation.BOLD)),
    ("ctrl+i", format_action_id(Operation.ITALIC)),
    ("meta+b", format_action_id(Operation.BOLD)),
    ("meta+i", format_action_id(Operation.ITALIC)),
    ("tab",INDENT_ACTION.id),
)


def default_bindings(scope: str = DEFAULT_SCOPE) -> Iterable[Binding]:
    for token, action_id in _DEFAULT_SHORTCUTS:
        stroke = KeyStroke.parse(token)
        yield Binding(
            id=f"{scope}.{stroke.token}",
            scope=scope,
            stroke=stroke,
            action_id=action_id,
            when=("!readonly",),
        )


def load_default_keymaps(
    registry: KeymapRegistry, *, scope: str = DEFAULT_SCOPE
) -> KeymapRegistry:
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=True)
    for binding in default_bindings(scope):
        registry.register_binding(binding, replace=True)
    return registry


@dataclass(frozen=True, slots=True)
class ToolbarEntry:
    action_id: str
    label: str
    icon: str | None
    shortcut: str | None


def toolbar_entries(registry: KeymapRegistry) -> list[ToolbarEntry]:
    """Toolbar buttons in display order, with their first bound shortcut."""

    entries: list[ToolbarEntry] = []
    for action_id in TOOLBAR_ACTION_IDS:
        action = registry.get_action(action_id)
        bindings = registry.bindings_for_action(action_id)
        entries.append(
            ToolbarEntry(
                action_id=action.id,
                label=action.label,
                icon=action.icon,
                shortcut=bindings[0].stroke.token if bindings else None,
            )
        )
    return entries


__all__ = [
    "DEFAULT_ACTIONS",
    "EXPORT_ACTION",
    "INDENT_ACTION",
    "TOOLBAR_ACTION_IDS",
    "ToolbarEntry",
    "default_bindings",
    "format_action_id",
    "load_default_keymaps",
    "toolbar_entries",
]
