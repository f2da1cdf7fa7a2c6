"""Adapter applying formatting actions to a Textual ``TextArea``.

The widget is always handed in explicitly; the adapter never queries the
app for a focused editor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from textual.widgets.text_area import Selection

from markdown_engine.actions import ActionBus, ActionContext, ActionResult
from markdown_engine.buffer import BufferMirror, MarkdownBuffer, MarkdownDocument
from markdown_engine.keymaps import (
    DEFAULT_SCOPE,
    KeymapRegistry,
    KeyStroke,
    load_default_keymaps,
)
from markdown_engine.transform import OperationLike, apply_markdown


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update the host UI."""

    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualMarkdownAdapter:
    """Bridges a ``TextArea`` with the buffer, transform, and keymaps."""

    def __init__(
        self,
        text_area: Any,
        hooks: Optional[TextualUIHooks] = None,
        *,
        registry: Optional[KeymapRegistry] = None,
        buffer: Optional[MarkdownBuffer] = None,
        extras: Optional[Dict[str, object]] = None,
        scope: str = DEFAULT_SCOPE,
    ) -> None:
        self.text_area = text_area
        self.hooks = hooks or TextualUIHooks()
        self.registry = registry or load_default_keymaps(KeymapRegistry())
        self.scope = scope
        self.context = ActionContext(
            buffer=buffer or MarkdownBuffer(),
            bus=ActionBus(),
            extras=dict(extras or {}),
        )
        self._subscribe_events()

    def apply(self, operation: OperationLike) -> int:
        """Format the widget's selection in place and return the new caret offset."""

        document = MarkdownDocument.from_text(self.text_area.text)
        start, end = self._selection_offsets(document)
        insertion = apply_markdown(document.text, start, end, operation)
        replacement = insertion.text[start : len(insertion.text) - (document.length - end)]
        self.text_area.replace(
            replacement,
            document.location_for_offset(start),
            document.location_for_offset(end),
        )
        self._place_caret(insertion.text, insertion.caret)
        self._log_state("apply ->", operation=str(operation), caret=insertion.caret)
        return insertion.caret

    def handle_key(self, key: str, modifiers: Iterable[str] = ()) -> ActionResult:
        """Dispatch a key through the keymap.

        ``key`` may be a full Textual key name (``"ctrl+b"``) or a bare key
        with its ``modifiers`` passed separately.
        """

        parsed = KeyStroke.parse(key)
        stroke = KeyStroke(parsed.key, parsed.modifiers + tuple(modifiers))
        self.push_host_edit(self.pull_widget())
        before = self.context.buffer.document.version
        result = self.registry.dispatch(
            self.context,
            stroke,
            scope=self.scope,
            flags={"readonly": bool(getattr(self.text_area, "read_only", False))},
        )
        if self.context.buffer.document.version != before:
            self._write_back()
        if result.consumed:
            self.hooks.update_status(result.message or result.status)
        self._log_state(
            "key ->",
            key=stroke.token,
            consumed=result.consumed,
            status=result.status,
        )
        return result

    def pull_widget(self) -> BufferMirror:
        document = MarkdownDocument.from_text(self.text_area.text)
        start, end = self._selection_offsets(document)
        selection = (start, end) if start != end else None
        return BufferMirror(text=document.text, caret=end, selection=selection)

    def pull_buffer(self) -> BufferMirror:
        return self.context.buffer.mirror()

    def push_host_edit(self, mirror: BufferMirror) -> None:
        buffer = self.context.buffer
        if buffer.text != mirror.text:
            buffer.replace_range(0, buffer.document.length, mirror.text, label="host_edit")
        if mirror.selection is not None:
            buffer.select(*mirror.selection)
        else:
            buffer.set_caret(mirror.caret)

    def _write_back(self) -> None:
        buffer = self.context.buffer
        current = MarkdownDocument.from_text(self.text_area.text)
        self.text_area.replace(
            buffer.text,
            (0, 0),
            current.location_for_offset(current.length),
        )
        self._place_caret(buffer.text, buffer.state.caret)

    def _selection_offsets(self, document: MarkdownDocument) -> tuple[int, int]:
        selection = self.text_area.selection
        start = document.offset_for_location(tuple(selection.start))
        end = document.offset_for_location(tuple(selection.end))
        return (start, end) if start <= end else (end, start)

    def _place_caret(self, text: str, caret: int) -> None:
        location = MarkdownDocument.from_text(text).location_for_offset(caret)
        self.text_area.selection = Selection.cursor(location)

    def _subscribe_events(self) -> None:
        bus = self.context.bus
        for event in (
            "format.applied",
            "format.indent",
            "document.exported",
            "document.export_failed",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        buffer = self.context.buffer
        snapshot: Dict[str, object] = {
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
            "caret": buffer.state.caret,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["TextualMarkdownAdapter", "TextualUIHooks"]
