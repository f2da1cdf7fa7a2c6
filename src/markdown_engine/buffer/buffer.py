"""High-level buffer façade combining document, state, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from markdown_engine.runtime import telemetry
from markdown_engine.transform import Insertion, OperationLike, apply_markdown

from .document import MarkdownDocument
from .state import BufferState, Span
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_span


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    caret: int
    selection: Optional[Span]
    dirty: bool


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    caret: int
    selection: Optional[Span]
    label: str


class MarkdownBuffer:
    """Editable markdown text that formatting actions operate on.

    UI layers hand an instance of this class to actions explicitly; nothing
    in the engine looks up "the" active editor on its own.
    """

    def __init__(
        self,
        *,
        name: str = "document.md",
        document: Optional[MarkdownDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or MarkdownDocument()
        self.state = state or BufferState()
        self.undo_timeline = undo or UndoTimeline()

    @classmethod
    def from_text(cls, text: str, *, name: str = "document.md") -> "MarkdownBuffer":
        return cls(name=name, document=MarkdownDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            caret=self.state.caret,
            selection=self.state.selection,
            dirty=self.document.dirty,
        )

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            caret=self.state.caret,
            selection=self.state.selection,
            attributes=dict(attributes or {}),
        )

    def select(self, start: int, end: int) -> Span:
        start, end = ensure_span(self.document, start, end)
        self.state.set_selection(start, end)
        self.state.set_caret(end)
        return (start, end)

    def set_caret(self, offset: int) -> None:
        self.state.set_caret(ensure_offset(self.document, offset))
        self.state.clear_selection()

    def clear_selection(self) -> None:
        self.state.clear_selection()

    def mark_saved(self) -> None:
        self.document = self.document.mark_clean()

    def replace_range(self, start: int, end: int, text: str, *, label: str) -> BufferDelta:
        start, end = ensure_span(self.document, start, end)
        before_text = self.document.text
        new_text = before_text[:start] + text + before_text[end:]
        return self._commit(new_text, start + len(text), label=label)

    def insert_text(self, text: str, *, offset: Optional[int] = None) -> BufferDelta:
        if offset is None:
            start, end = self.state.active_span()
        else:
            start = end = offset
        return self.replace_range(start, end, text, label="insert_text")

    def get_text_range(self, start: int, end: int) -> str:
        start, end = ensure_span(self.document, start, end)
        return self.document.text[start:end]

    def selected_text(self) -> str:
        start, end = self.state.active_span()
        return self.document.text[start:end]

    def apply_format(self, operation: OperationLike) -> BufferDelta:
        """Format the current selection (or the caret) and move the caret."""

        start, end = self.state.active_span()
        insertion: Insertion = apply_markdown(self.document.text, start, end, operation)
        tag = insertion.operation.value if insertion.operation else str(operation)
        return self._commit(insertion.text, insertion.caret, label=f"format::{tag}")

    def undo(self) -> Optional[BufferDelta]:
        entry = self.undo_timeline.undo()
        if entry is None:
            return None
        return self._restore(entry.before_text, entry.caret_before, f"undo::{entry.label}")

    def redo(self) -> Optional[BufferDelta]:
        entry = self.undo_timeline.redo()
        if entry is None:
            return None
        return self._restore(entry.after_text, entry.caret_after, f"redo::{entry.label}")

    def _commit(self, new_text: str, caret: int, *, label: str) -> BufferDelta:
        with Transaction(self, label) as tx:
            before_text = self.document.text
            caret_before = self.state.caret
            self._swap_text(new_text, caret)
            tx.commit(before_text, new_text, caret_before, self.state.caret)
        return self._delta(label)

    def _restore(self, text: str, caret: int, label: str) -> BufferDelta:
        with telemetry.span(
            name=f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name},
        ):
            self._swap_text(text, caret)
        return self._delta(label)

    def _swap_text(self, text: str, caret: int) -> None:
        self.document = self.document.replace(text)
        self.state.set_caret(max(0, min(caret, len(text))))
        self.state.clear_selection()
        self.state.last_change_tick = self.document.version

    def _delta(self, label: str) -> BufferDelta:
        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            caret=self.state.caret,
            selection=self.state.selection,
            label=label,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one undoable edit in a telemetry span."""

    def __init__(self, buffer: MarkdownBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self,
        before_text: str,
        after_text: str,
        caret_before: int,
        caret_after: int,
    ) -> None:
        if before_text == after_text:
            return
        self.buffer.undo_timeline.push(
            UndoEntry(
                label=self.label,
                before_text=before_text,
                after_text=after_text,
                caret_before=caret_before,
                caret_after=caret_after,
            )
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
