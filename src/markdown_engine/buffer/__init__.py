"""Buffer abstractions and undo/redo data structures."""

from .buffer import BufferDelta, BufferView, MarkdownBuffer, Transaction
from .document import Location, MarkdownDocument
from .state import BufferState, Span
from .sync import BufferMirror, BufferSync, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_span

__all__ = [
    "MarkdownDocument",
    "Location",
    "BufferState",
    "Span",
    "UndoTimeline",
    "UndoEntry",
    "MarkdownBuffer",
    "BufferDelta",
    "BufferView",
    "Transaction",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "ensure_offset",
    "ensure_span",
]
