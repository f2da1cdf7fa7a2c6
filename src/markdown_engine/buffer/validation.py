"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import MarkdownDocument
from .state import Span
from .sync import BufferValidationError


def ensure_offset(document: MarkdownDocument, offset: int) -> int:
    if offset < 0 or offset > document.length:
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_span(document: MarkdownDocument, start: int, end: int) -> Span:
    start = ensure_offset(document, start)
    end = ensure_offset(document, end)
    if start > end:
        start, end = end, start
    return (start, end)
