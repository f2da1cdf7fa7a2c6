"""Caret, selection, and change tracking state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Span = Tuple[int, int]  # (start, end) offsets, start <= end


@dataclass(slots=True)
class BufferState:
    """Mutable caret + selection info tied to a document version."""

    caret: int = 0
    selection: Optional[Span] = None
    last_change_tick: int = 0

    def set_caret(self, offset: int) -> None:
        self.caret = offset

    def clear_selection(self) -> None:
        self.selection = None

    def set_selection(self, start: int, end: int) -> None:
        if start > end:
            start, end = end, start
        self.selection = (start, end)

    def active_span(self) -> Span:
        """Selection if one is set, otherwise an empty span at the caret."""

        if self.selection is not None:
            return self.selection
        return (self.caret, self.caret)
