"""Text storage for markdown buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

Location = Tuple[int, int]  # (row, column)


@dataclass(frozen=True, slots=True)
class MarkdownDocument:
    """Immutable document text with a monotonically increasing version.

    Offsets index into ``text`` directly; ``location_for_offset`` and
    ``offset_for_location`` translate to the ``(row, column)`` pairs that
    line-oriented widgets report.
    """

    text: str = ""
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "MarkdownDocument":
        return cls(text=text, version=0, dirty=False)

    def replace(self, text: str) -> "MarkdownDocument":
        """Return a new dirty document holding ``text`` with a bumped version."""

        return MarkdownDocument(text=text, version=self.version + 1, dirty=True)

    def mark_clean(self) -> "MarkdownDocument":
        return MarkdownDocument(text=self.text, version=self.version, dirty=False)

    def lines(self) -> Sequence[str]:
        return tuple(self.text.split("\n"))

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    def offset_for_location(self, location: Location) -> int:
        lines = self.lines()
        row, col = location
        row = max(0, min(row, len(lines) - 1))
        offset = sum(len(line) + 1 for line in lines[:row])  # +1 for newline
        return offset + max(0, min(col, len(lines[row])))

    def location_for_offset(self, offset: int) -> Location:
        lines = self.lines()
        running = 0
        for row, line in enumerate(lines):
            if offset <= running + len(line):
                return (row, max(0, offset - running))
            running += len(line) + 1
        return (len(lines) - 1, len(lines[-1]))
