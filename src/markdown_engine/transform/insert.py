"""Selection-scoped markdown insertion.

``apply_markdown`` wraps or prefixes ``buffer[start:end]`` according to an
:class:`Operation` and returns the new buffer with a suggested caret offset.
The function is pure: nothing outside its arguments is read or mutated.

Templates are applied to the selected substring only, never to the whole
line, so a heading inserted mid-line lands mid-line. Unknown operation tags
leave the buffer untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from markdown_engine.runtime import telemetry

from .operations import (
    IMAGE_DESTINATION,
    IMAGE_PLACEHOLDER,
    LINK_DESTINATION,
    LINK_PLACEHOLDER,
    Operation,
    OperationLike,
)

Span = Tuple[int, int]  # (start, end) offsets


class SelectionRangeError(ValueError):
    """Raised in strict mode when offsets fall outside the buffer."""

    def __init__(self, message: str, *, start: int, end: int, length: int) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.length = length


@dataclass(frozen=True, slots=True)
class Insertion:
    """Outcome of a single transform call."""

    text: str
    caret: int
    operation: Optional[Operation]
    selection: Span

    @property
    def applied(self) -> bool:
        return self.operation is not None


def clamp_selection(length: int, start: int, end: int) -> Span:
    """Clamp ``(start, end)`` into ``0 <= start <= end <= length``."""

    if start > end:
        start, end = end, start
    start = max(0, min(start, length))
    end = max(start, min(end, length))
    return start, end


def _resolve_selection(buffer: str, start: int, end: int, strict: bool) -> Span:
    length = len(buffer)
    if 0 <= start <= end <= length:
        return start, end
    if strict:
        raise SelectionRangeError(
            f"Selection ({start}, {end}) is outside buffer of length {length}",
            start=start,
            end=end,
            length=length,
        )
    clamped = clamp_selection(length, start, end)
    telemetry.record_event(
        "transform.clamped",
        level="debug",
        data={"requested": (start, end), "clamped": clamped, "length": length},
    )
    return clamped


def _replacement(operation: Optional[Operation], selected: str) -> Tuple[str, int]:
    """Return ``(replacement, caret offset relative to the selection start)``."""

    if operation is None:
        return selected, len(selected)
    if operation is Operation.BOLD:
        return f"**{selected}**", 2
    if operation is Operation.ITALIC:
        return f"*{selected}*", 1
    if operation is Operation.STRIKETHROUGH:
        return f"~~{selected}~~", 2
    if operation.heading_level:
        marker = "#" * operation.heading_level
        return f"{marker} {selected}", operation.heading_level + 1
    if operation is Operation.UNORDERED_LIST:
        return f"- {selected}", 2
    if operation is Operation.ORDERED_LIST:
        return f"1. {selected}", 3
    if operation is Operation.QUOTE:
        return f"> {selected}", 2
    if operation is Operation.CODE:
        return f"`{selected}`", 1
    if operation is Operation.CODEBLOCK:
        return f"```\n{selected}\n```", 3
    if operation is Operation.LINK:
        text = f"[{selected or LINK_PLACEHOLDER}]({LINK_DESTINATION})"
        return text, len(text) - 1 if selected else len(LINK_PLACEHOLDER) + 1
    if operation is Operation.IMAGE:
        text = f"![{selected or IMAGE_PLACEHOLDER}]({IMAGE_DESTINATION})"
        return text, len(text) - 1 if selected else len(IMAGE_PLACEHOLDER) + 2
    if operation is Operation.HORIZONTAL_RULE:
        # The rule goes in front of the selection, even mid-line.
        return f"\n---\n{selected}", 5
    raise AssertionError(f"unhandled operation {operation!r}")


def apply_markdown(
    buffer: str,
    start: int,
    end: int,
    operation: OperationLike,
    *,
    strict: bool = False,
) -> Insertion:
    """Replace ``buffer[start:end]`` with its markdown-formatted version.

    Out-of-range offsets are clamped unless ``strict`` is set, in which case
    :class:`SelectionRangeError` is raised. An unrecognized ``operation`` is
    an identity transform.
    """

    start, end = _resolve_selection(buffer, start, end, strict)
    resolved = Operation.parse(operation)
    if resolved is None:
        telemetry.record_event(
            "transform.unknown_operation",
            level="warning",
            data={"operation": operation},
        )

    replacement, caret = _replacement(resolved, buffer[start:end])
    return Insertion(
        text=buffer[:start] + replacement + buffer[end:],
        caret=start + caret,
        operation=resolved,
        selection=(start, end),
    )


def insert_markdown(
    buffer: str,
    start: int,
    end: int,
    operation: OperationLike,
    *,
    strict: bool = False,
) -> str:
    """Return only the new buffer produced by :func:`apply_markdown`."""

    return apply_markdown(buffer, start, end, operation, strict=strict).text


__all__ = [
    "Insertion",
    "SelectionRangeError",
    "Span",
    "apply_markdown",
    "clamp_selection",
    "insert_markdown",
]
