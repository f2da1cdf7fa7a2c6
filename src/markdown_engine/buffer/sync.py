"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import Span


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    caret: int
    selection: Optional[Span]
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How adapters exchange data with the buffer layer."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...

    def push_host_edit(self, mirror: BufferMirror) -> None:
        """Submit an edit made in the host widget (typing, paste) to the buffer."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when adapters or buffers provide out-of-bounds offsets."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
