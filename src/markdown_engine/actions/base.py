"""Context, result, and event bus shared by editor actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from markdown_engine.buffer import MarkdownBuffer


@dataclass(slots=True)
class ActionResult:
    """Result returned from every action handler."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class ActionBus:
    """Minimal event bus letting actions publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ActionContext:
    """Services handed to an action: the buffer to edit and the event bus."""

    buffer: MarkdownBuffer
    bus: ActionBus = field(default_factory=ActionBus)
    extras: Dict[str, object] = field(default_factory=dict)
