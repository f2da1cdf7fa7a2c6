"""Formatting actions bound to the toolbar and keyboard shortcuts."""

from __future__ import annotations

from typing import Callable, Dict

from markdown_engine.transform import Operation

from .base import ActionContext, ActionResult

FormatHandler = Callable[[ActionContext, object], ActionResult]

INDENT_TEXT = "  "


def apply_operation(context: ActionContext, operation: Operation) -> ActionResult:
    buffer = context.buffer
    span = buffer.state.active_span()
    delta = buffer.apply_format(operation)
    context.bus.emit(
        "format.applied",
        {
            "operation": operation.value,
            "range": span,
            "caret": delta.caret,
            "version": delta.version,
        },
    )
    return ActionResult(consumed=True, status="format", message=operation.value)


def _make_handler(operation: Operation) -> FormatHandler:
    def handler(context: ActionContext, match: object = None) -> ActionResult:
        del match
        return apply_operation(context, operation)

    handler.__name__ = f"format_{operation.name.lower()}"
    handler.__doc__ = f"Apply the {operation.value} template to the selection."
    return handler


FORMAT_HANDLERS: Dict[Operation, FormatHandler] = {
    operation: _make_handler(operation) for operation in Operation
}


def indent(context: ActionContext, match: object = None) -> ActionResult:
    """Replace the selection with two spaces, caret after them."""

    del match
    delta = context.buffer.insert_text(INDENT_TEXT)
    context.bus.emit("format.indent", {"caret": delta.caret})
    return ActionResult(consumed=True, status="indent")


__all__ = ["FORMAT_HANDLERS", "INDENT_TEXT", "apply_operation", "indent"]
