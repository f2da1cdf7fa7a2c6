"""Document-level actions (export)."""

from __future__ import annotations

from pathlib import Path

from markdown_engine.export import DEFAULT_FILENAME, ExportError, export_markdown

from .base import ActionContext, ActionResult


def export_document(context: ActionContext, match: object = None) -> ActionResult:
    """Write the buffer to ``extras["export_dir"]`` (default: current directory)."""

    del match
    buffer = context.buffer
    directory = Path(str(context.extras.get("export_dir", ".")))
    filename = str(context.extras.get("export_filename") or buffer.name or DEFAULT_FILENAME)
    try:
        path = export_markdown(buffer.text, directory, filename)
    except ExportError as exc:
        context.bus.emit("document.export_failed", {"error": str(exc), "path": exc.path})
        return ActionResult(consumed=True, status="export_error", message=str(exc))
    buffer.mark_saved()
    context.bus.emit("document.exported", {"path": path})
    return ActionResult(consumed=True, status="exported", message=str(path))


__all__ = ["export_document"]
