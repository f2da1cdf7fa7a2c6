"""Editing verbs invoked from keymaps and toolbars."""

from .base import ActionBus, ActionContext, ActionResult
from .document import export_document
from .format import FORMAT_HANDLERS, apply_operation, indent

__all__ = [
    "ActionBus",
    "ActionContext",
    "ActionResult",
    "FORMAT_HANDLERS",
    "apply_operation",
    "export_document",
    "indent",
]
