"""UI-agnostic markdown editing engine."""

from .transform import Operation, apply_markdown, insert_markdown

__all__ = [
    "Operation",
    "apply_markdown",
    "insert_markdown",
    "actions",
    "adapters",
    "buffer",
    "keymaps",
    "preview",
    "runtime",
    "transform",
]

__version__ = "0.1.0"
