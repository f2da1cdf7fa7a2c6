"""Pure markdown insertion transform."""

from .insert import (
    Insertion,
    SelectionRangeError,
    apply_markdown,
    clamp_selection,
    insert_markdown,
)
from .operations import Operation, OperationLike

__all__ = [
    "Insertion",
    "Operation",
    "OperationLike",
    "SelectionRangeError",
    "apply_markdown",
    "clamp_selection",
    "insert_markdown",
]
