"""Formatting operations understood by the insertion transform."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class Operation(str, Enum):
    """Named formatting command; values are the toolbar tags."""

    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    UNORDERED_LIST = "unorderedList"
    ORDERED_LIST = "orderedList"
    QUOTE = "quote"
    CODE = "code"
    CODEBLOCK = "codeblock"
    LINK = "link"
    IMAGE = "image"
    HORIZONTAL_RULE = "horizontalRule"

    @classmethod
    def parse(cls, tag: "OperationLike") -> Optional["Operation"]:
        """Return the matching member, or ``None`` for an unknown tag."""

        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag))
        except ValueError:
            return None

    @property
    def heading_level(self) -> int:
        return _HEADING_LEVELS.get(self, 0)


OperationLike = Union[Operation, str]

_HEADING_LEVELS = {
    Operation.HEADING1: 1,
    Operation.HEADING2: 2,
    Operation.HEADING3: 3,
}

LINK_PLACEHOLDER = "link text"
LINK_DESTINATION = "url"
IMAGE_PLACEHOLDER = "alt text"
IMAGE_DESTINATION = "image-url"


__all__ = [
    "Operation",
    "OperationLike",
    "LINK_PLACEHOLDER",
    "LINK_DESTINATION",
    "IMAGE_PLACEHOLDER",
    "IMAGE_DESTINATION",
]
