"""Textual integration for the markdown engine."""

from .controller import TextualMarkdownAdapter, TextualUIHooks

__all__ = ["TextualMarkdownAdapter", "TextualUIHooks"]
