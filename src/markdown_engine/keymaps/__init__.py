"""Keymap registry, default shortcuts, and toolbar layout."""

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import (
    DEFAULT_SCOPE,
    KeymapConflictError,
    KeymapRegistry,
    RegistryStats,
    ResolutionMatch,
)
from .defaults import (
    ToolbarEntry,
    format_action_id,
    load_default_keymaps,
    toolbar_entries,
)

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
    "DEFAULT_SCOPE",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "ResolutionMatch",
    "ToolbarEntry",
    "format_action_id",
    "load_default_keymaps",
    "toolbar_entries",
]
