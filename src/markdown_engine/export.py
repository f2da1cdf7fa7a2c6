"""Writing buffers out as ``.md`` files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from markdown_engine.runtime import telemetry

DEFAULT_FILENAME = "document.md"


class ExportError(RuntimeError):
    """Raised when a markdown file cannot be written."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def normalize_filename(filename: str) -> str:
    name = os.path.basename(filename.strip()) or DEFAULT_FILENAME
    if not name.lower().endswith(".md"):
        name = f"{name}.md"
    return name


def encode_markdown(content: str) -> bytes:
    return content.encode("utf-8")


def export_markdown(
    content: str,
    directory: Union[str, os.PathLike[str]],
    filename: str = DEFAULT_FILENAME,
) -> Path:
    """Write ``content`` as UTF-8 into ``directory/filename`` and return the path."""

    target = Path(directory) / normalize_filename(filename)
    payload = encode_markdown(content)
    with telemetry.span(
        "export::markdown",
        component="export",
        metadata={"path": str(target), "bytes": len(payload)},
    ):
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload)
        except OSError as exc:
            raise ExportError(f"Could not export to {target}: {exc}", path=target) from exc
    return target


__all__ = [
    "DEFAULT_FILENAME",
    "ExportError",
    "encode_markdown",
    "export_markdown",
    "normalize_filename",
]
