"""Markdown to HTML preview rendering."""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Optional

from markdown_it import MarkdownIt

from markdown_engine.buffer import MarkdownBuffer
from markdown_engine.runtime import telemetry


def build_parser() -> MarkdownIt:
    # Raw HTML stays escaped in previews.
    return MarkdownIt("commonmark", {"html": False, "typographer": False}).enable(
        ["table", "strikethrough"]
    )


_DEFAULT_PARSER: Optional[MarkdownIt] = None


def render_html(markdown_text: str) -> str:
    """Render ``markdown_text`` to an HTML fragment."""

    global _DEFAULT_PARSER
    if _DEFAULT_PARSER is None:
        _DEFAULT_PARSER = build_parser()
    return _DEFAULT_PARSER.render(markdown_text)


@dataclass(slots=True)
class RenderedPreview:
    version: int
    source: str
    html: str


class PreviewRenderer:
    """Renders a buffer, reusing the last result while its text is unchanged."""

    def __init__(self, *, parser: Optional[MarkdownIt] = None) -> None:
        self._md = parser or build_parser()
        self._last: Optional[RenderedPreview] = None
        self.render_count = 0

    def render(self, buffer: MarkdownBuffer) -> RenderedPreview:
        version = buffer.document.version
        source = buffer.text
        if self._last is not None and self._last.source == source:
            return self._last
        with telemetry.span(
            "preview::render",
            component="preview",
            metadata={"buffer": buffer.name, "version": version},
        ) as handle:
            body = self._md.render(source)
            handle.add_metadata("html_length", len(body))
        self.render_count += 1
        self._last = RenderedPreview(version=version, source=source, html=body)
        return self._last

    def render_page(self, buffer: MarkdownBuffer, *, title: Optional[str] = None) -> str:
        """Wrap the rendered fragment in a standalone HTML document."""

        body = self.render(buffer).html
        escaped_title = html.escape(title or buffer.name)
        return (
            "<!doctype html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{escaped_title}</title>\n"
            "</head>\n"
            f'<body>\n<article class="markdown-preview">\n{body}</article>\n</body>\n'
            "</html>\n"
        )
