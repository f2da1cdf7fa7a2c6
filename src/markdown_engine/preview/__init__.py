"""HTML preview of markdown buffers."""

from .render import PreviewRenderer, RenderedPreview, build_parser, render_html

__all__ = ["PreviewRenderer", "RenderedPreview", "build_parser", "render_html"]
