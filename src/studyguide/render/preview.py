"""HTML preview of a study guide, math spans included."""
from __future__ import annotations

import html

from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin

from ..models import RenderedArtifact
from .base import HTML_MEDIA_TYPE, GuideRenderer, source_line


def create_markdown_parser() -> MarkdownIt:
    """CommonMark with tables and ``$``/``$$`` math; raw HTML is escaped."""

    return (
        MarkdownIt("commonmark", {"html": False})
        .enable("table")
        .use(dollarmath_plugin, allow_space=True, double_inline=True)
    )


class MarkdownPreviewRenderer(GuideRenderer):
    """Render the guide with a general Markdown parser instead of line rules.

    Math is emitted as ``<span class="math inline">`` / ``<div class="math
    block">`` elements for a client-side typesetter such as KaTeX.
    """

    def __init__(self) -> None:
        self._parser = create_markdown_parser()

    def render_body(self, guide_markdown: str) -> str:
        return self._parser.render(guide_markdown)

    def render(self, title: str, source_file_name: str, guide_markdown: str) -> RenderedArtifact:
        body = (
            f"<header><h1>{html.escape(title)}</h1>"
            f"<p><em>{html.escape(source_line(source_file_name))}</em></p></header>\n"
            f'<article class="study-guide">\n{self.render_body(guide_markdown)}</article>\n'
        )
        return RenderedArtifact(content=body.encode("utf-8"), media_type=HTML_MEDIA_TYPE)
