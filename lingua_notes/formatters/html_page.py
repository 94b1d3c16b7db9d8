"""Standalone HTML page export.

WHY: Learners share and archive notes as a single HTML file that opens
in any browser, with styles inlined and dictionary links that work
without the editor.

HOW: Renders every block in ascending order, appends the vocabulary
section, and wraps the result in a minimal page: charset and viewport
meta, the inlined stylesheet, and a title block.

RULES:
- <html lang> comes from config (default "ru")
- The title is HTML-escaped; it appears in <title> and in an <h1>
- An empty stylesheet still emits an empty <style> element
- Output suffix: "-notes.html"; media type "text/html"
"""

from __future__ import annotations

import html
from typing import List, Optional

from lingua_notes.config import DEFAULT_EXPORT_TITLE, HTML_LANG
from lingua_notes.core.ir import Document
from lingua_notes.formatters.base import BaseFormatter, FormatterOutput
from lingua_notes.formatters.blocks import render_block
from lingua_notes.formatters.vocabulary import render_vocabulary


def render_document_body(document: Document, formatter: BaseFormatter) -> str:
    """All blocks in display order followed by the vocabulary section."""
    parts = [render_block(block, formatter.palette) for block in document.sorted_blocks()]
    parts.append(render_vocabulary(document.vocabulary))
    return "".join(parts)


class HtmlPageFormatter(BaseFormatter):
    """Formatter that produces a complete, self-contained HTML page."""

    @property
    def name(self) -> str:
        return "HTML Page"

    @property
    def suffix(self) -> str:
        return "-notes.html"

    def format(self, document: Document, title: Optional[str] = None) -> List[FormatterOutput]:
        page_title = html.escape(title or DEFAULT_EXPORT_TITLE)
        title_block = '<div class="html-title-block"><h1>{}</h1></div>'.format(page_title)

        content = (
            '<!DOCTYPE html><html lang="{lang}"><head><meta charset="UTF-8">'
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
            "<title>{title}</title>\n"
            "<style>{styles}</style></head>\n"
            '<body><div class="container">{title_block}{body}</div></body></html>\n'
        ).format(
            lang=HTML_LANG,
            title=page_title,
            styles=self.stylesheet,
            title_block=title_block,
            body=render_document_body(document, self),
        )

        return [FormatterOutput(suffix=self.suffix, content=content, media_type="text/html")]
