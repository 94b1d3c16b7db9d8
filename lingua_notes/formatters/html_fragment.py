"""Embeddable HTML fragment: the rendered blocks without page chrome.

WHY: Other tools (a live preview pane, a CMS, the HTTP API) embed the
rendered notes into their own page and bring their own stylesheet.

RULES:
- Same block and vocabulary markup as the page export
- A title, when given, is emitted as the same title block
- An empty document renders a short empty-state paragraph
- Output suffix: "-fragment.html"; media type "text/html"
"""

from __future__ import annotations

import html
from typing import List, Optional

from lingua_notes.config import EMPTY_DOCUMENT_MESSAGE
from lingua_notes.core.ir import Document
from lingua_notes.formatters.base import BaseFormatter, FormatterOutput
from lingua_notes.formatters.html_page import render_document_body


class HtmlFragmentFormatter(BaseFormatter):

    @property
    def name(self) -> str:
        return "HTML Fragment"

    @property
    def suffix(self) -> str:
        return "-fragment.html"

    def format(self, document: Document, title: Optional[str] = None) -> List[FormatterOutput]:
        parts = []
        if title:
            parts.append('<div class="html-title-block"><h1>{}</h1></div>'.format(html.escape(title)))
        parts.append(render_document_body(document, self))
        if not document.blocks and not document.vocabulary:
            parts.append('<p class="empty-document">{}</p>'.format(EMPTY_DOCUMENT_MESSAGE))

        return [FormatterOutput(suffix=self.suffix, content="".join(parts), media_type="text/html")]
