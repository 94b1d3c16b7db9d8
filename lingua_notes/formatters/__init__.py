"""Output formatter registry.

WHY: The CLI and the HTTP service need a single lookup to find the right
formatter by name.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["html_page"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API paths)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lingua_notes.formatters.html_fragment import HtmlFragmentFormatter
from lingua_notes.formatters.html_page import HtmlPageFormatter

if TYPE_CHECKING:
    from lingua_notes.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "html_page": HtmlPageFormatter,
    "html_fragment": HtmlFragmentFormatter,
}
