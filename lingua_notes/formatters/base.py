"""Abstract base formatter and output container.

WHY: Every export consumes the same Document but produces different
file content. This base class enforces a consistent interface so the
CLI and the HTTP service can work with any formatter generically.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. Shared rendering inputs (speaker palette, inline stylesheet) are
taken by the constructor. FormatterOutput bundles a file suffix with its
content and MIME type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list; current formatters return one item
- ``suffix`` starts with a hyphen, e.g. ``"-notes.html"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from lingua_notes.core.colors import SpeakerPalette, default_palette
from lingua_notes.core.ir import Document


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-notes.html"`` → ``"grammar-notes.html"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"text/html"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all document formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    def __init__(
        self,
        palette: Optional[SpeakerPalette] = None,
        stylesheet: str = "",
    ) -> None:
        self.palette = palette if palette is not None else default_palette
        self.stylesheet = stylesheet

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'HTML Page'."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """Suffix of the file this formatter produces."""

    @abstractmethod
    def format(self, document: Document, title: Optional[str] = None) -> list[FormatterOutput]:
        """Convert a Document into one or more output files.

        Args:
            document: Blocks and vocabulary to render; blocks are rendered
                      in ascending order regardless of list order.
            title: Optional heading/page title.

        Returns:
            List of FormatterOutput objects.
        """
