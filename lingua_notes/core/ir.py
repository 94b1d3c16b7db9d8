"""Data model shared by the markup parser, formatters, CLI, and API.

WHY: The editor stores notes as an ordered list of typed blocks whose
content is written in a small line-oriented markup. The parser turns one
block's content into a sequence of HTML fragments, and formatters wrap
those fragments into pages. Every layer needs the same vocabulary of
types, so they live together here.

HOW: Plain dataclasses and enums, no behaviour beyond trivial helpers:
  BlockType      — closed set of block kinds (one renderer per member)
  Block          — one user-authored block
  VocabularyItem — one dictionary word attached to the document
  Document       — blocks + vocabulary + id counter + scratch editor text
  LineKind       — tag assigned to a single line by the line classifier
  ClassifiedLine — a line tag plus its payload
  FragmentKind   — kind of a rendered fragment
  Fragment       — one rendered unit of HTML
  DialogueLine   — derived speaker/replica/side triple
  RGB            — an 8-bit colour triple

RULES:
- Block.order is a real-valued sort key; it need not be contiguous
- Fragment is immutable; parsing always produces fresh fragments
- BlockType values match the strings stored in saved files exactly
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import NamedTuple


class BlockType(str, enum.Enum):
    """Kinds of blocks a document can hold.

    RULES:
    - Only DIALOGUE parses its content in dialogue context
    - SEPARATOR has no content and bypasses the parser
    - MARKUP_HEADER renders its raw content unparsed
    """

    RULE = "rule"
    DIALOGUE = "dialogue"
    EXAMPLE = "example"
    CENTERED = "centered"
    SEPARATOR = "separator"
    MARKUP_HEADER = "markup-header"


@dataclass
class Block:
    """A single user-authored block.

    RULES:
    - id: unique within the document, e.g. "rule-3"
    - content: raw markup text, empty for separators
    - order: sort key; blocks render in ascending order
    """

    id: str
    type: BlockType
    content: str = ""
    order: float = 0.0


@dataclass
class VocabularyItem:
    """A word collected into the document's dictionary section."""

    id: str
    word: str


@dataclass
class Document:
    """A whole note document as saved by the editor.

    Operations that mutate a document live in
    ``lingua_notes.core.document``; this class only holds state.
    """

    blocks: list[Block] = field(default_factory=list)
    vocabulary: list[VocabularyItem] = field(default_factory=list)
    block_counter: int = 0
    editor_text: str = ""

    def sorted_blocks(self) -> list[Block]:
        """Blocks in ascending ``order`` (stable for equal keys)."""
        return sorted(self.blocks, key=lambda b: b.order)

    def find_block(self, block_id: str) -> Block | None:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None


class LineKind(str, enum.Enum):
    """Tag produced by the line classifier for one line of markup."""

    EXAMPLE = "example"
    HEADER = "header"
    BLANK = "blank"
    PLAIN = "plain"


@dataclass(frozen=True)
class ClassifiedLine:
    """A classified line.

    RULES:
    - EXAMPLE and PLAIN keep the original, untrimmed line as payload
    - HEADER payload is the text after the leading ``*``, trimmed
    - BLANK payload is always ""
    """

    kind: LineKind
    payload: str = ""


class FragmentKind(str, enum.Enum):
    """Kinds of rendered fragments."""

    PARAGRAPH = "paragraph"
    HEADER = "header"
    EXAMPLE_GROUP = "example-group"
    DIALOGUE_LINE = "dialogue-line"
    SEPARATOR = "separator"
    RESPONSIVE_GROUP = "responsive-group"


@dataclass(frozen=True)
class Fragment:
    """One rendered piece of HTML together with what it represents."""

    kind: FragmentKind
    html: str


@dataclass(frozen=True)
class DialogueLine:
    """A dialogue turn derived from a ``Name: text`` line."""

    speaker: str
    replica: str
    side: str  # "left" or "right"


class RGB(NamedTuple):
    r: int
    g: int
    b: int
