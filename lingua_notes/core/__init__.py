"""Markup parsing core and document model.

WHY: The core package holds the part of the editor with real structure:
the line-oriented markup grammar and the block store operations. It is
consumed by the formatters, the CLI, and the HTTP service.

HOW: ir.py defines the data structures. lines.py, flusher.py,
composer.py, and splitter.py form the parser, leaf first. colors.py
assigns speaker colours. document.py and storage.py manage and persist
whole documents.

RULES:
- The parser is unaware of block types; it only takes a dialogue flag
- IR dataclasses are the contract between parsing and formatting
- Parser entry points never raise for malformed markup
"""

from lingua_notes.core.composer import compose_fragments, compose_simple_content
from lingua_notes.core.splitter import parse_block_content, parse_block_fragments

__all__ = [
    "compose_fragments",
    "compose_simple_content",
    "parse_block_content",
    "parse_block_fragments",
]
