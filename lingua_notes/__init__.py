"""Lingua Notes: structured HTML notes for language learners.

WHY: Learners collect grammar rules, example sentences, and dialogues as
plain text. A tiny line-oriented markup (headers, example groups,
separators, columns, speaker-coloured dialogue) turns that text into
readable, consistently styled HTML without a WYSIWYG editor.

HOW: Three stages: the core parser turns one block's markup into HTML
fragments, block renderers wrap fragments by block type, and document
formatters assemble ordered blocks and the vocabulary list into output
files. The CLI and the HTTP service drive the same pipeline.

RULES:
- The parser is a pure function of block content (and the dialogue flag)
- Saved documents keep the browser editor's JSON layout
- Adding an output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
