"""Top-level structure of a block: leading header, separators, columns.

WHY: A block's content has one level of structure above paragraphs. An
optional header on its very first line, horizontal separators that cut
it into major segments, and column delimiters that lay a segment out
side by side. Each resulting span is composed independently.

HOW:
  1. If the first line is a header line, emit it and drop the line.
  2. Split the rest on "\\n_\\n", keeping the delimiters.
  3. Each non-blank span either contains "\\n/\\n" (split into trimmed
     columns, compose each, wrap in a responsive group with pipes) or is
     composed directly.
  4. Each delimiter becomes a separator fragment, as does a lone "_"
     squeezed between two delimiters.

RULES:
- The leading header is only recognized on line zero of the whole block
- Delimiters need their framing newlines: a bare "_" or "/" at the very
  start or end of the content is plain text
- Blank spans produce no fragment, but every separator is still emitted
- A column delimiter in one segment never affects neighbouring segments
- A pipe follows a rendered column only when the next column's text is
  non-empty, so there is never a pipe before an empty column or after
  the last one
- Never raises for any input string
"""

from __future__ import annotations

import re
from typing import List, Optional

from lingua_notes.core.colors import SpeakerPalette
from lingua_notes.core.composer import compose_fragments, render_fragments
from lingua_notes.core.ir import Fragment, FragmentKind, LineKind
from lingua_notes.core.lines import classify_line

SEPARATOR_DELIMITER = "\n_\n"
COLUMN_DELIMITER = "\n/\n"

_SEPARATOR_SPLIT_RE = re.compile("({})".format(re.escape(SEPARATOR_DELIMITER)))

SEPARATOR_HTML = '<div class="internal-block-separator"></div>'
PIPE_HTML = '<span class="responsive-pipe">|</span>'


def _take_leading_header(content: str, fragments: List[Fragment]) -> str:
    first_line, newline, rest = content.partition("\n")
    classified = classify_line(first_line)
    if classified.kind is not LineKind.HEADER:
        return content
    if classified.payload:
        fragments.append(Fragment(
            FragmentKind.HEADER,
            '<div class="internal-block-header">{}</div>'.format(classified.payload),
        ))
    return rest


def _compose_columns(
    segment: str,
    dialogue_context: bool,
    palette: Optional[SpeakerPalette],
) -> Optional[Fragment]:
    columns = [column.strip() for column in segment.split(COLUMN_DELIMITER)]
    parts: List[str] = []
    for index, column in enumerate(columns):
        html = render_fragments(compose_fragments(column, dialogue_context, palette))
        if not html.strip():
            continue
        parts.append('<div class="responsive-content-item">{}</div>'.format(html))
        if index < len(columns) - 1 and columns[index + 1].strip():
            parts.append(PIPE_HTML)

    items = "".join(parts)
    if not items.strip():
        return None
    return Fragment(
        FragmentKind.RESPONSIVE_GROUP,
        '<div class="responsive-content-group">{}</div>'.format(items),
    )


def _compose_segment(
    segment: str,
    dialogue_context: bool,
    palette: Optional[SpeakerPalette],
) -> List[Fragment]:
    if not segment.strip():
        return []
    if COLUMN_DELIMITER in segment:
        group = _compose_columns(segment, dialogue_context, palette)
        return [group] if group is not None else []
    return compose_fragments(segment, dialogue_context, palette)


def _is_stacked_separator(parts: List[str], index: int) -> bool:
    # "\n_\n_\n_\n" splits into delimiter, "_", delimiter: the shared
    # newlines are consumed, leaving the middle "_" on its own.
    return (
        parts[index].strip() == "_"
        and 0 < index < len(parts) - 1
        and parts[index - 1] == SEPARATOR_DELIMITER
        and parts[index + 1] == SEPARATOR_DELIMITER
    )


def parse_block_fragments(
    content: str,
    dialogue_context: bool = False,
    palette: Optional[SpeakerPalette] = None,
) -> List[Fragment]:
    """Parse a block's full content into an ordered list of fragments."""
    fragments: List[Fragment] = []
    remaining = _take_leading_header(content, fragments)

    parts = _SEPARATOR_SPLIT_RE.split(remaining)
    for index, part in enumerate(parts):
        if not part:
            continue
        if part == SEPARATOR_DELIMITER or _is_stacked_separator(parts, index):
            fragments.append(Fragment(FragmentKind.SEPARATOR, SEPARATOR_HTML))
        else:
            fragments.extend(_compose_segment(part, dialogue_context, palette))

    return fragments


def parse_block_content(
    content: str,
    dialogue_context: bool = False,
    palette: Optional[SpeakerPalette] = None,
) -> str:
    """Parse a block's full content into its interior HTML."""
    return render_fragments(parse_block_fragments(content, dialogue_context, palette))
