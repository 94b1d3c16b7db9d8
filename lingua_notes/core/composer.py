"""Compose one span of markup (a column or a whole segment) into fragments.

HOW: Split the span into lines, classify each line, and route it to a
fresh FragmentFlusher. A final flush closes whatever is still open at
the end of the span.

RULES:
- One flusher per call; nothing is shared between spans
- Output preserves input line order
"""

from __future__ import annotations

from typing import List, Optional

from lingua_notes.core.colors import SpeakerPalette
from lingua_notes.core.flusher import FragmentFlusher
from lingua_notes.core.ir import Fragment, LineKind
from lingua_notes.core.lines import classify_line, split_lines


def compose_fragments(
    text: str,
    dialogue_context: bool = False,
    palette: Optional[SpeakerPalette] = None,
) -> List[Fragment]:
    """Parse a span without column or separator delimiters."""
    flusher = FragmentFlusher(dialogue_context=dialogue_context, palette=palette)

    for line in split_lines(text):
        classified = classify_line(line)
        if classified.kind is LineKind.EXAMPLE:
            flusher.push_example(classified.payload)
        elif classified.kind is LineKind.HEADER:
            flusher.push_header(classified.payload)
        elif classified.kind is LineKind.BLANK:
            flusher.push_blank()
        else:
            flusher.push_plain(classified.payload)

    flusher.flush_all()
    return flusher.fragments


def render_fragments(fragments: List[Fragment]) -> str:
    return "".join(fragment.html for fragment in fragments)


def compose_simple_content(
    text: str,
    dialogue_context: bool = False,
    palette: Optional[SpeakerPalette] = None,
) -> str:
    """Like compose_fragments(), but returns the concatenated HTML."""
    return render_fragments(compose_fragments(text, dialogue_context, palette))
