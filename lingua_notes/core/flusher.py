"""Paragraph and example-group accumulation for one span of markup.

WHY: Plain lines join into paragraphs and ``**`` lines join into example
groups, but the two must never interleave: switching from one to the
other, hitting a blank line, or reaching a header closes whatever is
open. That is a small finite-state machine, and keeping it in an
explicit object (one instance per composed span) means no buffer is
ever shared between columns or segments.

HOW: FragmentFlusher holds two line buffers and an output list. Its
state is derived from which buffer is non-empty:
  IDLE          — nothing buffered
  IN_PARAGRAPH  — plain lines buffered
  IN_EXAMPLES   — example lines buffered
Every transition out of a state runs that state's flush, which renders
the buffer into one or more Fragments and clears it.

RULES:
- push_plain() flushes examples first; push_example() flushes the
  paragraph first
- Flushing an empty buffer emits nothing (flushes are idempotent)
- In dialogue context a paragraph with at least one colon-bearing line
  renders as dialogue lines; lines without a colon are dropped from
  that rendering (kept for compatibility with saved documents)
- Replica text turns each backslash into a <br>; example text turns
  embedded newlines into <br>
- Example text is the raw line minus its first two characters, trimmed
- Fragments whose html is whitespace-only are dropped
"""

from __future__ import annotations

import enum
from typing import List, Optional

from lingua_notes.core.colors import SpeakerPalette, default_palette, to_hex
from lingua_notes.core.ir import DialogueLine, Fragment, FragmentKind
from lingua_notes.core.lines import EXAMPLE_MARKER

LINE_BREAK = "<br>"
DIALOGUE_SIDES = ("left", "right")


class FlusherState(str, enum.Enum):
    IDLE = "idle"
    IN_PARAGRAPH = "in_paragraph"
    IN_EXAMPLES = "in_examples"


def split_dialogue_line(line: str, index: int) -> DialogueLine:
    """Split ``Name: text`` on its first colon.

    The side alternates left/right by ``index`` among the dialogue lines
    of one paragraph run.
    """
    speaker, _, replica = line.partition(":")
    return DialogueLine(
        speaker=speaker.strip(),
        replica=replica.strip().replace("\\", LINE_BREAK),
        side=DIALOGUE_SIDES[index % 2],
    )


class FragmentFlusher:
    """Accumulates lines and emits paragraph, example and dialogue fragments."""

    def __init__(
        self,
        dialogue_context: bool = False,
        palette: Optional[SpeakerPalette] = None,
    ) -> None:
        self.dialogue_context = dialogue_context
        self.palette = palette if palette is not None else default_palette
        self.fragments: List[Fragment] = []
        self._paragraph_lines: List[str] = []
        self._example_lines: List[str] = []

    @property
    def state(self) -> FlusherState:
        if self._paragraph_lines:
            return FlusherState.IN_PARAGRAPH
        if self._example_lines:
            return FlusherState.IN_EXAMPLES
        return FlusherState.IDLE

    # -- transitions -------------------------------------------------------

    def push_plain(self, line: str) -> None:
        self.flush_examples()
        self._paragraph_lines.append(line)

    def push_example(self, line: str) -> None:
        self.flush_paragraph()
        self._example_lines.append(line)

    def push_header(self, text: str) -> None:
        """Close anything open, then emit an internal header.

        A header with no text after the marker emits nothing.
        """
        self.flush_all()
        if text:
            self._emit(FragmentKind.HEADER, '<div class="internal-block-header">{}</div>'.format(text))

    def push_blank(self) -> None:
        self.flush_all()

    def flush_all(self) -> None:
        self.flush_paragraph()
        self.flush_examples()

    # -- flushes -----------------------------------------------------------

    def flush_paragraph(self) -> None:
        if not self._paragraph_lines:
            return
        lines = self._paragraph_lines
        self._paragraph_lines = []

        if self.dialogue_context and any(":" in line for line in lines):
            dialogue_lines = [line for line in lines if ":" in line]
            for index, raw in enumerate(dialogue_lines):
                self._emit(FragmentKind.DIALOGUE_LINE, self._render_dialogue(split_dialogue_line(raw, index)))
        else:
            self._emit(FragmentKind.PARAGRAPH, "<div>{}</div>".format(LINE_BREAK.join(lines)))

    def flush_examples(self) -> None:
        if not self._example_lines:
            return
        lines = self._example_lines
        self._example_lines = []

        items = "".join(
            "<div>{}</div>".format(_example_text(line).replace("\n", LINE_BREAK))
            for line in lines
        )
        self._emit(FragmentKind.EXAMPLE_GROUP, '<div class="internal-example-group">{}</div>'.format(items))

    # -- helpers -----------------------------------------------------------

    def _render_dialogue(self, line: DialogueLine) -> str:
        colors = self.palette.dialogue_colors(line.speaker)
        return (
            '<div class="dialogue-line {side}" style="background-color: {bg}; border-color: {border};">'
            '<strong class="dialogue-speaker" style="color: {label};">{speaker}</strong>{replica}'
            "</div>"
        ).format(
            side=line.side,
            bg=to_hex(colors.background),
            border=to_hex(colors.border),
            label=to_hex(colors.speaker),
            speaker=line.speaker,
            replica=line.replica,
        )

    def _emit(self, kind: FragmentKind, html: str) -> None:
        if html.strip():
            self.fragments.append(Fragment(kind, html))


def _example_text(line: str) -> str:
    # First two characters of the raw line, not of the trimmed line.
    return line[len(EXAMPLE_MARKER):].strip()
