"""Line classifier for the block markup.

WHY: Every decision the composer makes (start a paragraph, open an
example group, emit a header, close what is open) depends on what kind
of line it is looking at. Keeping the test in one pure function makes
the grammar easy to read and to test in isolation.

HOW: Trim the line only for the test. Two leading asterisks mark an
example, a single asterisk marks a header, an empty trimmed line is a
blank, anything else is plain text.

RULES:
- "**" is checked before "*", so example lines never become headers
- Example and plain payloads keep the original line (no trimming)
- Header payload is the text after the "*", trimmed
- Every line maps to exactly one kind; no errors
"""

from __future__ import annotations

from lingua_notes.core.ir import ClassifiedLine, LineKind

EXAMPLE_MARKER = "**"
HEADER_MARKER = "*"


def classify_line(line: str) -> ClassifiedLine:
    """Classify one line of markup (without its trailing newline)."""
    trimmed = line.strip()
    if trimmed.startswith(EXAMPLE_MARKER):
        return ClassifiedLine(LineKind.EXAMPLE, line)
    if trimmed.startswith(HEADER_MARKER):
        return ClassifiedLine(LineKind.HEADER, trimmed[len(HEADER_MARKER):].strip())
    if not trimmed:
        return ClassifiedLine(LineKind.BLANK)
    return ClassifiedLine(LineKind.PLAIN, line)


def split_lines(text: str) -> list[str]:
    """Split text on newlines, keeping empty trailing lines."""
    return text.split("\n")
