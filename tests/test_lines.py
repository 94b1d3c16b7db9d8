"""Tests for the line classifier."""

import pytest

from lingua_notes.core.ir import ClassifiedLine, LineKind
from lingua_notes.core.lines import classify_line, split_lines


class TestClassifyLine:

    def test_example_keeps_original_line(self):
        assert classify_line("  ** An example ") == ClassifiedLine(LineKind.EXAMPLE, "  ** An example ")

    def test_triple_asterisk_is_example(self):
        assert classify_line("*** emphasis").kind is LineKind.EXAMPLE

    def test_header_payload_is_trimmed_text_after_marker(self):
        assert classify_line("   *   Sub Header  ") == ClassifiedLine(LineKind.HEADER, "Sub Header")

    def test_header_without_text(self):
        assert classify_line(" * ") == ClassifiedLine(LineKind.HEADER, "")

    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank(self, line):
        assert classify_line(line) == ClassifiedLine(LineKind.BLANK, "")

    def test_plain_keeps_whitespace(self):
        assert classify_line("  indented text") == ClassifiedLine(LineKind.PLAIN, "  indented text")

    def test_asterisk_inside_text_is_plain(self):
        assert classify_line("a * b").kind is LineKind.PLAIN


class TestSplitLines:

    def test_keeps_empty_lines(self):
        assert split_lines("a\n\nb\n") == ["a", "", "b", ""]

    def test_empty_text_is_one_empty_line(self):
        assert split_lines("") == [""]
