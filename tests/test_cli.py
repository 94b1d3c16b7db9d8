"""Tests for the lingua-notes command-line interface.

WHY: The CLI is the batch path from saved documents and markup files to
HTML. File naming, format selection, and error exits are its contract.

HOW: Inputs are written into tmp_path and main() is called with an argv
list. Failures are asserted through SystemExit codes and stderr.
"""

import json

import pytest

from lingua_notes.cli import _resolve_output_path, build_parser, main, run


@pytest.fixture
def saved_file(tmp_path, saved_document_dict):
    path = tmp_path / "grammar.json"
    path.write_text(json.dumps(saved_document_dict, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def markup_file(tmp_path):
    path = tmp_path / "dialogue.txt"
    path.write_text("John: Hi\nMary: Hello", encoding="utf-8")
    return path


class TestResolveOutputPath:

    def test_no_conflict(self, tmp_path):
        assert _resolve_output_path("notes", "-notes.html", tmp_path) == tmp_path / "notes-notes.html"

    def test_counter_on_conflict(self, tmp_path):
        (tmp_path / "a-notes.html").write_text("x")
        (tmp_path / "a-notes-2.html").write_text("x")
        assert _resolve_output_path("a", "-notes.html", tmp_path) == tmp_path / "a-notes-3.html"


class TestRun:

    def test_saved_document_all_formats(self, saved_file, capsys):
        saved = run(build_parser().parse_args([str(saved_file)]))
        assert sorted(p.name for p in saved) == ["grammar-fragment.html", "grammar-notes.html"]
        assert "Present Simple" in (saved_file.parent / "grammar-notes.html").read_text(encoding="utf-8")

        err = capsys.readouterr().err
        assert "4 blocks, 1 vocabulary words" in err
        assert "Done! Saved 2 file(s)" in err

    def test_status_goes_to_stderr_only(self, saved_file, capsys):
        main([str(saved_file), "--formats", "html_page"])
        assert capsys.readouterr().out == ""

    def test_markup_file_becomes_one_block(self, markup_file):
        main([str(markup_file), "--formats", "html_fragment", "--block-type", "dialogue"])
        content = (markup_file.parent / "dialogue-fragment.html").read_text(encoding="utf-8")
        assert content.startswith('<div class="dialogue-block"><div class="dialogue-line left"')
        assert 'class="dialogue-line right"' in content

    def test_markup_defaults_to_rule_block(self, markup_file):
        main([str(markup_file), "--formats", "html_fragment"])
        content = (markup_file.parent / "dialogue-fragment.html").read_text(encoding="utf-8")
        assert content == '<div class="rule-block"><div>John: Hi<br>Mary: Hello</div></div>'

    def test_output_dir_and_title(self, saved_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(saved_file), "--formats", "html_page", "--output-dir", str(out_dir), "--title", "Unit 1"])
        content = (out_dir / "grammar-notes.html").read_text(encoding="utf-8")
        assert "<title>Unit 1</title>" in content

    def test_stylesheet_is_inlined(self, saved_file, tmp_path):
        css = tmp_path / "style.css"
        css.write_text(".rule-block{color:red}", encoding="utf-8")
        main([str(saved_file), "--formats", "html_page", "--stylesheet", str(css)])
        content = (saved_file.parent / "grammar-notes.html").read_text(encoding="utf-8")
        assert "<style>.rule-block{color:red}</style>" in content

    def test_second_run_does_not_overwrite(self, saved_file):
        main([str(saved_file), "--formats", "html_page"])
        main([str(saved_file), "--formats", "html_page"])
        assert (saved_file.parent / "grammar-notes-2.html").exists()


class TestErrors:

    def _exit_code(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        return exc_info.value.code

    def test_missing_input(self, tmp_path, capsys):
        assert self._exit_code([str(tmp_path / "missing.json")]) == 1
        assert "Error: File not found" in capsys.readouterr().err

    def test_unknown_format(self, saved_file, capsys):
        assert self._exit_code([str(saved_file), "--formats", "pdf"]) == 1
        assert "Unknown format 'pdf'" in capsys.readouterr().err

    def test_missing_output_dir(self, saved_file, tmp_path):
        assert self._exit_code([str(saved_file), "--output-dir", str(tmp_path / "nope")]) == 1

    def test_missing_stylesheet(self, saved_file, tmp_path, capsys):
        assert self._exit_code([str(saved_file), "--stylesheet", str(tmp_path / "nope.css")]) == 1
        assert "Cannot read stylesheet" in capsys.readouterr().err

    def test_invalid_document(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text('{"allBlocks": []}', encoding="utf-8")
        assert self._exit_code([str(path)]) == 1
        assert "Error: Invalid document" in capsys.readouterr().err

    def test_invalid_block_type_is_rejected_by_argparse(self, markup_file):
        assert self._exit_code([str(markup_file), "--block-type", "table"]) == 2

    def test_markup_file_not_utf8(self, tmp_path, capsys):
        path = tmp_path / "latin.txt"
        path.write_bytes(b"caf\xe9 au lait\n")
        assert self._exit_code([str(path)]) == 1
        assert "Error: latin.txt is not UTF-8 text" in capsys.readouterr().err

    def test_saved_document_not_utf8(self, tmp_path, capsys):
        path = tmp_path / "latin.json"
        path.write_bytes(b'{"editorText": "caf\xe9"}')
        assert self._exit_code([str(path)]) == 1
        assert "Error: Document is not UTF-8 text" in capsys.readouterr().err

    def test_unreadable_input(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("text", encoding="utf-8")

        def deny(self, *args, **kwargs):
            raise PermissionError("permission denied")

        monkeypatch.setattr("pathlib.Path.read_text", deny)
        assert self._exit_code([str(path)]) == 1
        assert "Error: Cannot read notes.txt" in capsys.readouterr().err
