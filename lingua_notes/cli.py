"""Command-line interface for rendering notes to HTML.

WHY: Notes saved from the editor (or plain markup files) need to become
shareable HTML without opening a browser. The CLI wires together
loading, validation, formatting, and file saving behind one command.

HOW: argparse accepts an input file, a title, a comma-separated list of
formats, an output directory, an optional stylesheet, and the block type
used for plain markup input. A ``.json`` input is loaded as a saved
document; anything else becomes the content of a single block. Status
messages go to stderr; output files are saved next to the source (or to
--output-dir).

RULES:
- Positional argument: input file path (.json document or markup text)
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix on conflict
  (-notes-2.html)
- Status output goes to stderr (not stdout)
- Any error prints "Error: ..." to stderr and exits with status 1
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from lingua_notes.config import DEFAULT_EXPORT_TITLE, DEFAULT_STYLESHEET, load_stylesheet
from lingua_notes.core.document import create_block
from lingua_notes.core.ir import BlockType, Document
from lingua_notes.core.storage import DocumentFormatError, load_document
from lingua_notes.formatters import FORMATTERS
from lingua_notes.formatters.base import FormatterOutput


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. grammar-notes.html)
    - Conflict: insert a counter before the extension
      (e.g. grammar-notes-2.html), counter starts at 2
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def load_input(input_path: Path, block_type: BlockType) -> Document:
    """Load a saved document, or wrap a markup file as one block.

    Raises:
        DocumentFormatError: If a .json input is not a valid document.
        UnicodeDecodeError: If a markup input is not UTF-8.
        OSError: If the input cannot be read.
    """
    if input_path.suffix.lower() == ".json":
        return load_document(input_path)

    document = Document()
    content = input_path.read_text(encoding="utf-8")
    create_block(document, block_type, content)
    return document


def _parse_format_keys(formats: Optional[str]) -> List[str]:
    if not formats:
        return list(FORMATTERS.keys())
    keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def run(args: argparse.Namespace) -> List[Path]:
    """Render the input according to parsed arguments; return saved paths."""
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    format_keys = _parse_format_keys(args.formats)

    try:
        stylesheet = load_stylesheet(args.stylesheet)
    except ValueError as e:
        _fail(str(e))

    _status("Loading {}...".format(input_path.name))
    try:
        document = load_input(input_path, BlockType(args.block_type))
    except DocumentFormatError as e:
        _fail(str(e))
    except UnicodeDecodeError as e:
        _fail("{} is not UTF-8 text: {}".format(input_path.name, e))
    except OSError as e:
        _fail("Cannot read {}: {}".format(input_path.name, e))
    _status("  {} blocks, {} vocabulary words".format(len(document.blocks), len(document.vocabulary)))

    _status("Formatting output...")
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key](stylesheet=stylesheet)
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(document, title=args.title):
            saved_path = _save_output(output, input_path.stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional: input_file (required)
    - Optional: --title, --formats, --output-dir, --stylesheet, --block-type
    """
    parser = argparse.ArgumentParser(
        prog="lingua-notes",
        description="Render language-learning notes (saved editor documents or "
                    "markup files) to HTML.",
    )

    parser.add_argument(
        "input_file",
        help="Saved document (.json) or a markup text file.",
    )

    parser.add_argument(
        "--title",
        default=None,
        help="Title of the exported page (default: {}). Fragments get no "
             "title block unless one is given.".format(DEFAULT_EXPORT_TITLE),
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--stylesheet",
        default=DEFAULT_STYLESHEET,
        help="CSS file to inline into exported pages.",
    )

    parser.add_argument(
        "--block-type",
        default=BlockType.RULE.value,
        choices=[t.value for t in BlockType],
        help="Block type used when the input is a markup file (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``lingua-notes`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    run(args)


if __name__ == "__main__":
    main()
