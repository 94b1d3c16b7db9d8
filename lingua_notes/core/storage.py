"""Load and save documents in the browser editor's JSON format.

WHY: Notes are exchanged as the JSON file the editor downloads
("english_editor_data.json"). Reading those files safely means checking
their shape before trusting it, and writing them back must produce a
file the editor can load again.

HOW: document_schema.json (shipped in this package) describes the file.
Incoming data is validated with jsonschema, then mapped onto the IR
dataclasses. Outgoing documents are mapped back to the same camelCase
keys and written as indented UTF-8 JSON.

RULES:
- All four top-level keys are required: allBlocks, vocabularyList,
  blockCounter, editorText
- Non-UTF-8 files and invalid JSON raise DocumentFormatError, as do
  schema violations
- The schema is loaded once and cached
- Block order in the file is preserved; sorting is the renderer's job
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema

from lingua_notes.core.ir import Block, BlockType, Document, VocabularyItem

SCHEMA_PATH = Path(__file__).resolve().parent / "document_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


class DocumentFormatError(ValueError):
    """A saved document could not be parsed or failed validation."""


def get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def document_from_dict(data: Any) -> Document:
    """Validate a decoded saved file and build a Document.

    Raises:
        DocumentFormatError: If ``data`` does not match the schema.
    """
    try:
        jsonschema.validate(instance=data, schema=get_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise DocumentFormatError(
            "Invalid document at {}: {}".format(location, exc.message)
        ) from exc

    blocks = [
        Block(
            id=raw["id"],
            type=BlockType(raw["type"]),
            content=raw["content"],
            order=raw["order"],
        )
        for raw in data["allBlocks"]
    ]
    vocabulary = [VocabularyItem(id=raw["id"], word=raw["word"]) for raw in data["vocabularyList"]]
    return Document(
        blocks=blocks,
        vocabulary=vocabulary,
        block_counter=data["blockCounter"],
        editor_text=data["editorText"],
    )


def document_to_dict(document: Document) -> Dict[str, Any]:
    return {
        "allBlocks": [
            {
                "id": block.id,
                "type": block.type.value,
                "content": block.content,
                "order": block.order,
            }
            for block in document.blocks
        ],
        "vocabularyList": [{"id": item.id, "word": item.word} for item in document.vocabulary],
        "blockCounter": document.block_counter,
        "editorText": document.editor_text,
    }


def loads_document(text: str) -> Document:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentFormatError("Document is not valid JSON: {}".format(exc)) from exc
    return document_from_dict(data)


def dumps_document(document: Document) -> str:
    return json.dumps(document_to_dict(document), ensure_ascii=False, indent=2)


def load_document(path: Union[str, Path]) -> Document:
    """Read and validate a saved document file.

    Raises:
        DocumentFormatError: If the file is not UTF-8 or not a valid document.
        OSError: If the file cannot be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentFormatError("Document is not UTF-8 text: {}".format(exc)) from exc
    return loads_document(text)


def save_document(document: Document, path: Union[str, Path]) -> Path:
    target = Path(path)
    target.write_text(dumps_document(document) + "\n", encoding="utf-8")
    return target
