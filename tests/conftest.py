"""Shared test fixtures for the lingua_notes test suite.

WHY: Parser, formatter, CLI, and API tests need the same sample
documents and a palette whose colours are predictable. Centralizing
them here keeps every module on the same data.

HOW: Pytest fixtures provide a fresh SpeakerPalette, a palette with a
constant digest, a saved-file dict in the editor's JSON layout, and the
matching Document.

RULES:
- Every fixture returns a fresh object; tests may mutate freely
- Block orders in SAVED_DOCUMENT are deliberately not in list order
"""

import copy
from typing import Any, Dict

import pytest

from lingua_notes.core.colors import SpeakerPalette
from lingua_notes.core.ir import RGB
from lingua_notes.core.storage import document_from_dict


SAVED_DOCUMENT: Dict[str, Any] = {
    "allBlocks": [
        {
            "id": "dialogue-2",
            "type": "dialogue",
            "content": "* At the café\nJohn: Hi\\there\nMary: Hello!",
            "order": 1700000000002,
        },
        {
            "id": "rule-1",
            "type": "rule",
            "content": "* Present Simple\nWe use it for habits.\n** I get up at 7.\n** She works here.",
            "order": 1700000000001,
        },
        {
            "id": "separator-3",
            "type": "separator",
            "content": "",
            "order": 1700000000003,
        },
        {
            "id": "markup-header-4",
            "type": "markup-header",
            "content": "Unit 2",
            "order": 1700000000000.5,
        },
    ],
    "vocabularyList": [
        {"id": "vocab-5", "word": "look up"},
    ],
    "blockCounter": 5,
    "editorText": "scratch text",
}


@pytest.fixture
def saved_document_dict():
    """The sample document in the editor's saved-file layout."""
    return copy.deepcopy(SAVED_DOCUMENT)


@pytest.fixture
def sample_document(saved_document_dict):
    return document_from_dict(saved_document_dict)


@pytest.fixture
def palette():
    """A fresh SHA-1 palette with an empty cache."""
    return SpeakerPalette()


@pytest.fixture
def black_palette():
    """Every speaker is black: background #d9d9d9, border #a6a6a6, label #000000."""
    return SpeakerPalette(digest=lambda name: RGB(0, 0, 0))
