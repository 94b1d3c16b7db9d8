"""Configuration constants, export defaults, and .env loading.

WHY: Centralizes configurable values (export title, page language,
dictionary target language, server address, colour weights) so they are
easy to find and override without touching rendering logic.

HOW: python-dotenv loads the .env file on import. Constants are module
level values read from the environment with sensible defaults.
load_stylesheet() reads an optional CSS file for inlining into exports.

RULES:
- All defaults can be overridden via LINGUA_NOTES_* environment variables
- Colour blend weights are fixed; saved exports depend on them
- load_stylesheet() raises ValueError with a clear message on failure
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Dialogue colour blending
# ---------------------------------------------------------------------------

BACKGROUND_WHITE_WEIGHT = 0.85
BORDER_WHITE_WEIGHT = 0.65
SPEAKER_BLACK_WEIGHT = 0.6

# ---------------------------------------------------------------------------
# Export defaults
# ---------------------------------------------------------------------------

DEFAULT_EXPORT_TITLE = os.getenv("LINGUA_NOTES_EXPORT_TITLE", "Мои заметки по английскому")
HTML_LANG = os.getenv("LINGUA_NOTES_HTML_LANG", "ru")
TRANSLATE_SOURCE_LANGUAGE = "en"
TRANSLATE_TARGET_LANGUAGE = os.getenv("LINGUA_NOTES_TRANSLATE_TARGET", "ru")
VOCABULARY_HEADING = os.getenv("LINGUA_NOTES_VOCABULARY_HEADING", "📖 Словарь")
EMPTY_DOCUMENT_MESSAGE = "Нет содержимого для предварительного просмотра."
DEFAULT_STYLESHEET = os.getenv("LINGUA_NOTES_STYLESHEET") or None

# ---------------------------------------------------------------------------
# HTTP service
# ---------------------------------------------------------------------------

API_HOST = os.getenv("LINGUA_NOTES_HOST", "127.0.0.1")
API_PORT = int(os.getenv("LINGUA_NOTES_PORT", "8000"))
MAX_DOCUMENTS = int(os.getenv("LINGUA_NOTES_MAX_DOCUMENTS", "100"))


def load_stylesheet(path: Optional[str]) -> str:
    """Read a CSS file to inline into exported pages.

    RULES:
    - None or "" returns "" (export without styles)
    - A missing or unreadable file raises ValueError
    """
    if not path:
        return ""
    css_path = Path(path)
    try:
        return css_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError("Cannot read stylesheet {}: {}".format(css_path, exc)) from exc
