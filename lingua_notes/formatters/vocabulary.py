"""Vocabulary section: dictionary links for each collected word.

RULES:
- Collins, Cambridge, Oxford slugs: trimmed, lowercased, whitespace
  runs become "-", then URL-quoted as encodeURIComponent would
- Google Translate gets the trimmed word, source "en", target from config
- Words are HTML-escaped in visible text
"""

from __future__ import annotations

import html
import re
from typing import List, Tuple
from urllib.parse import quote

from lingua_notes.config import (
    TRANSLATE_SOURCE_LANGUAGE,
    TRANSLATE_TARGET_LANGUAGE,
    VOCABULARY_HEADING,
)
from lingua_notes.core.ir import VocabularyItem

_WHITESPACE_RE = re.compile(r"\s+")

# Characters encodeURIComponent leaves unescaped, on top of quote()'s own.
_ENCODE_URI_SAFE = "!'()*"


def _slug(word: str) -> str:
    return quote(_WHITESPACE_RE.sub("-", word.strip().lower()), safe=_ENCODE_URI_SAFE)


def collins_url(word: str) -> str:
    return "https://www.collinsdictionary.com/dictionary/english/{}".format(_slug(word))


def cambridge_url(word: str) -> str:
    return "https://dictionary.cambridge.org/dictionary/english/{}".format(_slug(word))


def oxford_url(word: str) -> str:
    return "https://www.oxfordlearnersdictionaries.com/definition/english/{}".format(_slug(word))


def google_translate_url(word: str, target: str = TRANSLATE_TARGET_LANGUAGE) -> str:
    return "https://translate.google.com/?sl={}&tl={}&text={}".format(
        TRANSLATE_SOURCE_LANGUAGE, target, quote(word.strip(), safe=_ENCODE_URI_SAFE),
    )


def dictionary_links(word: str) -> List[Tuple[str, str, str]]:
    """(css class, label, url) for every dictionary, in display order."""
    return [
        ("collins", "Collins", collins_url(word)),
        ("cambridge", "Cambridge", cambridge_url(word)),
        ("oxford", "Oxford", oxford_url(word)),
        ("google", "Google", google_translate_url(word)),
    ]


def render_vocabulary(items: List[VocabularyItem]) -> str:
    """The dictionary section, or "" when there are no words."""
    if not items:
        return ""
    entries = []
    for item in items:
        links = "".join(
            '<a href="{url}" target="_blank" class="dict-btn {css}">{label}</a>'.format(
                url=html.escape(url), css=css, label=label,
            )
            for css, label, url in dictionary_links(item.word)
        )
        entries.append(
            '<div class="vocab-item"><div class="vocab-item-word">'
            '<span class="main-word">{word}</span>'
            '<div class="dict-buttons">{links}</div>'
            "</div></div>".format(word=html.escape(item.word), links=links)
        )
    return '<div class="vocabulary-master-block"><h2>{}</h2>{}</div>'.format(
        VOCABULARY_HEADING, "".join(entries),
    )
