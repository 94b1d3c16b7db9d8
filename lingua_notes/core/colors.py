"""Deterministic speaker colours for dialogue lines.

WHY: Dialogue blocks tint each speaker's lines so a learner can follow
who is talking. The same name must get the same colour in every block,
every session, and every export, without the user picking colours.

HOW: Normalize the name (lowercase, trim), take its SHA-1 digest, and use
the first three bytes as R, G, B. Shades for the bubble background,
border, and speaker label are linear blends toward white or black.
SpeakerPalette memoizes base colours per normalized name behind a lock
so one palette can be shared between request threads.

RULES:
- color_of() is a pure function of the normalized name
- blend() rounds half-up per channel, matching the browser editor
- Background = 85% toward white, border = 65% toward white,
  speaker label = 60% toward black
- Hex output is lowercase "#rrggbb"
"""

from __future__ import annotations

import hashlib
import logging
import math
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from lingua_notes.config import (
    BACKGROUND_WHITE_WEIGHT,
    BORDER_WHITE_WEIGHT,
    SPEAKER_BLACK_WEIGHT,
)
from lingua_notes.core.ir import RGB

logger = logging.getLogger(__name__)

WHITE = RGB(255, 255, 255)
BLACK = RGB(0, 0, 0)

# Used when a speaker's colour cannot be computed.
DEFAULT_SPEAKER_COLOR = RGB(128, 128, 128)


def normalize_speaker(name: str) -> str:
    return name.lower().strip()


def color_of(name: str) -> RGB:
    """Base colour for a speaker name: first three bytes of SHA-1."""
    digest = hashlib.sha1(normalize_speaker(name).encode("utf-8")).digest()
    return RGB(digest[0], digest[1], digest[2])


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def blend(color: RGB, other: RGB, weight: float) -> RGB:
    """Linearly interpolate ``color`` toward ``other`` by ``weight`` (0..1)."""
    return RGB(*(
        _round_half_up(a * (1 - weight) + b * weight)
        for a, b in zip(color, other)
    ))


def to_hex(color: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


@dataclass(frozen=True)
class DialogueColors:
    """The three shades used to draw one speaker's dialogue line."""

    base: RGB
    background: RGB
    border: RGB
    speaker: RGB

    @classmethod
    def from_base(cls, base: RGB) -> DialogueColors:
        return cls(
            base=base,
            background=blend(base, WHITE, BACKGROUND_WHITE_WEIGHT),
            border=blend(base, WHITE, BORDER_WHITE_WEIGHT),
            speaker=blend(base, BLACK, SPEAKER_BLACK_WEIGHT),
        )


class SpeakerPalette:
    """Thread-safe memo of base colours keyed by normalized speaker name.

    WHY: A long dialogue repeats the same few speakers; hashing each
    occurrence again is wasted work, and a shared cache keeps exports
    and API responses consistent with each other.

    HOW: A dict guarded by a threading.Lock. The digest function is
    injectable so tests (and alternative backends) can replace it.

    RULES:
    - Keys are normalized names, so "Anna" and " anna " share an entry
    - A failing digest is not cached; the error propagates to the caller
    """

    def __init__(self, digest: Optional[Callable[[str], RGB]] = None) -> None:
        self._digest = digest or color_of
        self._colors: Dict[str, RGB] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._colors)

    def base_color(self, name: str) -> RGB:
        key = normalize_speaker(name)
        with self._lock:
            cached = self._colors.get(key)
        if cached is not None:
            return cached
        color = self._digest(key)
        with self._lock:
            self._colors.setdefault(key, color)
            return self._colors[key]

    def dialogue_colors(self, name: str) -> DialogueColors:
        """Shades for a speaker, falling back to grey if the digest fails."""
        try:
            base = self.base_color(name)
        except ValueError:
            logger.warning("Colour lookup failed for speaker %r; using default", name)
            base = DEFAULT_SPEAKER_COLOR
        return DialogueColors.from_base(base)

    def clear(self) -> None:
        with self._lock:
            self._colors.clear()


default_palette = SpeakerPalette()
