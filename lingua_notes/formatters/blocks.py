"""Block renderers: one function per block type.

WHY: The parser knows nothing about block types except whether dialogue
recognition is on. Choosing the wrapper markup and that flag happens
exactly once, here, at the block-to-fragment boundary.

HOW: BLOCK_RENDERERS maps every BlockType to a function taking the
block's content and a palette. render_block() looks the type up; the
table is closed, so a missing entry is a programming error.

RULES:
- Only dialogue blocks parse with dialogue context on
- Separator blocks ignore their content and render a fixed rule
- Markup-header blocks render their raw content without parsing
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from lingua_notes.core.colors import SpeakerPalette
from lingua_notes.core.ir import Block, BlockType
from lingua_notes.core.splitter import parse_block_content

BlockRenderer = Callable[[str, Optional[SpeakerPalette]], str]


def _parsed(css_class: str, dialogue_context: bool = False) -> BlockRenderer:
    def render(content: str, palette: Optional[SpeakerPalette] = None) -> str:
        inner = parse_block_content(content, dialogue_context=dialogue_context, palette=palette)
        return '<div class="{}">{}</div>'.format(css_class, inner)
    return render


def render_separator(content: str, palette: Optional[SpeakerPalette] = None) -> str:
    return '<div class="separator-wrapper"><hr class="compact-separator"></div>'


def render_markup_header(content: str, palette: Optional[SpeakerPalette] = None) -> str:
    return '<div class="markup-header-block">{}</div>'.format(content)


BLOCK_RENDERERS: Dict[BlockType, BlockRenderer] = {
    BlockType.RULE: _parsed("rule-block"),
    BlockType.DIALOGUE: _parsed("dialogue-block", dialogue_context=True),
    BlockType.EXAMPLE: _parsed("example-block"),
    BlockType.CENTERED: _parsed("centered-block"),
    BlockType.SEPARATOR: render_separator,
    BlockType.MARKUP_HEADER: render_markup_header,
}


def render_block(block: Block, palette: Optional[SpeakerPalette] = None) -> str:
    return BLOCK_RENDERERS[BlockType(block.type)](block.content, palette)
