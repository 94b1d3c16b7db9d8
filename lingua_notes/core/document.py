"""Block store operations: create, edit, delete, reorder, vocabulary.

WHY: The parser sees one block at a time, but a note is an ordered
collection of blocks plus a vocabulary list. These operations keep the
collection consistent the same way the browser editor does, so documents
saved by either side stay interchangeable.

HOW: Functions mutate a Document in place. Ordering uses real-valued
keys: inserting between two blocks takes the midpoint of their keys,
inserting at an end steps one unit past the neighbour. Ids come from a
single counter shared by blocks and vocabulary items.

RULES:
- Block ids are "{type}-{n}", vocabulary ids "vocab-{n}", n = ++counter
- insert_after / move positions are 1-based block numbers; 0 is the top
- Move target grammar: "0", "N" (before block N), "N*" (after block N)
- Separator and markup-header blocks cannot be edited
- Vocabulary words are unique case-insensitively
- Invalid requests raise ValueError; unknown ids raise KeyError
"""

from __future__ import annotations

import time
from typing import Iterable, List, Optional

from lingua_notes.core.ir import Block, BlockType, Document, VocabularyItem
from lingua_notes.core.lines import HEADER_MARKER

NON_EDITABLE_TYPES = frozenset({BlockType.SEPARATOR, BlockType.MARKUP_HEADER})


def _now_ms() -> float:
    return float(int(time.time() * 1000))


def _next_id(document: Document, prefix: str) -> str:
    document.block_counter += 1
    return "{}-{}".format(prefix, document.block_counter)


def _midpoint_or_step(before: Optional[Block], after: Optional[Block], now_ms: float) -> float:
    if before is not None and after is not None:
        return (before.order + after.order) / 2
    if before is not None:
        return before.order + 1
    if after is not None:
        return after.order - 1
    return now_ms


def create_block(
    document: Document,
    block_type: BlockType,
    content: str = "",
    insert_after: Optional[int] = None,
    now_ms: Optional[float] = None,
) -> Block:
    """Create a block and give it an order key.

    Args:
        document: Document to add the block to.
        block_type: Kind of block.
        content: Raw markup (ignored for separators).
        insert_after: None appends; 0 inserts at the top; N inserts after
            the N-th block (1-based) in display order.
        now_ms: Order key for the first block of an empty document;
            defaults to the current epoch milliseconds.

    Raises:
        ValueError: If insert_after is outside 0..len(blocks).
    """
    block_type = BlockType(block_type)
    ordered = document.sorted_blocks()
    now = _now_ms() if now_ms is None else now_ms

    if insert_after is None:
        order = _midpoint_or_step(ordered[-1] if ordered else None, None, now)
    elif 0 <= insert_after <= len(ordered):
        before = ordered[insert_after - 1] if insert_after > 0 else None
        after = ordered[insert_after] if insert_after < len(ordered) else None
        order = _midpoint_or_step(before, after, now)
    else:
        raise ValueError(
            "Invalid block number {}. Expected 0 to {}.".format(insert_after, len(ordered))
        )

    if block_type is BlockType.SEPARATOR:
        content = ""
    block = Block(id=_next_id(document, block_type.value), type=block_type, content=content, order=order)
    document.blocks.append(block)
    return block


def create_header_block(
    document: Document,
    text: str,
    insert_after: Optional[int] = None,
    now_ms: Optional[float] = None,
) -> Block:
    """Create a markup-header block; one leading "*" is dropped."""
    content = text.strip()
    if content.startswith(HEADER_MARKER):
        content = content[len(HEADER_MARKER):].strip()
    return create_block(document, BlockType.MARKUP_HEADER, content, insert_after, now_ms)


def get_block(document: Document, block_id: str) -> Block:
    block = document.find_block(block_id)
    if block is None:
        raise KeyError("Block not found: {}".format(block_id))
    return block


def edit_block(document: Document, block_id: str, content: str) -> Block:
    block = get_block(document, block_id)
    if block.type in NON_EDITABLE_TYPES:
        raise ValueError("Blocks of type '{}' cannot be edited".format(block.type.value))
    block.content = content
    return block


def delete_block(document: Document, block_id: str) -> bool:
    remaining = [b for b in document.blocks if b.id != block_id]
    removed = len(remaining) != len(document.blocks)
    document.blocks = remaining
    return removed


def _parse_move_target(target: str, count: int) -> tuple:
    text = target.strip()
    if text == "0":
        return 0, False
    insert_after = text.endswith("*")
    number = text[:-1] if insert_after else text
    try:
        index = int(number) - 1
    except ValueError:
        raise ValueError("Invalid move target {!r}".format(target)) from None
    if index < 0 or index >= count:
        raise ValueError(
            "Invalid block number {!r}. Expected 1 to {} (or 0 for the top).".format(target, count)
        )
    return index, insert_after


def move_block(document: Document, block_id: str, target: str) -> bool:
    """Move a block to a new display position.

    Returns:
        True if the block's order changed, False for a no-op move.

    Raises:
        KeyError: Unknown block id.
        ValueError: Malformed or out-of-range target.
    """
    ordered = document.sorted_blocks()
    block = get_block(document, block_id)
    from_index = ordered.index(block)
    target_index, insert_after = _parse_move_target(target, len(ordered))

    if target_index == from_index and not insert_after:
        return False

    if target.strip() == "0":
        block.order = ordered[0].order - 1
    elif insert_after:
        following = ordered[target_index + 1] if target_index + 1 < len(ordered) else None
        block.order = _midpoint_or_step(ordered[target_index], following, _now_ms())
    else:
        preceding = ordered[target_index - 1] if target_index > 0 else None
        target_block = ordered[target_index]
        if preceding is None:
            block.order = target_block.order - 1
        else:
            block.order = (preceding.order + target_block.order) / 2
    return True


def reorder_blocks(document: Document, block_ids: Iterable[str]) -> None:
    """Assign orders 0..n-1 following ``block_ids`` (drag-and-drop result).

    Raises:
        ValueError: If block_ids is not a permutation of the document's ids.
    """
    ids = list(block_ids)
    if sorted(ids) != sorted(b.id for b in document.blocks):
        raise ValueError("Reorder must list every block id exactly once")
    for position, block_id in enumerate(ids):
        get_block(document, block_id).order = float(position)


def add_vocabulary(document: Document, text: str) -> List[VocabularyItem]:
    """Add one word per non-empty line, skipping words already present."""
    known = {item.word.lower() for item in document.vocabulary}
    added: List[VocabularyItem] = []
    for line in text.split("\n"):
        word = line.strip()
        if not word or word.lower() in known:
            continue
        item = VocabularyItem(id=_next_id(document, "vocab"), word=word)
        document.vocabulary.append(item)
        known.add(word.lower())
        added.append(item)
    return added


def delete_vocabulary(document: Document, item_id: str) -> bool:
    remaining = [item for item in document.vocabulary if item.id != item_id]
    removed = len(remaining) != len(document.vocabulary)
    document.vocabulary = remaining
    return removed
