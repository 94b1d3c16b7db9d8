"""Tests for block and vocabulary operations on a Document.

WHY: Saved documents are shared with the browser editor, so ids, order
keys, and move semantics must come out exactly as the editor would
produce them.

HOW: Each test builds a small Document by hand with known order keys
and checks the keys after the operation.
"""

import pytest

from lingua_notes.core.document import (
    add_vocabulary,
    create_block,
    create_header_block,
    delete_block,
    delete_vocabulary,
    edit_block,
    get_block,
    move_block,
    reorder_blocks,
)
from lingua_notes.core.ir import Block, BlockType, Document


def _abc_document():
    return Document(
        blocks=[
            Block(id="rule-1", type=BlockType.RULE, content="a", order=1),
            Block(id="rule-2", type=BlockType.RULE, content="b", order=2),
            Block(id="rule-3", type=BlockType.RULE, content="c", order=3),
        ],
        block_counter=3,
    )


def _ids(document):
    return [b.id for b in document.sorted_blocks()]


# =========================================================================
# Create
# =========================================================================

class TestCreateBlock:

    def test_first_block_uses_now(self):
        document = Document()
        block = create_block(document, BlockType.RULE, "x", now_ms=1000.0)
        assert block.id == "rule-1"
        assert block.order == 1000.0
        assert document.block_counter == 1

    def test_append_steps_past_last(self):
        document = _abc_document()
        block = create_block(document, BlockType.EXAMPLE, "d")
        assert block.id == "example-4"
        assert block.order == 4

    def test_insert_at_top(self):
        document = _abc_document()
        block = create_block(document, BlockType.RULE, "top", insert_after=0)
        assert block.order == 0
        assert _ids(document)[0] == block.id

    def test_insert_between_takes_midpoint(self):
        document = _abc_document()
        block = create_block(document, BlockType.RULE, "mid", insert_after=1)
        assert block.order == 1.5

    def test_insert_after_last(self):
        document = _abc_document()
        block = create_block(document, BlockType.RULE, "end", insert_after=3)
        assert block.order == 4

    @pytest.mark.parametrize("position", [-1, 4])
    def test_invalid_position(self, position):
        document = _abc_document()
        with pytest.raises(ValueError):
            create_block(document, BlockType.RULE, "x", insert_after=position)
        assert len(document.blocks) == 3
        assert document.block_counter == 3

    def test_separator_content_is_dropped(self):
        block = create_block(Document(), BlockType.SEPARATOR, "ignored", now_ms=1.0)
        assert block.id == "separator-1"
        assert block.content == ""

    def test_accepts_type_string(self):
        block = create_block(Document(), "dialogue", "A: b", now_ms=1.0)
        assert block.type is BlockType.DIALOGUE

    def test_header_block_strips_marker(self):
        block = create_header_block(Document(), " * Unit 3 ", now_ms=1.0)
        assert block.type is BlockType.MARKUP_HEADER
        assert block.id == "markup-header-1"
        assert block.content == "Unit 3"


# =========================================================================
# Edit / delete
# =========================================================================

class TestEditAndDelete:

    def test_edit(self):
        document = _abc_document()
        edit_block(document, "rule-2", "changed")
        assert get_block(document, "rule-2").content == "changed"

    def test_edit_unknown_block(self):
        with pytest.raises(KeyError):
            edit_block(_abc_document(), "rule-9", "x")

    @pytest.mark.parametrize("block_type", [BlockType.SEPARATOR, BlockType.MARKUP_HEADER])
    def test_non_editable_types(self, block_type):
        document = Document()
        block = create_block(document, block_type, "x", now_ms=1.0)
        with pytest.raises(ValueError):
            edit_block(document, block.id, "y")

    def test_delete(self):
        document = _abc_document()
        assert delete_block(document, "rule-2") is True
        assert _ids(document) == ["rule-1", "rule-3"]
        assert delete_block(document, "rule-2") is False


# =========================================================================
# Move / reorder
# =========================================================================

class TestMoveBlock:

    def test_move_to_top(self):
        document = _abc_document()
        assert move_block(document, "rule-3", "0") is True
        assert get_block(document, "rule-3").order == 0
        assert _ids(document) == ["rule-3", "rule-1", "rule-2"]

    def test_move_after_last(self):
        document = _abc_document()
        assert move_block(document, "rule-1", "3*") is True
        assert get_block(document, "rule-1").order == 4
        assert _ids(document) == ["rule-2", "rule-3", "rule-1"]

    def test_move_before(self):
        document = _abc_document()
        assert move_block(document, "rule-1", "3") is True
        assert get_block(document, "rule-1").order == 2.5
        assert _ids(document) == ["rule-2", "rule-1", "rule-3"]

    def test_move_after_middle(self):
        document = _abc_document()
        move_block(document, "rule-3", "1*")
        assert get_block(document, "rule-3").order == 1.5

    def test_move_before_first(self):
        document = _abc_document()
        move_block(document, "rule-2", "1")
        assert get_block(document, "rule-2").order == 0

    def test_move_onto_itself_is_noop(self):
        document = _abc_document()
        assert move_block(document, "rule-1", "1") is False
        assert get_block(document, "rule-1").order == 1

    @pytest.mark.parametrize("target", ["x", "4", "-1", "", "*"])
    def test_invalid_targets(self, target):
        with pytest.raises(ValueError):
            move_block(_abc_document(), "rule-1", target)

    def test_unknown_block(self):
        with pytest.raises(KeyError):
            move_block(_abc_document(), "rule-9", "1")


class TestReorderBlocks:

    def test_assigns_sequential_orders(self):
        document = _abc_document()
        reorder_blocks(document, ["rule-3", "rule-1", "rule-2"])
        assert _ids(document) == ["rule-3", "rule-1", "rule-2"]
        assert [b.order for b in document.sorted_blocks()] == [0.0, 1.0, 2.0]

    @pytest.mark.parametrize("ids", [
        ["rule-1", "rule-2"],
        ["rule-1", "rule-2", "rule-2"],
        ["rule-1", "rule-2", "rule-9"],
    ])
    def test_requires_permutation(self, ids):
        with pytest.raises(ValueError):
            reorder_blocks(_abc_document(), ids)


# =========================================================================
# Vocabulary
# =========================================================================

class TestVocabulary:

    def test_adds_one_word_per_line(self):
        document = _abc_document()
        added = add_vocabulary(document, "look up\n\n  give in  \n")
        assert [(i.id, i.word) for i in added] == [("vocab-4", "look up"), ("vocab-5", "give in")]
        assert document.block_counter == 5

    def test_skips_duplicates_case_insensitively(self):
        document = Document()
        add_vocabulary(document, "Look up")
        added = add_vocabulary(document, "look UP\nlook up\nrun")
        assert [i.word for i in added] == ["run"]
        assert [i.word for i in document.vocabulary] == ["Look up", "run"]

    def test_ids_share_the_block_counter(self):
        document = Document()
        add_vocabulary(document, "word")
        block = create_block(document, BlockType.RULE, "x", now_ms=1.0)
        assert block.id == "rule-2"

    def test_delete(self):
        document = Document()
        item = add_vocabulary(document, "word")[0]
        assert delete_vocabulary(document, item.id) is True
        assert document.vocabulary == []
        assert delete_vocabulary(document, item.id) is False
