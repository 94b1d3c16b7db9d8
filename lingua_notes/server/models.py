"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: Each endpoint has its own request and/or response model. Block
types reuse the IR's BlockType enum so the accepted values are exactly
the ones saved files use. All fields carry descriptions for /docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Response models never expose store internals (locks, counters aside
  from the saved-file blockCounter)
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from lingua_notes.core.ir import BlockType

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RenderRequest(BaseModel):
    """Markup for a single block to render without storing it."""

    content: str = Field(description="Raw block markup.")
    block_type: BlockType = Field(
        default=BlockType.RULE,
        description="Block type; only 'dialogue' enables speaker lines.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {"content": "John: Hi\\there\nMary: Hello!", "block_type": "dialogue"},
        ]
    }}


class CreateBlockRequest(BaseModel):
    type: BlockType = Field(description="Kind of block to create.")
    content: str = Field(default="", description="Raw block markup.")
    insert_after: Optional[int] = Field(
        default=None,
        description="Insert after this 1-based block number; 0 inserts at the top. "
                    "Omit to append.",
    )


class EditBlockRequest(BaseModel):
    content: str = Field(description="New raw markup for the block.")


class MoveBlockRequest(BaseModel):
    target: str = Field(
        description="'0' moves to the top, 'N' before block N, 'N*' after block N.",
    )


class ReorderRequest(BaseModel):
    block_ids: List[str] = Field(description="Every block id, in the new display order.")


class AddVocabularyRequest(BaseModel):
    text: str = Field(description="One word or phrase per line.")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class FragmentModel(BaseModel):
    kind: str = Field(description="Fragment kind, e.g. 'paragraph', 'dialogue-line'.")
    html: str = Field(description="Rendered HTML of the fragment.")


class RenderResponse(BaseModel):
    """Result of rendering one block."""

    block_type: BlockType = Field(description="Block type used for rendering.")
    fragments: List[FragmentModel] = Field(description="Parsed fragments in order.")
    html: str = Field(description="Block HTML including its type wrapper.")


class BlockModel(BaseModel):
    id: str = Field(description="Block identifier, e.g. 'rule-3'.")
    type: BlockType = Field(description="Block type.")
    content: str = Field(description="Raw block markup.")
    order: float = Field(description="Sort key; blocks display in ascending order.")


class VocabularyItemModel(BaseModel):
    id: str = Field(description="Vocabulary item identifier, e.g. 'vocab-7'.")
    word: str = Field(description="The collected word or phrase.")


class DocumentResponse(BaseModel):
    """A stored document with blocks in display order."""

    id: str = Field(description="Document identifier (UUID hex).")
    created_at: float = Field(description="Creation timestamp (Unix epoch seconds).")
    updated_at: float = Field(description="Last modification timestamp (Unix epoch seconds).")
    blocks: List[BlockModel] = Field(description="Blocks sorted by order.")
    vocabulary: List[VocabularyItemModel] = Field(description="Collected words.")


class MoveBlockResponse(BaseModel):
    moved: bool = Field(description="False when the move left the block where it was.")
    block: BlockModel = Field(description="The block after the move.")


class VocabularyAddedResponse(BaseModel):
    added: List[VocabularyItemModel] = Field(
        description="Items actually added; duplicates and blank lines are skipped.",
    )


class SpeakerColorResponse(BaseModel):
    """Colours a dialogue line uses for one speaker."""

    speaker: str = Field(description="Speaker name as requested.")
    base: str = Field(description="Base colour derived from the name (#rrggbb).")
    background: str = Field(description="Line background colour (#rrggbb).")
    border: str = Field(description="Line border colour (#rrggbb).")
    label: str = Field(description="Speaker label colour (#rrggbb).")


class FormatInfo(BaseModel):
    key: str = Field(description="Format identifier used in export paths.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-notes.html').")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
