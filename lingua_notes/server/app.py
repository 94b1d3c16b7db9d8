"""FastAPI application: render markup and edit documents over HTTP.

WHY: A browser front end (or any other client) needs the same parser
and exports the CLI uses, without reimplementing the markup grammar in
JavaScript. FastAPI provides request validation, OpenAPI docs, and a
test client.

HOW: Stateless endpoints render one block or report speaker colours.
Stateful endpoints keep documents in an in-memory DocumentStore and
apply the block store operations from core.document under the store
lock. Exports run any registered formatter over a stored document.

RULES:
- Error responses use the ErrorResponse schema
- Unknown document, block, or format → 404
- Invalid operations (bad move target, editing a separator) → 400
- Invalid saved-file JSON → 422; store full → 429
- Blocks are always returned in display order
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import Response

from lingua_notes import __version__
from lingua_notes.config import API_HOST, API_PORT
from lingua_notes.core.colors import default_palette, to_hex
from lingua_notes.core.document import (
    add_vocabulary,
    create_block,
    delete_block,
    delete_vocabulary,
    edit_block,
    get_block,
    move_block,
    reorder_blocks,
)
from lingua_notes.core.ir import Block, BlockType
from lingua_notes.core.splitter import parse_block_fragments
from lingua_notes.core.storage import DocumentFormatError, document_from_dict, document_to_dict
from lingua_notes.formatters import FORMATTERS
from lingua_notes.formatters.blocks import render_block
from lingua_notes.server.models import (
    AddVocabularyRequest,
    BlockModel,
    CreateBlockRequest,
    DocumentResponse,
    EditBlockRequest,
    ErrorResponse,
    FormatInfo,
    FragmentModel,
    HealthResponse,
    MoveBlockRequest,
    MoveBlockResponse,
    RenderRequest,
    RenderResponse,
    ReorderRequest,
    SpeakerColorResponse,
    VocabularyAddedResponse,
    VocabularyItemModel,
)
from lingua_notes.server.store import DocumentStore, StoredDocument

logger = logging.getLogger(__name__)

document_store = DocumentStore()

app = FastAPI(
    title="Lingua Notes API",
    description=(
        "Render language-learning notes written in the block markup "
        "(headers, example groups, separators, columns, dialogue) to HTML, "
        "and build documents block by block for export."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Document or block not found"}}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _block_to_model(block: Block) -> BlockModel:
    return BlockModel(id=block.id, type=block.type, content=block.content, order=block.order)


def _document_to_response(stored: StoredDocument) -> DocumentResponse:
    return DocumentResponse(
        id=stored.id,
        created_at=stored.created_at,
        updated_at=stored.updated_at,
        blocks=[_block_to_model(b) for b in stored.document.sorted_blocks()],
        vocabulary=[VocabularyItemModel(id=v.id, word=v.word) for v in stored.document.vocabulary],
    )


def _get_stored(document_id: str) -> StoredDocument:
    stored = document_store.get(document_id)
    if stored is None:
        raise HTTPException(status_code=404, detail="Document not found: {}".format(document_id))
    return stored


def _not_found(exc: KeyError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc.args[0]) if exc.args else "Not found")


# ---------------------------------------------------------------------------
# Endpoints: Rendering
# ---------------------------------------------------------------------------


@app.post(
    "/render",
    response_model=RenderResponse,
    tags=["render"],
    summary="Render one block of markup",
    description="Parse block content and return its fragments and wrapped HTML. Nothing is stored.",
)
async def render(request: RenderRequest) -> RenderResponse:
    dialogue = request.block_type is BlockType.DIALOGUE
    if request.block_type in (BlockType.SEPARATOR, BlockType.MARKUP_HEADER):
        fragments = []
    else:
        fragments = parse_block_fragments(request.content, dialogue_context=dialogue, palette=default_palette)
    block = Block(id="preview", type=request.block_type, content=request.content)
    return RenderResponse(
        block_type=request.block_type,
        fragments=[FragmentModel(kind=f.kind.value, html=f.html) for f in fragments],
        html=render_block(block, default_palette),
    )


@app.get(
    "/colors/{speaker}",
    response_model=SpeakerColorResponse,
    tags=["render"],
    summary="Speaker colours",
    description="The deterministic colours dialogue lines use for a speaker name.",
)
async def speaker_colors(speaker: str) -> SpeakerColorResponse:
    colors = default_palette.dialogue_colors(speaker)
    return SpeakerColorResponse(
        speaker=speaker,
        base=to_hex(colors.base),
        background=to_hex(colors.background),
        border=to_hex(colors.border),
        label=to_hex(colors.speaker),
    )


# ---------------------------------------------------------------------------
# Endpoints: Documents
# ---------------------------------------------------------------------------


@app.post(
    "/documents",
    response_model=DocumentResponse,
    status_code=201,
    tags=["documents"],
    summary="Create a document",
    description="Create an empty document, or import a saved editor file sent as the body.",
    responses={
        422: {"model": ErrorResponse, "description": "Saved file is invalid"},
        429: {"model": ErrorResponse, "description": "Too many documents"},
    },
)
async def create_document(
    saved: Optional[Dict[str, Any]] = Body(default=None),
) -> DocumentResponse:
    document = None
    if saved is not None:
        try:
            document = document_from_dict(saved)
        except DocumentFormatError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
    try:
        stored = document_store.create(document)
    except ValueError as exc:
        raise HTTPException(status_code=429, detail=str(exc))
    return _document_to_response(stored)


@app.get(
    "/documents",
    response_model=List[DocumentResponse],
    tags=["documents"],
    summary="List documents",
    description="All stored documents, oldest first.",
)
async def list_documents() -> List[DocumentResponse]:
    return [_document_to_response(stored) for stored in document_store.list()]


@app.get(
    "/documents/{document_id}",
    response_model=DocumentResponse,
    tags=["documents"],
    summary="Get a document",
    responses=_NOT_FOUND,
)
async def get_document(document_id: str) -> DocumentResponse:
    return _document_to_response(_get_stored(document_id))


@app.get(
    "/documents/{document_id}/saved",
    tags=["documents"],
    summary="Download the saved-file JSON",
    description="The document in the editor's save format, loadable by the editor and the CLI.",
    responses=_NOT_FOUND,
)
async def get_saved_document(document_id: str) -> Dict[str, Any]:
    return document_to_dict(_get_stored(document_id).document)


@app.delete(
    "/documents/{document_id}",
    status_code=204,
    tags=["documents"],
    summary="Delete a document",
    responses=_NOT_FOUND,
)
async def delete_document(document_id: str) -> Response:
    if not document_store.delete(document_id):
        raise HTTPException(status_code=404, detail="Document not found: {}".format(document_id))
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Endpoints: Blocks
# ---------------------------------------------------------------------------


@app.post(
    "/documents/{document_id}/blocks",
    response_model=BlockModel,
    status_code=201,
    tags=["blocks"],
    summary="Create a block",
    responses={**_NOT_FOUND, 400: {"model": ErrorResponse, "description": "Invalid position"}},
)
async def add_block(document_id: str, request: CreateBlockRequest) -> BlockModel:
    try:
        with document_store.editing(document_id) as document:
            block = create_block(document, request.type, request.content, request.insert_after)
    except KeyError as exc:
        raise _not_found(exc)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _block_to_model(block)


@app.patch(
    "/documents/{document_id}/blocks/{block_id}",
    response_model=BlockModel,
    tags=["blocks"],
    summary="Edit a block's content",
    responses={**_NOT_FOUND, 400: {"model": ErrorResponse, "description": "Block is not editable"}},
)
async def update_block(document_id: str, block_id: str, request: EditBlockRequest) -> BlockModel:
    try:
        with document_store.editing(document_id) as document:
            block = edit_block(document, block_id, request.content)
    except KeyError as exc:
        raise _not_found(exc)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _block_to_model(block)


@app.post(
    "/documents/{document_id}/blocks/{block_id}/move",
    response_model=MoveBlockResponse,
    tags=["blocks"],
    summary="Move a block",
    responses={**_NOT_FOUND, 400: {"model": ErrorResponse, "description": "Invalid target"}},
)
async def move(document_id: str, block_id: str, request: MoveBlockRequest) -> MoveBlockResponse:
    try:
        with document_store.editing(document_id) as document:
            moved = move_block(document, block_id, request.target)
            block = get_block(document, block_id)
    except KeyError as exc:
        raise _not_found(exc)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return MoveBlockResponse(moved=moved, block=_block_to_model(block))


@app.put(
    "/documents/{document_id}/blocks/order",
    response_model=DocumentResponse,
    tags=["blocks"],
    summary="Reorder all blocks",
    responses={**_NOT_FOUND, 400: {"model": ErrorResponse, "description": "Ids do not match"}},
)
async def reorder(document_id: str, request: ReorderRequest) -> DocumentResponse:
    try:
        with document_store.editing(document_id) as document:
            reorder_blocks(document, request.block_ids)
    except KeyError as exc:
        raise _not_found(exc)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _document_to_response(_get_stored(document_id))


@app.delete(
    "/documents/{document_id}/blocks/{block_id}",
    status_code=204,
    tags=["blocks"],
    summary="Delete a block",
    responses=_NOT_FOUND,
)
async def remove_block(document_id: str, block_id: str) -> Response:
    try:
        with document_store.editing(document_id) as document:
            removed = delete_block(document, block_id)
    except KeyError as exc:
        raise _not_found(exc)
    if not removed:
        raise HTTPException(status_code=404, detail="Block not found: {}".format(block_id))
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Endpoints: Vocabulary
# ---------------------------------------------------------------------------


@app.post(
    "/documents/{document_id}/vocabulary",
    response_model=VocabularyAddedResponse,
    status_code=201,
    tags=["vocabulary"],
    summary="Add vocabulary words",
    responses=_NOT_FOUND,
)
async def add_words(document_id: str, request: AddVocabularyRequest) -> VocabularyAddedResponse:
    try:
        with document_store.editing(document_id) as document:
            added = add_vocabulary(document, request.text)
    except KeyError as exc:
        raise _not_found(exc)
    return VocabularyAddedResponse(added=[VocabularyItemModel(id=v.id, word=v.word) for v in added])


@app.delete(
    "/documents/{document_id}/vocabulary/{item_id}",
    status_code=204,
    tags=["vocabulary"],
    summary="Delete a vocabulary word",
    responses=_NOT_FOUND,
)
async def remove_word(document_id: str, item_id: str) -> Response:
    try:
        with document_store.editing(document_id) as document:
            removed = delete_vocabulary(document, item_id)
    except KeyError as exc:
        raise _not_found(exc)
    if not removed:
        raise HTTPException(status_code=404, detail="Vocabulary item not found: {}".format(item_id))
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Endpoints: Export and formats
# ---------------------------------------------------------------------------


@app.get(
    "/documents/{document_id}/export/{format_key}",
    tags=["export"],
    summary="Export a document",
    description="Run a registered formatter over the document and return the file.",
    responses={404: {"model": ErrorResponse, "description": "Document or format not found"}},
)
async def export_document(document_id: str, format_key: str, title: Optional[str] = None) -> Response:
    formatter_cls = FORMATTERS.get(format_key)
    if formatter_cls is None:
        available = ", ".join(sorted(FORMATTERS.keys()))
        raise HTTPException(
            status_code=404,
            detail="Unknown format '{}'. Available: {}".format(format_key, available),
        )

    stored = _get_stored(document_id)
    formatter = formatter_cls(palette=default_palette)
    output = formatter.format(stored.document, title=title)[0]
    logger.info("Exported document %s as %s", stored.id, format_key)

    filename = "{}{}".format(stored.id, output.suffix)
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["export"],
    summary="List available export formats",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the lingua-notes-api console script."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=API_HOST, port=API_PORT)
