"""In-memory document store for the HTTP API.

WHY: The API lets clients build a note block by block (create, edit,
move, delete) and export it. Those requests arrive concurrently, so the
documents they touch need one owner that serializes mutations. An
in-memory store is enough for a single-user tool with no persistence
requirement; clients persist by downloading the saved-file JSON.

HOW: Two components work together:
  StoredDocument — dataclass holding the Document and its timestamps
  DocumentStore  — dict-based store guarded by a threading.RLock, with
                   create/get/list/delete and an ``editing()`` context
                   manager that holds the lock for the whole mutation

RULES:
- All reads and mutations acquire self._lock
- create() raises ValueError once max_documents is reached
- get() returns None for unknown ids; editing() raises KeyError
- editing() bumps updated_at only when the block exits without error
- Document ids are UUID4 hex strings
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from lingua_notes.config import MAX_DOCUMENTS
from lingua_notes.core.ir import Document

logger = logging.getLogger(__name__)


@dataclass
class StoredDocument:
    id: str
    document: Document
    created_at: float
    updated_at: float


class DocumentStore:
    """Thread-safe in-memory store for documents being edited over HTTP."""

    def __init__(self, max_documents: int = MAX_DOCUMENTS) -> None:
        self._documents: Dict[str, StoredDocument] = {}
        self._lock = threading.RLock()
        self.max_documents = max_documents

    def create(self, document: Optional[Document] = None) -> StoredDocument:
        with self._lock:
            if len(self._documents) >= self.max_documents:
                raise ValueError(
                    "Maximum number of documents ({}) reached".format(self.max_documents)
                )
            now = time.time()
            stored = StoredDocument(
                id=uuid.uuid4().hex,
                document=document or Document(),
                created_at=now,
                updated_at=now,
            )
            self._documents[stored.id] = stored

        logger.info("Created document %s with %d blocks", stored.id, len(stored.document.blocks))
        return stored

    def get(self, document_id: str) -> Optional[StoredDocument]:
        with self._lock:
            return self._documents.get(document_id)

    def list(self) -> List[StoredDocument]:
        with self._lock:
            return sorted(self._documents.values(), key=lambda d: d.created_at)

    def delete(self, document_id: str) -> bool:
        with self._lock:
            removed = self._documents.pop(document_id, None)
        if removed is not None:
            logger.info("Deleted document %s", document_id)
        return removed is not None

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()

    @contextmanager
    def editing(self, document_id: str) -> Iterator[Document]:
        """Hold the store lock while the caller mutates one document.

        Raises:
            KeyError: If the document does not exist.
        """
        with self._lock:
            stored = self._documents.get(document_id)
            if stored is None:
                raise KeyError("Document not found: {}".format(document_id))
            yield stored.document
            stored.updated_at = time.time()
