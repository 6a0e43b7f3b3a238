"""In-memory vector store for document records."""

import copy
import threading
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from app.models import StoredDocument
from app.utils.logging import get_logger
from app.utils.metrics import get_metrics

from .similarity import DimensionMismatchError

logger = get_logger(__name__)


class VectorStore:
    """Insertion-ordered, lock-protected collection of document records.

    Ids start at 1 and are never reused until ``clear()`` resets the counter.
    Records leave the store as deep copies; stored records are never mutated.
    """

    def __init__(self, enforce_dimensions: bool = True) -> None:
        """Initialize an empty store.

        Args:
            enforce_dimensions: If True, reject embeddings whose length differs
                from the store's established dimensionality. If False, mixed
                dimensionalities are accepted and only fail when compared.
        """
        self.enforce_dimensions = enforce_dimensions
        self._documents: list[StoredDocument] = []
        self._next_id = 1
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def add_document(
        self,
        text: str,
        embedding: Sequence[float],
        metadata: Optional[dict[str, Any]] = None,
    ) -> StoredDocument:
        """Store a document with its embedding.

        Args:
            text: Document text.
            embedding: Vector computed from the text.
            metadata: Optional JSON-compatible metadata, copied on insertion.

        Returns:
            A copy of the stored record with its assigned id and timestamp.

        Raises:
            DimensionMismatchError: If enforcing dimensions and the embedding
                length disagrees with the documents already stored.
        """
        with self._lock:
            if self.enforce_dimensions and self._documents:
                expected = len(self._documents[0].embedding)
                if len(embedding) != expected:
                    logger.error(
                        "Rejected document: embedding has {} dimensions, store has {}",
                        len(embedding),
                        expected,
                    )
                    raise DimensionMismatchError(expected=expected, actual=len(embedding))

            document = StoredDocument(
                id=self._next_id,
                text=text,
                embedding=tuple(embedding),
                metadata=copy.deepcopy(metadata) if metadata else {},
                timestamp=datetime.now(timezone.utc),
            )
            self._documents.append(document)
            self._next_id += 1

        get_metrics().record_document_added(document.id)
        logger.debug("Added document id={} ({} chars)", document.id, len(text))
        return document.model_copy(deep=True)

    def get_document(self, doc_id: int) -> Optional[StoredDocument]:
        """Return a copy of the document with ``doc_id``, or None."""
        with self._lock:
            for doc in self._documents:
                if doc.id == doc_id:
                    return doc.model_copy(deep=True)
        return None

    def delete_document(self, doc_id: int) -> bool:
        """Remove the document with ``doc_id``. Returns True if it existed."""
        with self._lock:
            for index, doc in enumerate(self._documents):
                if doc.id == doc_id:
                    del self._documents[index]
                    break
            else:
                return False

        get_metrics().record_document_deleted(doc_id)
        logger.info("Deleted document id={}", doc_id)
        return True

    def get_all_documents(self) -> list[StoredDocument]:
        """Return copies of all documents in insertion order."""
        with self._lock:
            return [doc.model_copy(deep=True) for doc in self._documents]

    def clear(self) -> None:
        """Remove every document and reset the id counter to 1."""
        with self._lock:
            removed = len(self._documents)
            self._documents = []
            self._next_id = 1
        logger.info("Vector store cleared ({} documents removed)", removed)

    def get_stats(self) -> dict[str, int]:
        """Return ``{"count", "dimensions"}``; dimensions is 0 for an empty store."""
        with self._lock:
            return {
                "count": len(self._documents),
                "dimensions": len(self._documents[0].embedding) if self._documents else 0,
            }
