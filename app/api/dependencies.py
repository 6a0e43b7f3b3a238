"""Dependency injection for the embedding service, vector store, and retriever.

Uses FastAPI Depends with process-wide singletons; tests swap them via
app.dependency_overrides.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends

from app.config import settings
from app.retrieval.embeddings import EmbeddingService
from app.retrieval.retriever import Retriever
from app.retrieval.vector_store import VectorStore
from app.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_embedding_service() -> EmbeddingService:
    """Return the shared EmbeddingService (one cache per process)."""
    return EmbeddingService()


# Module-level singleton for the store (shared across requests)
_vector_store_instance: Optional[VectorStore] = None


def get_vector_store() -> VectorStore:
    """Return the process-wide in-memory VectorStore, creating it on first use."""
    global _vector_store_instance
    if _vector_store_instance is None:
        _vector_store_instance = VectorStore(enforce_dimensions=settings.enforce_dimensions)
        logger.info(
            "VectorStore singleton initialized: enforce_dimensions={}",
            settings.enforce_dimensions,
        )
    return _vector_store_instance


def get_retriever(
    vector_store: VectorStore = Depends(get_vector_store),
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> Retriever:
    """Create a retriever over the shared store."""
    return Retriever(
        vector_store=vector_store,
        embedding_service=embedding_service,
        top_k=settings.top_k_results,
    )
