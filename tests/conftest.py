"""Pytest configuration and shared fixtures."""

import pytest

from app.retrieval.embeddings import EmbeddingService
from app.retrieval.retriever import Retriever
from app.retrieval.vector_store import VectorStore

FOX_AND_PIZZA = [
    ("The quick brown fox jumps", {"category": "animals"}),
    ("A fast red fox leaps", {"category": "animals"}),
    ("Pizza is Italian food", {"category": "food"}),
]


# --- Core component fixtures ---


@pytest.fixture
def embedding_service() -> EmbeddingService:
    """Fresh EmbeddingService with an empty cache."""
    return EmbeddingService()


@pytest.fixture
def vector_store() -> VectorStore:
    """Empty store enforcing uniform dimensions."""
    return VectorStore()


@pytest.fixture
def populated_store(vector_store, embedding_service) -> VectorStore:
    """Store holding two fox documents and one pizza document (ids 1-3)."""
    for text, metadata in FOX_AND_PIZZA:
        vector_store.add_document(text, embedding_service.embed_text(text), metadata)
    return vector_store


@pytest.fixture
def retriever(populated_store, embedding_service) -> Retriever:
    """Retriever over populated_store."""
    return Retriever(populated_store, embedding_service=embedding_service, top_k=5)


# --- API client fixture ---


@pytest.fixture
def api_client(vector_store, embedding_service):
    """TestClient whose store and embedder are the per-test fixtures."""
    from fastapi.testclient import TestClient

    from app.api.dependencies import get_embedding_service, get_vector_store
    from app.main import app

    app.dependency_overrides[get_vector_store] = lambda: vector_store
    app.dependency_overrides[get_embedding_service] = lambda: embedding_service
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Text fixtures ---


@pytest.fixture
def sample_text_file(tmp_path):
    """A short multi-sentence text file for bulk ingestion tests."""
    path = tmp_path / "guide.txt"
    path.write_text(
        "Corn needs nitrogen early in the season. "
        "Soybeans fix their own nitrogen! "
        "When should wheat be planted? "
        "Plant winter wheat 10 to 14 days after the fly-free date.",
        encoding="utf-8",
    )
    return path
