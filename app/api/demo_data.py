"""Sample documents loaded into the store at startup and on reset."""

from app.models import StoredDocument
from app.retrieval.embeddings import EmbeddingService
from app.retrieval.vector_store import VectorStore
from app.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_DOCUMENTS: list[dict] = [
    {"text": "The quick brown fox jumps over the lazy dog", "metadata": {"category": "animals"}},
    {"text": "A fast red fox leaps across the meadow", "metadata": {"category": "animals"}},
    {"text": "Cats sleep for most of the day!", "metadata": {"category": "animals"}},
    {"text": "Python is great for data science and machine learning", "metadata": {"category": "tech"}},
    {"text": "JavaScript runs in every web browser", "metadata": {"category": "tech"}},
    {"text": "What is the best way to learn programming?", "metadata": {"category": "tech"}},
    {"text": "Pizza is Italian food", "metadata": {"category": "food"}},
    {"text": "Sushi was first served in Japan around 1820.", "metadata": {"category": "food"}},
]


def load_demo_documents(
    store: VectorStore,
    embedding_service: EmbeddingService,
) -> list[StoredDocument]:
    """Clear ``store`` and fill it with DEMO_DOCUMENTS. Ids restart at 1."""
    store.clear()
    added = [
        store.add_document(doc["text"], embedding_service.embed_text(doc["text"]), doc["metadata"])
        for doc in DEMO_DOCUMENTS
    ]
    logger.info("Loaded {} demo documents", len(added))
    return added
