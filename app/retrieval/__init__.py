"""Retrieval: embeddings, similarity metrics, vector store, and retriever."""

from .embeddings import EMBEDDING_DIMENSIONS, EmbeddingService, generate_embedding
from .retriever import Retriever
from .similarity import DimensionMismatchError, cosine_similarity, euclidean_distance
from .vector_store import VectorStore

__all__ = [
    "DimensionMismatchError",
    "EMBEDDING_DIMENSIONS",
    "EmbeddingService",
    "Retriever",
    "VectorStore",
    "cosine_similarity",
    "euclidean_distance",
    "generate_embedding",
]
