"""Ranked top-K retrieval by exhaustive scan of the vector store."""

import math
import time
from typing import Callable, List, Optional, Sequence

from app.config import settings
from app.models import SearchResult, StoredDocument
from app.utils.logging import get_logger
from app.utils.metrics import get_metrics

from .embeddings import EmbeddingService
from .similarity import cosine_similarity, euclidean_distance
from .vector_store import VectorStore

logger = get_logger(__name__)

METRICS = ("cosine", "euclidean")


def _score_all(
    documents: List[StoredDocument],
    query_vector: Sequence[float],
    metric: Callable[[Sequence[float], Sequence[float]], float],
) -> List[tuple[StoredDocument, float]]:
    """Apply ``metric`` to every document in order. Dimension errors propagate."""
    return [(doc, metric(query_vector, doc.embedding)) for doc in documents]


def _to_result(doc: StoredDocument, **scores: float) -> SearchResult:
    return SearchResult(**dict(doc), **scores)


class Retriever:
    """Scores every stored document against a query vector and ranks them."""

    def __init__(
        self,
        vector_store: VectorStore,
        embedding_service: Optional[EmbeddingService] = None,
        top_k: Optional[int] = None,
    ) -> None:
        """Initialize the retriever.

        Args:
            vector_store: Store to scan.
            embedding_service: Used by search_text to embed queries.
            top_k: Default result count. Uses settings.top_k_results if None.
        """
        self.vector_store = vector_store
        self.embedding_service = embedding_service
        self.top_k = top_k if top_k is not None else settings.top_k_results

    def search_by_similarity(
        self,
        query_vector: Sequence[float],
        top_k: Optional[int] = None,
        threshold: float = 0.0,
    ) -> List[SearchResult]:
        """Return documents with cosine similarity >= threshold, best first.

        Ties keep store insertion order.

        Raises:
            DimensionMismatchError: On the first document whose embedding
                length differs from the query's.
        """
        k = self._resolve_top_k(top_k)
        scored = _score_all(self.vector_store.get_all_documents(), query_vector, cosine_similarity)
        kept = [item for item in scored if item[1] >= threshold]
        kept.sort(key=lambda item: item[1], reverse=True)
        return [_to_result(doc, score=score) for doc, score in kept[:k]]

    def search_by_distance(
        self,
        query_vector: Sequence[float],
        top_k: Optional[int] = None,
        max_distance: Optional[float] = None,
    ) -> List[SearchResult]:
        """Return documents within max_distance (Euclidean), closest first.

        Ties keep store insertion order.

        Raises:
            DimensionMismatchError: On the first document whose embedding
                length differs from the query's.
        """
        k = self._resolve_top_k(top_k)
        limit = math.inf if max_distance is None else max_distance
        scored = _score_all(self.vector_store.get_all_documents(), query_vector, euclidean_distance)
        kept = [item for item in scored if item[1] <= limit]
        kept.sort(key=lambda item: item[1])
        return [_to_result(doc, distance=distance) for doc, distance in kept[:k]]

    def search(
        self,
        query_vector: Sequence[float],
        top_k: Optional[int] = None,
        threshold: float = 0.0,
        metric: str = "cosine",
        max_distance: Optional[float] = None,
    ) -> List[SearchResult]:
        """Rank stored documents against ``query_vector`` using ``metric``.

        Args:
            query_vector: Vector with the same dimensionality as the store.
            top_k: Maximum results. Defaults to the retriever's top_k.
            threshold: Minimum cosine similarity (cosine only).
            metric: "cosine" or "euclidean".
            max_distance: Maximum distance (euclidean only); None is unbounded.

        Raises:
            ValueError: For an unknown metric or top_k < 1.
            DimensionMismatchError: If any stored vector disagrees with the query.
        """
        if metric == "cosine":
            return self.search_by_similarity(query_vector, top_k=top_k, threshold=threshold)
        if metric == "euclidean":
            return self.search_by_distance(query_vector, top_k=top_k, max_distance=max_distance)
        raise ValueError(f"Unknown metric '{metric}'. Use one of: {', '.join(METRICS)}")

    def search_text(
        self,
        query: str,
        top_k: Optional[int] = None,
        threshold: float = 0.0,
        metric: str = "cosine",
        max_distance: Optional[float] = None,
    ) -> List[SearchResult]:
        """Embed ``query`` and search. Logs latency and records retrieval metrics."""
        if self.embedding_service is None:
            raise RuntimeError("Retriever has no embedding service; use search() with a vector")

        t0 = time.perf_counter()
        query_vector = self.embedding_service.embed_text(query)
        results = self.search(
            query_vector,
            top_k=top_k,
            threshold=threshold,
            metric=metric,
            max_distance=max_distance,
        )
        elapsed = time.perf_counter() - t0
        logger.info(
            "search_text: {} results in {:.4f}s (metric={}, query='{}')",
            len(results),
            elapsed,
            metric,
            query[:50],
        )
        get_metrics().record_search(method=metric, duration=elapsed, results_returned=len(results))
        return results

    def _resolve_top_k(self, top_k: Optional[int]) -> int:
        k = self.top_k if top_k is None else top_k
        if k < 1:
            raise ValueError(f"top_k must be >= 1, got {k}")
        return k
