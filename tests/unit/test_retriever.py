"""Tests for ranked retrieval: cosine and Euclidean modes."""

import pytest

from app.retrieval.retriever import Retriever
from app.retrieval.similarity import DimensionMismatchError
from app.retrieval.vector_store import VectorStore
from app.utils.metrics import get_metrics


@pytest.mark.unit
class TestCosineSearch:
    def test_fox_documents_rank_above_pizza(self, retriever, embedding_service):
        """A fox-shaped query ranks both fox documents above the pizza document."""
        # "foxes running" ranks pizza first with these features; see DESIGN.md
        query = embedding_service.embed_text("The quick brown fox leaps")
        results = retriever.search(query)
        assert [r.id for r in results] == [1, 2, 3]
        assert results[-1].text == "Pizza is Italian food"

    def test_scores_descending(self, retriever, embedding_service):
        results = retriever.search(embedding_service.embed_text("fox jumping"))
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert all(r.distance is None for r in results)

    def test_results_keep_record_fields(self, retriever, embedding_service):
        top = retriever.search(embedding_service.embed_text("The quick brown fox jumps"), top_k=1)[0]
        assert top.id == 1
        assert top.metadata == {"category": "animals"}
        assert len(top.embedding) == 10
        assert top.score == pytest.approx(1.0)

    def test_top_k_truncation(self, vector_store, embedding_service):
        for i in range(10):
            text = f"Document number {i} " + "word " * i
            vector_store.add_document(text, embedding_service.embed_text(text))
        retriever = Retriever(vector_store, embedding_service=embedding_service)
        assert len(retriever.search(embedding_service.embed_text("Document"), top_k=3)) == 3

    def test_default_top_k_from_constructor(self, populated_store, embedding_service):
        retriever = Retriever(populated_store, top_k=2)
        assert len(retriever.search(embedding_service.embed_text("fox"))) == 2

    def test_threshold_without_near_match_returns_empty(self, retriever, embedding_service):
        results = retriever.search(
            embedding_service.embed_text("Is it raining?"), top_k=5, threshold=0.99
        )
        assert results == []

    def test_threshold_is_inclusive(self, retriever, embedding_service):
        query = embedding_service.embed_text("fox jumping")
        best = retriever.search(query, top_k=1)[0]
        again = retriever.search(query, threshold=best.score)
        assert again[0].id == best.id

    def test_threshold_can_return_fewer_than_top_k(self, retriever, embedding_service):
        query = embedding_service.embed_text("The quick brown fox leaps")
        results = retriever.search(query, top_k=3, threshold=0.98)
        assert [r.id for r in results] == [1, 2]

    def test_ties_keep_insertion_order(self, vector_store, embedding_service):
        for text in ("Twin text", "Other words here", "Twin text", "Twin text"):
            vector_store.add_document(text, embedding_service.embed_text(text))
        retriever = Retriever(vector_store)
        results = retriever.search(embedding_service.embed_text("Twin text"))
        assert [r.id for r in results[:3]] == [1, 3, 4]

    def test_empty_store(self, vector_store, embedding_service):
        assert Retriever(vector_store).search(embedding_service.embed_text("anything")) == []


@pytest.mark.unit
class TestEuclideanSearch:
    def test_exact_match_ranks_first(self, retriever, embedding_service):
        query = embedding_service.embed_text("A fast red fox leaps")
        results = retriever.search_by_distance(query)
        assert results[0].id == 2
        assert results[0].distance == 0.0
        distances = [r.distance for r in results]
        assert distances == sorted(distances)
        assert all(r.score is None for r in results)

    def test_search_dispatches_euclidean(self, retriever, embedding_service):
        query = embedding_service.embed_text("Pizza is Italian food")
        results = retriever.search(query, metric="euclidean", top_k=1)
        assert results[0].id == 3
        assert results[0].distance == 0.0

    def test_max_distance_filter(self, retriever, embedding_service):
        query = embedding_service.embed_text("A fast red fox leaps")
        results = retriever.search_by_distance(query, max_distance=0.0)
        assert [r.id for r in results] == [2]

    def test_threshold_ignored_for_euclidean(self, retriever, embedding_service):
        query = embedding_service.embed_text("fox")
        assert len(retriever.search(query, metric="euclidean", threshold=0.99)) == 3

    def test_ties_keep_insertion_order(self, vector_store):
        vector_store.add_document("a", [1.0, 0.0])
        vector_store.add_document("b", [0.0, 1.0])
        vector_store.add_document("c", [1.0, 0.0])
        results = Retriever(vector_store).search_by_distance([1.0, 0.0])
        assert [r.id for r in results] == [1, 3, 2]


@pytest.mark.unit
class TestSearchErrors:
    def test_mixed_dimensions_fail_whole_search(self):
        store = VectorStore(enforce_dimensions=False)
        store.add_document("two", [1.0, 0.0])
        store.add_document("three", [1.0, 0.0, 0.0])
        store.add_document("two again", [0.0, 1.0])
        retriever = Retriever(store)
        with pytest.raises(DimensionMismatchError):
            retriever.search([1.0, 0.0])
        with pytest.raises(DimensionMismatchError):
            retriever.search_by_distance([1.0, 0.0])

    def test_query_dimension_mismatch(self, retriever):
        with pytest.raises(DimensionMismatchError):
            retriever.search([1.0, 2.0, 3.0])

    def test_unknown_metric(self, retriever):
        with pytest.raises(ValueError, match="Unknown metric"):
            retriever.search([0.0] * 10, metric="manhattan")

    def test_top_k_must_be_positive(self, retriever):
        with pytest.raises(ValueError, match="top_k"):
            retriever.search([0.0] * 10, top_k=0)

    def test_search_text_requires_embedding_service(self, populated_store):
        with pytest.raises(RuntimeError):
            Retriever(populated_store).search_text("fox")


@pytest.mark.unit
class TestSearchText:
    def test_search_text_embeds_query(self, retriever):
        results = retriever.search_text("A fast red fox leaps", metric="euclidean", top_k=1)
        assert results[0].id == 2

    def test_search_text_records_metrics(self, retriever):
        metrics = get_metrics()
        before = metrics.get_metrics_summary()["searches_by_method"].get("euclidean", 0)
        retriever.search_text("fox", metric="euclidean")
        after = metrics.get_metrics_summary()["searches_by_method"]["euclidean"]
        assert after == before + 1
