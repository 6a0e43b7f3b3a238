"""Tests for app/config.py and app/models.py."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.config import Settings, settings
from app.models import (
    AddDocumentRequest,
    SearchRequest,
    SearchResult,
    StatsResponse,
    StoredDocument,
    TextChunk,
)


@pytest.mark.unit
class TestConfig:
    def test_settings_singleton(self):
        from app.config import settings as s2

        assert settings is s2

    def test_defaults(self, monkeypatch):
        for name in ("TOP_K_RESULTS", "CHUNK_SIZE", "LOG_LEVEL", "ENFORCE_DIMENSIONS"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.app_name == "Vector Search Demo"
        assert s.top_k_results == 5
        assert s.similarity_threshold == 0.0
        assert s.chunk_size == 300
        assert s.vectors_path == "./data/vectors.json"
        assert s.enforce_dimensions is True
        assert s.log_level == "INFO"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("TOP_K_RESULTS", "12")
        monkeypatch.setenv("SEED_DEMO_DATA", "false")
        s = Settings(_env_file=None)
        assert s.top_k_results == 12
        assert s.seed_demo_data is False

    def test_log_level_normalised(self):
        assert Settings(_env_file=None, log_level=" debug ").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="log_level"):
            Settings(_env_file=None, log_level="LOUD")

    def test_invalid_chunk_size(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, chunk_size=0)


@pytest.mark.unit
class TestModels:
    def test_search_request_aliases(self):
        req = SearchRequest.model_validate({"query": "fox", "topK": 3, "maxDistance": 1.5})
        assert req.top_k == 3
        assert req.max_distance == 1.5
        assert SearchRequest(query="fox", top_k=2).top_k == 2

    def test_search_request_defaults(self):
        req = SearchRequest(query="fox")
        assert req.top_k == 5
        assert req.threshold == 0.0
        assert req.method == "cosine"
        assert req.max_distance is None

    def test_search_request_rejects_unknown_method(self):
        with pytest.raises(ValidationError):
            SearchRequest(query="fox", method="dot")

    def test_metadata_must_be_json(self):
        with pytest.raises(ValidationError):
            AddDocumentRequest(text="x", metadata={"bad": object()})

    def test_nested_metadata(self):
        req = AddDocumentRequest(text="x", metadata={"a": {"b": [1, 2.5, True, None, "s"]}})
        assert req.metadata["a"]["b"][2] is True

    def test_stored_document_frozen(self):
        doc = StoredDocument(id=1, text="x", embedding=[1.0], timestamp=datetime.now(timezone.utc))
        assert doc.embedding == (1.0,)
        with pytest.raises(ValidationError):
            doc.id = 2

    def test_search_result_extends_record(self):
        result = SearchResult(
            id=1, text="x", embedding=(1.0,), timestamp=datetime.now(timezone.utc), score=0.5
        )
        assert result.score == 0.5
        assert result.distance is None

    def test_stats_serialised_with_camel_case(self):
        stats = StatsResponse(total_documents=2, dimensions=10)
        assert stats.model_dump(by_alias=True) == {"totalDocuments": 2, "dimensions": 10}

    def test_chunk_ids_start_at_one(self):
        with pytest.raises(ValidationError):
            TextChunk(id=0, chunk="x")
