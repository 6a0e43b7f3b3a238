"""Observability metrics for the vector search service."""

from __future__ import annotations

import csv
import json
import threading
from pathlib import Path
from typing import Any


class MetricsCollector:
    """Collects and aggregates in-process counters and latencies. Singleton pattern."""

    _instance: MetricsCollector | None = None
    _lock = threading.Lock()

    def __new__(cls) -> MetricsCollector:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize metrics storage. Skip if already initialized (singleton)."""
        if getattr(self, "_initialized", False):
            return
        self._lock = threading.Lock()
        self._reset_counters()
        self._initialized = True

    def _reset_counters(self) -> None:
        self._documents_added: int = 0
        self._documents_deleted: int = 0
        self._embeddings_computed: int = 0
        self._searches_by_method: dict[str, int] = {}
        self._results_returned: int = 0
        self._api_requests: int = 0
        self._errors: int = 0
        self._errors_by_type: dict[str, int] = {}
        self._search_durations: list[float] = []
        self._embedding_durations: list[float] = []
        self._api_durations: list[float] = []

    def reset(self) -> None:
        """Zero every counter. Storage resets leave metrics untouched."""
        with self._lock:
            self._reset_counters()

    def record_document_added(self, doc_id: int) -> None:
        with self._lock:
            self._documents_added += 1

    def record_document_deleted(self, doc_id: int) -> None:
        with self._lock:
            self._documents_deleted += 1

    def record_embedding(self, count: int, duration: float) -> None:
        """Record a batch of embeddings computed in ``duration`` seconds."""
        with self._lock:
            self._embeddings_computed += count
            self._embedding_durations.append(duration)

    def record_search(self, method: str, duration: float, results_returned: int) -> None:
        """Record one retrieval call."""
        with self._lock:
            self._searches_by_method[method] = self._searches_by_method.get(method, 0) + 1
            self._search_durations.append(duration)
            self._results_returned += results_returned

    def record_api_request(self, endpoint: str, status_code: int, duration: float) -> None:
        """Record API request metrics. 4xx/5xx responses count as errors."""
        with self._lock:
            self._api_requests += 1
            self._api_durations.append(duration)
            if status_code >= 400:
                self._errors += 1
                key = f"http_{status_code}"
                self._errors_by_type[key] = self._errors_by_type.get(key, 0) + 1

    def record_error(self, error_type: str) -> None:
        """Record an error that did not surface as an HTTP status (or needs a finer type)."""
        with self._lock:
            self._errors_by_type[error_type] = self._errors_by_type.get(error_type, 0) + 1

    @staticmethod
    def _average(values: list[float]) -> float:
        return sum(values) / len(values) if values else 0.0

    def get_metrics_summary(self) -> dict[str, Any]:
        """Return aggregated metrics summary."""
        with self._lock:
            total_searches = sum(self._searches_by_method.values())
            error_rate = self._errors / self._api_requests if self._api_requests else 0.0
            return {
                "total_documents_added": self._documents_added,
                "total_documents_deleted": self._documents_deleted,
                "total_embeddings_computed": self._embeddings_computed,
                "total_searches": total_searches,
                "searches_by_method": dict(self._searches_by_method),
                "total_results_returned": self._results_returned,
                "average_search_time_seconds": round(self._average(self._search_durations), 6),
                "average_embedding_time_seconds": round(self._average(self._embedding_durations), 6),
                "average_api_time_seconds": round(self._average(self._api_durations), 6),
                "total_api_requests": self._api_requests,
                "total_errors": self._errors,
                "error_rate": round(error_rate, 4),
                "errors_by_type": dict(self._errors_by_type),
            }

    def export_to_file(self, filepath: str) -> None:
        """Save metrics summary to JSON or CSV file."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        summary = self.get_metrics_summary()

        if path.suffix.lower() == ".csv":
            with open(path, "w", newline="") as f:
                writer = csv.writer(f)
                for k, v in summary.items():
                    writer.writerow([k, json.dumps(v) if isinstance(v, dict) else v])
        else:
            with open(path, "w") as f:
                json.dump(summary, f, indent=2)


def get_metrics() -> MetricsCollector:
    """Return the global singleton MetricsCollector."""
    return MetricsCollector()
