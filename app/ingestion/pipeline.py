"""Bulk ingestion: text file -> chunks -> vectors -> JSON file -> vector store."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.config import settings
from app.models import TextChunk, VectorRecord
from app.retrieval.embeddings import EmbeddingService
from app.utils.logging import get_logger

from .chunker import chunk_text

if TYPE_CHECKING:
    from app.retrieval.vector_store import VectorStore

logger = get_logger(__name__)


def embed_chunks(
    chunks: list[TextChunk],
    embedding_service: EmbeddingService,
) -> list[VectorRecord]:
    """Embed every chunk, keeping its id."""
    vectors = embedding_service.embed_batch([c.chunk for c in chunks])
    return [
        VectorRecord(id=c.id, chunk=c.chunk, vector=vec)
        for c, vec in zip(chunks, vectors)
    ]


def save_vectors(vectors: list[VectorRecord], path: str | Path) -> Path:
    """Write vector records to ``path`` as a JSON array. Returns the path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        json.dump([v.model_dump(mode="json") for v in vectors], f)
    logger.info("Saved {} vectors to {}", len(vectors), out)
    return out


def load_vectors(path: str | Path) -> list[VectorRecord]:
    """Read vector records written by save_vectors.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON array of vector records.
    """
    src = Path(path)
    if not src.exists():
        raise FileNotFoundError(f"Vector file not found: {src}")
    with open(src, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Vector file {src} must contain a JSON array")
    try:
        vectors = [VectorRecord.model_validate(item) for item in data]
    except ValidationError as e:
        raise ValueError(f"Invalid vector record in {src}: {e}") from e
    logger.info("Loaded {} vectors from {}", len(vectors), src)
    return vectors


def load_vectors_into_store(
    vectors: list[VectorRecord],
    store: VectorStore,
    source: str | None = None,
) -> int:
    """Add each vector record to ``store`` as a document.

    The chunk id (and source file name, if given) is kept in metadata.
    Returns the number of documents added.
    """
    for v in vectors:
        metadata: dict = {"chunk_id": v.id}
        if source:
            metadata["source"] = source
        store.add_document(v.chunk, v.vector, metadata)
    logger.info("Loaded {} chunk vectors into store", len(vectors))
    return len(vectors)


def ingest_text_file(
    file_path: str | Path,
    chunk_size: int | None = None,
    output_path: str | Path | None = None,
    embedding_service: EmbeddingService | None = None,
) -> list[VectorRecord]:
    """Chunk and embed a UTF-8 text file, then save the vectors.

    Steps:
    1. Read the file
    2. Split into fixed-size chunks (settings.chunk_size by default)
    3. Embed every chunk
    4. Save to output_path (settings.vectors_path by default)

    Raises:
        FileNotFoundError: If file_path does not exist.
    """
    if chunk_size is None:
        chunk_size = settings.chunk_size
    if output_path is None:
        output_path = settings.vectors_path
    service = embedding_service or EmbeddingService(use_cache=False)

    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    t0 = time.perf_counter()
    text = path.read_text(encoding="utf-8")
    chunks = chunk_text(text, chunk_size)
    logger.info("Stage 1 (chunk) done: {} chunks from {}", len(chunks), path.name)

    vectors = embed_chunks(chunks, service)
    logger.info("Stage 2 (embed) done: {} vectors", len(vectors))

    save_vectors(vectors, output_path)
    logger.info("Ingestion complete for {} in {:.3f}s", path.name, time.perf_counter() - t0)
    return vectors
