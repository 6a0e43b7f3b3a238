"""Bulk ingestion: chunking, embedding, and vector file persistence."""

from .chunker import chunk_text
from .pipeline import (
    embed_chunks,
    ingest_text_file,
    load_vectors,
    load_vectors_into_store,
    save_vectors,
)

__all__ = [
    "chunk_text",
    "embed_chunks",
    "ingest_text_file",
    "load_vectors",
    "load_vectors_into_store",
    "save_vectors",
]
