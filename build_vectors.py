#!/usr/bin/env python
"""Build a vector file from a long text document, then optionally query it.

Run: python build_vectors.py data/guide.txt --chunk-size 300
Or:  python build_vectors.py data/guide.txt --query "soil nitrogen" --top-k 3
"""

import argparse
import sys

from app.config import settings
from app.ingestion.pipeline import ingest_text_file, load_vectors, load_vectors_into_store
from app.retrieval.embeddings import EmbeddingService
from app.retrieval.retriever import Retriever
from app.retrieval.vector_store import VectorStore
from app.utils.logging import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("input", help="UTF-8 text file to chunk and embed")
    parser.add_argument("--chunk-size", type=int, default=settings.chunk_size)
    parser.add_argument("--output", default=settings.vectors_path, help="Vector JSON file to write")
    parser.add_argument("--query", help="Search the saved vectors by Euclidean distance")
    parser.add_argument("--top-k", type=int, default=settings.top_k_results)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(log_level=settings.log_level, log_dir=settings.log_dir)

    try:
        vectors = ingest_text_file(args.input, chunk_size=args.chunk_size, output_path=args.output)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {len(vectors)} vectors to {args.output}")

    if args.query:
        store = VectorStore()
        load_vectors_into_store(load_vectors(args.output), store, source=args.input)
        retriever = Retriever(store, embedding_service=EmbeddingService())
        results = retriever.search_text(args.query, top_k=args.top_k, metric="euclidean")
        print(f"\nNearest chunks for {args.query!r}:")
        for rank, hit in enumerate(results, 1):
            snippet = " ".join(hit.text.split())[:100]
            print(f"  {rank}. [distance {hit.distance:.4f}] chunk {hit.metadata['chunk_id']}: {snippet}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
