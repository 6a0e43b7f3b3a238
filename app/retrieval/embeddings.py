"""Embedding generation for vector search.

Embeddings here are hand-built text features rather than the output of a
learned model: ten ratios and flags describing length, letter mix,
punctuation and casing. The rest of the retrieval stack only relies on the
vectors having a fixed length, so any other embedder can be dropped in.
"""

import hashlib
import re
import time
from typing import List

from app.utils.logging import get_logger
from app.utils.metrics import get_metrics

logger = get_logger(__name__)

EMBEDDING_DIMENSIONS = 10
MAX_CACHE_ENTRIES = 10_000

_VOWELS = re.compile(r"[aeiou]")
_CONSONANTS = re.compile(r"[bcdfghjklmnpqrstvwxyz]")
_DIGITS = re.compile(r"[0-9]")
_TERMINAL_PUNCTUATION = re.compile(r"[.!?]")
_UPPERCASE = re.compile(r"[A-Z]")


def _ratio(count: int, total: int) -> float:
    """count / total, or 0.0 when total is zero."""
    return count / total if total else 0.0


def generate_embedding(text: str) -> List[float]:
    """Generate a deterministic 10-dimensional feature vector for ``text``.

    Components, in order:
        0. word count / 10
        1. character count / 50
        2. vowel ratio
        3. consonant ratio
        4. digit ratio
        5. terminal punctuation (. ! ?) per word
        6. average word length / 10, capped at 1.0
        7. uppercase-letter ratio of the original text
        8. 1.0 if the text contains "?"
        9. 1.0 if the text contains "!"

    Empty and whitespace-only input yields zeros for every ratio.
    """
    normalized = text.lower()
    words = normalized.split()
    n_chars = len(normalized)
    n_words = len(words)
    avg_word_length = sum(len(w) for w in words) / n_words if n_words else 0.0

    return [
        n_words / 10,
        n_chars / 50,
        _ratio(len(_VOWELS.findall(normalized)), n_chars),
        _ratio(len(_CONSONANTS.findall(normalized)), n_chars),
        _ratio(len(_DIGITS.findall(normalized)), n_chars),
        _ratio(len(_TERMINAL_PUNCTUATION.findall(normalized)), n_words),
        min(avg_word_length / 10, 1.0),
        _ratio(len(_UPPERCASE.findall(text)), len(text)),
        1.0 if "?" in text else 0.0,
        1.0 if "!" in text else 0.0,
    ]


class EmbeddingService:
    """Generate text embeddings with a small result cache."""

    def __init__(self, use_cache: bool = True) -> None:
        """Initialize the embedding service.

        Args:
            use_cache: Default caching behaviour for embed_text.
        """
        self.use_cache = use_cache
        self._cache: dict[str, List[float]] = {}
        logger.info("EmbeddingService initialized: dimensions={}", EMBEDDING_DIMENSIONS)

    @property
    def dimensions(self) -> int:
        return EMBEDDING_DIMENSIONS

    def _cache_key(self, text: str) -> str:
        return hashlib.sha256(text.encode("utf-8")).hexdigest()

    def _remember(self, key: str, vec: List[float]) -> None:
        if len(self._cache) >= MAX_CACHE_ENTRIES:
            logger.debug("Embedding cache full ({} entries), clearing", len(self._cache))
            self._cache.clear()
        self._cache[key] = vec

    def clear_cache(self) -> None:
        self._cache.clear()

    def embed_text(self, text: str, use_cache: bool | None = None) -> List[float]:
        """Generate the embedding for a single text.

        Args:
            text: Input text. Empty strings are valid and embed to zeros.
            use_cache: Override the service default for this call.

        Returns:
            A new list of EMBEDDING_DIMENSIONS floats.
        """
        cached = self.use_cache if use_cache is None else use_cache
        key = self._cache_key(text) if cached else ""
        if cached and key in self._cache:
            return list(self._cache[key])

        t0 = time.perf_counter()
        vec = generate_embedding(text)
        elapsed = time.perf_counter() - t0
        get_metrics().record_embedding(count=1, duration=elapsed)
        if cached:
            self._remember(key, vec)
        logger.debug("Single embed latency: {:.6f}s, chars={}", elapsed, len(text))
        return list(vec)

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """Generate embeddings for a batch of texts, one vector per input."""
        if not texts:
            return []
        t0 = time.perf_counter()
        embeddings = [generate_embedding(t) for t in texts]
        elapsed = time.perf_counter() - t0
        get_metrics().record_embedding(count=len(embeddings), duration=elapsed)
        logger.info("embed_batch completed: {} embeddings in {:.3f}s", len(embeddings), elapsed)
        return embeddings
