"""Fixed-size text chunking for bulk ingestion."""

from app.models import TextChunk
from app.utils.logging import get_logger

logger = get_logger(__name__)


def chunk_text(text: str, characters_per_chunk: int) -> list[TextChunk]:
    """Split text into contiguous windows of ``characters_per_chunk`` characters.

    Chunks do not overlap and cover the text exactly once; only the last
    chunk may be shorter. Ids start at 1.

    Args:
        text: Full text to split. Empty text yields no chunks.
        characters_per_chunk: Window size, at least 1.

    Raises:
        ValueError: If characters_per_chunk is less than 1.
    """
    if characters_per_chunk < 1:
        raise ValueError(f"characters_per_chunk must be >= 1, got {characters_per_chunk}")

    chunks = [
        TextChunk(id=index + 1, chunk=text[start : start + characters_per_chunk])
        for index, start in enumerate(range(0, len(text), characters_per_chunk))
    ]
    logger.info(
        "Chunked text: {} chars into {} chunks of up to {} chars",
        len(text),
        len(chunks),
        characters_per_chunk,
    )
    return chunks
