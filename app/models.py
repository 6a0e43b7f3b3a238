"""Pydantic v2 models for documents, search requests, results, and chunks."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue

SearchMethod = Literal["cosine", "euclidean"]


class StoredDocument(BaseModel):
    """A document record as held by the vector store. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Store-assigned identifier, never reused within a session")
    text: str = Field(..., description="Original input text")
    embedding: tuple[float, ...] = Field(..., description="Vector computed at insertion time")
    metadata: dict[str, JsonValue] = Field(default_factory=dict)
    timestamp: datetime = Field(..., description="UTC creation time")


class SearchResult(StoredDocument):
    """A stored document augmented with the score computed for one query.

    Cosine searches fill ``score``; Euclidean searches fill ``distance``.
    """

    score: Optional[float] = None
    distance: Optional[float] = None


class AddDocumentRequest(BaseModel):
    """Body of POST /api/documents."""

    text: str = Field(
        ...,
        min_length=1,
        description="Text to embed and store. Example: The quick brown fox jumps",
    )
    metadata: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Optional caller-supplied metadata. Example: {\"category\": \"animals\"}",
    )


class EmbedRequest(BaseModel):
    """Body of POST /api/embed."""

    text: str = Field(..., min_length=1)


class SearchRequest(BaseModel):
    """Body of POST /api/search."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1, description="Search text. Example: fox jumping")
    top_k: int = Field(default=5, ge=1, le=100, alias="topK")
    threshold: float = Field(
        default=0.0,
        description="Minimum cosine similarity (ignored for euclidean)",
    )
    method: SearchMethod = Field(default="cosine")
    max_distance: Optional[float] = Field(
        default=None,
        ge=0.0,
        alias="maxDistance",
        description="Maximum Euclidean distance (ignored for cosine)",
    )


class DocumentResponse(BaseModel):
    """Full document including its embedding."""

    id: int
    text: str
    metadata: dict[str, JsonValue]
    timestamp: datetime
    embedding: list[float]


class DocumentSummary(BaseModel):
    """Document as listed or returned from search: no embedding."""

    id: int
    text: str
    metadata: dict[str, JsonValue]
    timestamp: datetime


class SearchResultItem(DocumentSummary):
    """One ranked search hit."""

    score: Optional[float] = None
    distance: Optional[float] = None


class SearchResponse(BaseModel):
    """Ordered search results for a query."""

    query: str
    method: SearchMethod
    results: list[SearchResultItem] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class EmbedResponse(BaseModel):
    """Embedding computed for a text without storing it."""

    text: str
    embedding: list[float]
    dimensions: int


class StatsResponse(BaseModel):
    """Store statistics."""

    model_config = ConfigDict(populate_by_name=True)

    total_documents: int = Field(..., ge=0, alias="totalDocuments")
    dimensions: int = Field(..., ge=0)


class TextChunk(BaseModel):
    """A contiguous character window of a longer text."""

    id: int = Field(..., ge=1, description="1-based position of the chunk")
    chunk: str


class VectorRecord(BaseModel):
    """A chunk and its embedding, as persisted by the bulk ingestion pipeline."""

    id: int = Field(..., ge=1)
    chunk: str
    vector: list[float]
