"""FastAPI endpoints for document storage and similarity search."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.demo_data import load_demo_documents
from app.api.dependencies import get_embedding_service, get_retriever, get_vector_store
from app.models import (
    AddDocumentRequest,
    DocumentResponse,
    DocumentSummary,
    EmbedRequest,
    EmbedResponse,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
    StatsResponse,
    StoredDocument,
)
from app.retrieval.embeddings import EmbeddingService
from app.retrieval.retriever import Retriever
from app.retrieval.vector_store import VectorStore
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["vector-search"])


def _summary(doc: StoredDocument) -> dict:
    return doc.model_dump(exclude={"embedding"})


def _stats(vector_store: VectorStore) -> StatsResponse:
    stats = vector_store.get_stats()
    return StatsResponse(total_documents=stats["count"], dimensions=stats["dimensions"])


@router.post("/documents", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def add_document(
    request: AddDocumentRequest,
    vector_store: VectorStore = Depends(get_vector_store),
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> DocumentResponse:
    """Embed the text and store it. Returns the full record including its embedding."""
    embedding = embedding_service.embed_text(request.text)
    doc = vector_store.add_document(request.text, embedding, request.metadata)
    logger.info("Document added: id={}", doc.id)
    return DocumentResponse(**doc.model_dump())


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    retriever: Retriever = Depends(get_retriever),
) -> SearchResponse:
    """Embed the query and rank stored documents by cosine similarity or Euclidean distance."""
    results = retriever.search_text(
        request.query,
        top_k=request.top_k,
        threshold=request.threshold,
        metric=request.method,
        max_distance=request.max_distance,
    )
    items = [SearchResultItem(**r.model_dump(exclude={"embedding"})) for r in results]
    return SearchResponse(query=request.query, method=request.method, results=items, total=len(items))


@router.get("/documents", response_model=list[DocumentSummary])
async def list_documents(
    vector_store: VectorStore = Depends(get_vector_store),
) -> list[DocumentSummary]:
    """List all documents in insertion order, without embeddings."""
    return [DocumentSummary(**_summary(doc)) for doc in vector_store.get_all_documents()]


@router.get("/documents/{doc_id}", response_model=DocumentResponse)
async def get_document(
    doc_id: int,
    vector_store: VectorStore = Depends(get_vector_store),
) -> DocumentResponse:
    """Return one document including its embedding."""
    doc = vector_store.get_document(doc_id)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"Document {doc_id} not found")
    return DocumentResponse(**doc.model_dump())


@router.delete("/documents/{doc_id}")
async def delete_document(
    doc_id: int,
    vector_store: VectorStore = Depends(get_vector_store),
) -> dict:
    """Delete a document. Other documents keep their ids."""
    if not vector_store.delete_document(doc_id):
        raise HTTPException(status_code=404, detail=f"Document {doc_id} not found")
    return {"success": True, "message": f"Document {doc_id} deleted"}


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    vector_store: VectorStore = Depends(get_vector_store),
) -> StatsResponse:
    """Return document count and embedding dimensionality."""
    return _stats(vector_store)


@router.post("/reset", response_model=StatsResponse)
async def reset_store(
    reload_demo: bool = False,
    vector_store: VectorStore = Depends(get_vector_store),
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> StatsResponse:
    """Empty the store (ids restart at 1), optionally reloading the demo documents."""
    if reload_demo:
        load_demo_documents(vector_store, embedding_service)
    else:
        vector_store.clear()
    logger.info("Store reset (reload_demo={})", reload_demo)
    return _stats(vector_store)


@router.post("/embed", response_model=EmbedResponse)
async def embed(
    request: EmbedRequest,
    embedding_service: EmbeddingService = Depends(get_embedding_service),
) -> EmbedResponse:
    """Compute an embedding without storing anything."""
    embedding = embedding_service.embed_text(request.text)
    return EmbedResponse(text=request.text, embedding=embedding, dimensions=len(embedding))


@router.get("/health")
async def health_check(
    vector_store: VectorStore = Depends(get_vector_store),
) -> dict:
    """Health check with component status."""
    stats = vector_store.get_stats()
    return {
        "status": "ok",
        "components": {
            "vector_store": "ok",
            "documents": stats["count"],
            "dimensions": stats["dimensions"],
        },
    }
