"""FastAPI application entry point for the vector search demo."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.demo_data import load_demo_documents
from app.api.dependencies import get_embedding_service, get_vector_store
from app.api.routes import router
from app.config import settings
from app.retrieval.similarity import DimensionMismatchError
from app.retrieval.vector_store import VectorStore
from app.utils.logging import clear_request_context, get_logger, set_request_context, setup_logging
from app.utils.metrics import get_metrics

logger = get_logger(__name__)


def internal_error_response(exc: Exception) -> JSONResponse:
    """Log an unhandled exception and build the generic 500 response."""
    logger.exception("Server error: {}", exc)
    get_metrics().record_error(type(exc).__name__)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal server error occurred"},
    )


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Add a request ID, set logging context, and record API metrics."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        set_request_context(
            request_id=request_id,
            client_host=request.client.host if request.client else "unknown",
            operation=f"{request.method} {request.url.path}",
        )
        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = internal_error_response(exc)
            get_metrics().record_api_request(
                request.url.path, response.status_code, time.perf_counter() - start
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_request_context()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging(log_level=settings.log_level, log_dir=settings.log_dir)
    if settings.seed_demo_data:
        load_demo_documents(get_vector_store(), get_embedding_service())
    logger.info("Application startup complete")
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title=settings.app_name,
    description="Text embeddings and exhaustive similarity search over an in-memory store",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RequestIdMiddleware)

# CORS: allow all origins for the demo UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


def jsonable_errors(errors) -> list[dict]:
    """Keep only the JSON-safe parts of pydantic error entries."""
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in errors
    ]


# Exception handlers: 400 validation, 500 dimension mismatch and server errors
@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle validation errors (400)."""
    errors = exc.errors()
    detail = errors[0].get("msg", "Validation error") if errors else "Validation error"
    return JSONResponse(
        status_code=400,
        content={"detail": detail, "errors": jsonable_errors(errors)},
    )


@app.exception_handler(DimensionMismatchError)
async def dimension_mismatch_handler(
    request: Request, exc: DimensionMismatchError
) -> JSONResponse:
    """Mixed vector dimensionalities are a data-integrity fault (500)."""
    logger.error("Dimension mismatch: {}", exc)
    get_metrics().record_error("dimension_mismatch")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught server errors raised outside RequestIdMiddleware (500)."""
    return internal_error_response(exc)


@app.get("/", response_class=HTMLResponse)
def root() -> str:
    """Root page - visible status for browser visitors."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>{settings.app_name}</title></head>
    <body style="font-family: system-ui; max-width: 600px; margin: 3rem auto; padding: 2rem;">
        <h1>{settings.app_name}</h1>
        <p style="font-size: 1.25rem; padding: 1rem; background: #e8f5e9; border-radius: 8px;">
            <strong>Status:</strong> <span style="color: #2e7d32;">ok</span>
        </p>
        <ul>
            <li><a href="/health">/health</a>: JSON health check</li>
            <li><a href="/api/documents">/api/documents</a>: stored documents</li>
            <li><a href="/api/stats">/api/stats</a>: store statistics</li>
            <li><a href="/docs">/docs</a>: interactive API documentation</li>
            <li><a href="/metrics">/metrics</a>: observability metrics</li>
        </ul>
    </body>
    </html>
    """


@app.get("/health")
def health_check(vector_store: VectorStore = Depends(get_vector_store)) -> dict:
    """Process-level health check with store summary."""
    stats = vector_store.get_stats()
    return {
        "status": "ok",
        "app": settings.app_name,
        "documents": stats["count"],
        "dimensions": stats["dimensions"],
    }


@app.get("/metrics")
def metrics_endpoint() -> dict:
    """Return aggregated observability metrics summary."""
    return get_metrics().get_metrics_summary()
