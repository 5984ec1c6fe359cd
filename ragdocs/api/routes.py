"""FastAPI routes for document ingestion and question answering.

Endpoint            Method  Description
------------------  ------  -------------------------------------------
/api/v1/ingest      POST    Upload documents -> extract -> chunk -> index
/api/v1/query       POST    Answer a question from the indexed documents
/api/v1/health      GET     Health check, provider names, index size

Services are resolved from ``app.state`` (populated by ``main._build_all``)
through ``Depends`` using the ``Annotated`` pattern, so tests can swap any
of them by assigning to ``app.state``.
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile

from ragdocs.api.schemas import (
    ErrorResponse,
    HealthResponse,
    IngestResponse,
    QueryRequest,
    QueryResponse,
    SourceSchema,
)
from ragdocs.config.settings import Settings
from ragdocs.models.documents import RawFile
from ragdocs.services.extraction.registry import ExtractorRegistry
from ragdocs.services.ingestion_service import IngestionService
from ragdocs.services.qa_service import QAService
from ragdocs.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

# Uploads are read in 64 KB increments so oversized files are rejected
# before they are fully buffered.
_UPLOAD_CHUNK_SIZE = 64 * 1024

_DEFAULT_CONTENT_TYPE = "application/octet-stream"


# ---------------------------------------------------------------------------
# Dependency injection helpers
# ---------------------------------------------------------------------------


def _get_ingestion_service(request: Request) -> IngestionService:
    return request.app.state.ingestion_service


def _get_qa_service(request: Request) -> QAService:
    return request.app.state.qa_service


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


IngestionServiceDep = Annotated[IngestionService, Depends(_get_ingestion_service)]
QAServiceDep = Annotated[QAService, Depends(_get_qa_service)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]


async def _read_upload(upload: UploadFile, max_bytes: int) -> RawFile:
    """Stream *upload* into a :class:`RawFile`, rejecting it past *max_bytes*."""
    parts: list[bytes] = []
    total_size = 0
    while True:
        part = await upload.read(_UPLOAD_CHUNK_SIZE)
        if not part:
            break
        total_size += len(part)
        if total_size > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=(
                    f"File too large: {upload.filename} exceeds "
                    f"{max_bytes // (1024 * 1024)} MB."
                ),
            )
        parts.append(part)

    headers = upload.headers or {}
    return RawFile(
        name=upload.filename or "upload",
        size=total_size,
        content_type=upload.content_type or _DEFAULT_CONTENT_TYPE,
        encoding=headers.get("content-transfer-encoding", "7bit"),
        content=b"".join(parts),
    )


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------


@router.post(
    "/ingest",
    response_model=IngestResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Ingest one or more documents into the vector index",
)
async def ingest_documents(
    request: Request,
    docs: list[UploadFile],
    ingestion_service: IngestionServiceDep,
    settings: SettingsDep,
) -> IngestResponse:
    """Index the uploaded files.

    Any query-string parameters are forwarded to extractor factories, e.g.
    ``?pdf_mode=document`` indexes each PDF as a single unit.
    """
    max_bytes = settings.max_upload_mb * 1024 * 1024
    raw_files = [await _read_upload(upload, max_bytes) for upload in docs]
    params: dict[str, Any] = dict(request.query_params)

    result = await ingestion_service.ingest(raw_files, params)

    _logger.info(
        "ingest_request_complete",
        files=result.files_processed,
        chunks=result.chunks_created,
        params=sorted(params),
    )
    return IngestResponse(
        status="success",
        files_processed=result.files_processed,
        chunks_created=result.chunks_created,
    )


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


@router.post(
    "/query",
    response_model=QueryResponse,
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Answer a question from the indexed documents",
)
async def query_documents(
    body: QueryRequest,
    qa_service: QAServiceDep,
    settings: SettingsDep,
) -> QueryResponse:
    """Retrieve relevant passages and generate an answer grounded on them."""
    threshold = body.score_threshold
    if threshold is None:
        threshold = settings.rag_score_threshold

    result = await qa_service.ask(
        body.query,
        top_k=body.top_k or settings.rag_top_k,
        score_threshold=threshold,
        max_tokens=body.max_tokens or settings.rag_max_tokens,
    )
    return QueryResponse(
        response=result.answer,
        sources=[
            SourceSchema(id=hit.id, text=hit.text, score=hit.score, metadata=hit.metadata)
            for hit in result.sources
        ],
    )


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return provider names, index size and registered content types."""
    state = request.app.state
    providers: dict[str, Any] = dict(getattr(state, "provider_registry", {}))

    indexed: int | None = None
    vector_store = getattr(state, "vector_store", None)
    if vector_store is not None:
        try:
            indexed = await vector_store.count()
        except Exception as exc:  # noqa: BLE001
            _logger.warning("health_count_failed", error=str(exc))

    registry: ExtractorRegistry | None = getattr(state, "extractor_registry", None)
    content_types = registry.content_types() if registry is not None else []

    return HealthResponse(
        status="healthy" if indexed is not None else "degraded",
        version=getattr(state, "version", "0.1.0"),
        providers=providers,
        indexed_chunks=indexed,
        content_types=content_types,
    )
