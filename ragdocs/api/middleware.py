"""API middleware: CORS, request logging and error handling.

Starlette middleware runs as a stack, last added first.  ``create_app``
adds ``ErrorHandlingMiddleware`` before ``RequestLoggingMiddleware`` so
the request log records the final status code, including the ones the
error handler substitutes.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from ragdocs.api.schemas import ErrorResponse
from ragdocs.utils.errors import (
    ConfigurationError,
    ExtractionError,
    ProviderError,
    RagDocsError,
    StorageError,
    UnresolvedHandlerError,
)
from ragdocs.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

# Checked in order; subclasses resolve through isinstance.
_STATUS_BY_ERROR: tuple[tuple[type[RagDocsError], int], ...] = (
    (ConfigurationError, 400),
    (UnresolvedHandlerError, 415),
    (ExtractionError, 422),
    (ProviderError, 502),
    (StorageError, 503),
)


def status_for_error(exc: RagDocsError) -> int:
    """Map an application error to its HTTP status code (500 if unmapped)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]``.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=response.status_code if response else 500,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert ``RagDocsError`` subclasses into structured JSON errors.

    The client receives the error class name and message only; provider
    details stay in the server log.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except RagDocsError as exc:
            status_code = status_for_error(exc)
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
                status=status_code,
            )
            body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
            return JSONResponse(status_code=status_code, content=body.model_dump())
