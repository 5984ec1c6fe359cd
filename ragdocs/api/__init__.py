"""ragdocs HTTP API layer: routes, schemas and middleware."""

from ragdocs.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    status_for_error,
)
from ragdocs.api.routes import router
from ragdocs.api.schemas import (
    ErrorResponse,
    HealthResponse,
    IngestResponse,
    QueryRequest,
    QueryResponse,
    SourceSchema,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "status_for_error",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "IngestResponse",
    "QueryRequest",
    "QueryResponse",
    "SourceSchema",
]
