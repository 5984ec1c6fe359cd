"""Pydantic request/response schemas for the ragdocs HTTP API.

Request schemas end with ``Request``, response schemas with ``Response``.
FastAPI validates incoming JSON against them (invalid bodies get a 422)
and serializes outgoing objects through ``response_model``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class IngestResponse(BaseModel):
    """Summary returned after a batch of documents is indexed."""

    status: str = "success"
    files_processed: int
    chunks_created: int


class QueryRequest(BaseModel):
    """A question to answer from the indexed documents."""

    query: str = Field(min_length=1, max_length=4000)
    top_k: int | None = Field(default=None, ge=1, le=100)
    score_threshold: float | None = Field(default=None, ge=0.0, le=1.0)
    max_tokens: int | None = Field(default=None, ge=1, le=8192)


class SourceSchema(BaseModel):
    """A retrieved passage used to ground the answer."""

    id: str
    text: str
    score: float
    metadata: dict[str, Any] = Field(default_factory=dict)


class QueryResponse(BaseModel):
    """Generated answer plus the passages behind it.

    ``response`` is the empty string when no indexed passage cleared the
    score threshold.
    """

    response: str
    sources: list[SourceSchema] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]
    indexed_chunks: int | None = None
    content_types: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
