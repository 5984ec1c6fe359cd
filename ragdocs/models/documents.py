"""Data models for the ragdocs ingestion and query pipelines.

Defines Pydantic v2 models for every value that flows between pipeline
stages.  All models use frozen config so a stage can never mutate what an
earlier stage produced.

    RawFile ──extract──▶ ExtractedUnit ──chunk──▶ Chunk ──embed──▶ IndexEntry
                                                                      │
    QAAnswer ◀──generate── PromptContext ◀──filter── SearchResult ◀───┘

Metadata is an open ``dict[str, Any]`` using snake_case keys: ``source``,
``content_type``, ``page``, ``total_pages``, ``chunk``, ``total_chunks``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Ingestion side
# ---------------------------------------------------------------------------
class RawFile(BaseModel):
    """A file as received at the system boundary (upload or CLI path)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Original filename.")
    size: int = Field(ge=0, description="Size of the content in bytes.")
    content_type: str = Field(description="Declared MIME type, e.g. 'application/pdf'.")
    encoding: str = Field(default="7bit", description="Transfer encoding reported by the client.")
    content: bytes = Field(repr=False, description="Raw file bytes.")


class ExtractedUnit(BaseModel):
    """A normalized block of text produced by a document extractor.

    One RawFile yields one or more units, e.g. one per PDF page.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class Chunk(BaseModel):
    """A bounded segment of a unit's text; the unit of storage and retrieval.

    ``metadata`` carries the parent unit's metadata plus ``chunk`` (zero-based
    position) and ``total_chunks`` (count for that unit).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class IndexEntry(BaseModel):
    """A chunk paired with its embedding, as persisted in the vector index."""

    model_config = ConfigDict(frozen=True)

    id: str
    embedding: list[float]
    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class IngestionResult(BaseModel):
    """Summary of a completed ingestion call."""

    model_config = ConfigDict(frozen=True)

    files_processed: int = Field(ge=0)
    units_extracted: int = Field(ge=0)
    chunks_created: int = Field(ge=0)
    ingestion_time: float = Field(ge=0.0, description="Wall-clock seconds.")


# ---------------------------------------------------------------------------
# Query side
# ---------------------------------------------------------------------------
class SearchResult(BaseModel):
    """A vector index hit.

    ``score`` is a similarity in [0, 1]; higher means closer to the query.
    Vector store adapters convert their native distance before returning.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: float


class PromptContext(BaseModel):
    """Everything the answer generator needs for one question."""

    model_config = ConfigDict(frozen=True)

    question: str
    sources: list[SearchResult] = Field(default_factory=list)
    max_tokens: int | None = Field(default=None, gt=0)


class QAAnswer(BaseModel):
    """A generated answer together with the passages it was grounded on."""

    model_config = ConfigDict(frozen=True)

    answer: str
    sources: list[SearchResult] = Field(default_factory=list)
