"""ragdocs data models - re-exports all public model classes.

Other modules may import from ``ragdocs.models`` directly instead of
``ragdocs.models.documents``.
"""

from __future__ import annotations

from ragdocs.models.documents import (
    Chunk,
    ExtractedUnit,
    IndexEntry,
    IngestionResult,
    PromptContext,
    QAAnswer,
    RawFile,
    SearchResult,
)

__all__ = [
    "Chunk",
    "ExtractedUnit",
    "IndexEntry",
    "IngestionResult",
    "PromptContext",
    "QAAnswer",
    "RawFile",
    "SearchResult",
]
