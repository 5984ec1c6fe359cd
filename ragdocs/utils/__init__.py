"""Utility modules for ragdocs.

- **errors** -- Exception hierarchy rooted at RagDocsError; each pipeline
  stage raises its own subclass so callers can handle failures granularly.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_normalizer** -- Regex cleanup of extracted document text before
  chunking (page numbers, TOC leaders, headers, wrapped lines).
"""

from ragdocs.utils.errors import (
    ConfigurationError,
    EmbeddingError,
    ExtractionError,
    GenerationError,
    ProviderError,
    RagDocsError,
    StorageError,
    UnresolvedHandlerError,
)
from ragdocs.utils.logging import configure_logging, get_logger
from ragdocs.utils.text_normalizer import TextNormalizer, normalize_text

__all__ = [
    "ConfigurationError",
    "EmbeddingError",
    "ExtractionError",
    "GenerationError",
    "ProviderError",
    "RagDocsError",
    "StorageError",
    "TextNormalizer",
    "UnresolvedHandlerError",
    "configure_logging",
    "get_logger",
    "normalize_text",
]
