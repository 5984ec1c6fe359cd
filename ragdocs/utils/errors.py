"""Custom exception hierarchy for ragdocs.

All application exceptions inherit from :class:`RagDocsError`, which
carries an optional ``provider_name`` so error handlers can identify which
component or external service (e.g. "openai", "chromadb", "pdf") caused
the failure.

The hierarchy is organized by pipeline stage:

    RagDocsError  (base -- catch-all for any ragdocs error)
    +-- ConfigurationError       (invalid settings, empty ingestion batch)
    +-- UnresolvedHandlerError   (no extractor registered for a content type)
    +-- ExtractionError          (undecodable text, corrupt PDF)
    +-- ProviderError            (external model call failed)
    |   +-- EmbeddingError       (embedding API failure or misaligned response)
    |   +-- GenerationError      (generation API failure or empty completion)
    +-- StorageError             (vector index upsert / search failure)

Nothing in the core retries: every error propagates to the caller, and the
HTTP layer (``ragdocs.api.middleware``) maps each class to a status code.
"""


class RagDocsError(Exception):
    """Base exception for all ragdocs errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which component triggered the error.
    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[openai_embedding] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Configuration / dispatch errors
# ---------------------------------------------------------------------------

class ConfigurationError(RagDocsError):
    """Raised when configuration or call arguments are invalid.

    Covers chunker settings (overlap >= chunk size), an empty ingestion
    batch, registration against a sealed extractor registry, and unknown
    provider names in settings.
    """

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnresolvedHandlerError(RagDocsError):
    """Raised when no document extractor is registered for a content type."""

    def __init__(
        self,
        message: str = "No extractor registered for content type",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Extraction errors
# ---------------------------------------------------------------------------

class ExtractionError(RagDocsError):
    """Raised when a document cannot be decoded or parsed."""

    def __init__(
        self,
        message: str = "Document extraction failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External model provider errors
# ---------------------------------------------------------------------------

class ProviderError(RagDocsError):
    """Raised when an external model provider call fails."""

    def __init__(
        self,
        message: str = "External provider call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmbeddingError(ProviderError):
    """Raised when an embedding call fails or returns the wrong number of vectors."""

    def __init__(
        self,
        message: str = "Embedding request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class GenerationError(ProviderError):
    """Raised when a text generation call fails or returns no content."""

    def __init__(
        self,
        message: str = "Text generation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Vector index errors
# ---------------------------------------------------------------------------

class StorageError(RagDocsError):
    """Raised when a vector index operation (collection, upsert, search) fails."""

    def __init__(
        self,
        message: str = "Vector index operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
