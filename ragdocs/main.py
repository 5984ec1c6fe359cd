"""ragdocs FastAPI application entry point.

Wires providers, services and routes together via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml``, configures
structured logging, and exposes :func:`build_services` for the CLI and
scripts that run the pipelines without the web server.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from ragdocs.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from ragdocs.api.routes import router as api_router
from ragdocs.config.loader import load_config
from ragdocs.config.settings import Settings
from ragdocs.interfaces.chunker import IChunker
from ragdocs.interfaces.document_extractor import IDocumentExtractor
from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.interfaces.llm_provider import ILLMProvider
from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
from ragdocs.providers.embedding.gemini_embedding_provider import GeminiEmbeddingProvider
from ragdocs.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from ragdocs.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from ragdocs.providers.llm.anthropic_provider import AnthropicLLMProvider
from ragdocs.providers.llm.ollama_provider import OllamaLLMProvider
from ragdocs.providers.llm.openai_provider import OpenAILLMProvider
from ragdocs.providers.vector_store.chromadb_provider import ChromaDBProvider
from ragdocs.services.answer_generator import AnswerGenerator
from ragdocs.services.chunking import CHUNKERS
from ragdocs.services.extraction.pdf_extractor import PdfDocumentExtractor, PdfPageExtractor
from ragdocs.services.extraction.registry import ExtractorEntry, ExtractorRegistry
from ragdocs.services.extraction.text_extractor import TextExtractor
from ragdocs.services.ingestion_service import IngestionService
from ragdocs.services.qa_service import QAService
from ragdocs.utils.errors import ConfigurationError
from ragdocs.utils.logging import configure_logging, get_logger
from ragdocs.utils.text_normalizer import TextNormalizer

APP_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------

_LLM_PROVIDERS: dict[str, type[ILLMProvider]] = {
    "anthropic": AnthropicLLMProvider,
    "openai": OpenAILLMProvider,
    "ollama": OllamaLLMProvider,
}

_EMBEDDING_PROVIDERS: dict[str, type[IEmbeddingProvider]] = {
    "openai": OpenAIEmbeddingProvider,
    "ollama": OllamaEmbeddingProvider,
    "gemini": GeminiEmbeddingProvider,
}


def _build_llm_provider(app_settings: Settings) -> ILLMProvider:
    """Return the configured LLM provider.

    ``LLM_PROVIDER`` picks one by name.  When it is empty the first keyed
    provider wins: Anthropic -> OpenAI -> Ollama (needs no key).
    """
    name = app_settings.llm_provider.strip().lower()
    if not name:
        available = app_settings.get_available_llm_providers()
        name = available[0] if available else "ollama"

    provider_cls = _LLM_PROVIDERS.get(name)
    if provider_cls is None:
        raise ConfigurationError(
            message=f"Unknown LLM provider '{name}'. Choose one of: {', '.join(_LLM_PROVIDERS)}",
            provider_name="llm",
        )
    return provider_cls(settings=app_settings)


def _build_embedding_provider(app_settings: Settings) -> IEmbeddingProvider:
    """Return the configured embedding provider.

    ``EMBEDDING_PROVIDER`` picks one by name.  When it is empty OpenAI is
    used if an API key is set, otherwise the local Ollama server.
    """
    name = app_settings.embedding_provider.strip().lower()
    if not name:
        name = "openai" if app_settings.openai_api_key else "ollama"

    provider_cls = _EMBEDDING_PROVIDERS.get(name)
    if provider_cls is None:
        raise ConfigurationError(
            message=(
                f"Unknown embedding provider '{name}'. "
                f"Choose one of: {', '.join(_EMBEDDING_PROVIDERS)}"
            ),
            provider_name="embedding",
        )
    return provider_cls(settings=app_settings)


def _build_chunker(app_settings: Settings) -> IChunker:
    chunker_cls = CHUNKERS.get(app_settings.chunk_strategy)
    if chunker_cls is None:
        raise ConfigurationError(
            message=(
                f"Unknown chunk strategy '{app_settings.chunk_strategy}'. "
                f"Choose one of: {', '.join(CHUNKERS)}"
            ),
            provider_name="chunker",
        )
    return chunker_cls(chunk_size=app_settings.chunk_size, overlap=app_settings.chunk_overlap)


def _build_vector_store(app_settings: Settings) -> IVectorStoreProvider:
    return ChromaDBProvider(
        persist_directory=app_settings.chromadb_persist_dir,
        collection_name=app_settings.chromadb_collection,
        host=app_settings.chromadb_host or None,
        port=app_settings.chromadb_port,
    )


# ---------------------------------------------------------------------------
# Extractor registry
# ---------------------------------------------------------------------------


def build_extractor_registry(
    app_config: Mapping[str, Any],
    app_settings: Settings,
) -> ExtractorRegistry:
    """Build and seal the content-type registry from the ``extractors`` config.

    Each content type maps to an extractor name:

    - ``text`` -- :class:`TextExtractor`
    - ``pdf_page`` / ``pdf_document`` -- a fixed PDF granularity
    - ``pdf`` -- per request: ``pdf_mode=document`` in the ingest params
      selects whole-document extraction, anything else falls back to the
      ``PDF_MODE`` setting.

    Raises
    ------
    ConfigurationError
        If a content type names an unknown extractor.
    """
    labels = (app_config.get("normalizer") or {}).get("header_labels")
    normalizer = TextNormalizer(header_labels=labels)

    text = TextExtractor(normalizer)
    pdf_page = PdfPageExtractor(normalizer)
    pdf_document = PdfDocumentExtractor(normalizer)

    def _pdf_by_mode(params: Mapping[str, Any]) -> IDocumentExtractor:
        mode = str(params.get("pdf_mode") or app_settings.pdf_mode).lower()
        return pdf_document if mode == "document" else pdf_page

    entries_by_name: dict[str, ExtractorEntry] = {
        "text": text,
        "pdf": _pdf_by_mode,
        "pdf_page": pdf_page,
        "pdf_document": pdf_document,
    }

    mapping: dict[str, ExtractorEntry] = {}
    for content_type, extractor_name in (app_config.get("extractors") or {}).items():
        entry = entries_by_name.get(str(extractor_name))
        if entry is None:
            raise ConfigurationError(
                message=f"Unknown extractor '{extractor_name}' for content type '{content_type}'",
                provider_name="extractor_registry",
            )
        mapping[content_type] = entry

    registry = ExtractorRegistry()
    registry.register_extractors(mapping)
    registry.seal()
    return registry


# ---------------------------------------------------------------------------
# Full DI assembly
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, app_config: Mapping[str, Any]) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    llm = _build_llm_provider(app_settings)
    embedding_provider = _build_embedding_provider(app_settings)
    vector_store = _build_vector_store(app_settings)
    chunker = _build_chunker(app_settings)
    registry = build_extractor_registry(app_config, app_settings)

    ingestion_service = IngestionService(
        registry=registry,
        chunker=chunker,
        embedding_provider=embedding_provider,
        vector_store=vector_store,
    )
    generator = AnswerGenerator(llm, temperature=app_settings.llm_temperature)
    qa_service = QAService(
        embedding_provider=embedding_provider,
        vector_store=vector_store,
        generator=generator,
    )

    return {
        "settings": app_settings,
        "version": APP_VERSION,
        "llm": llm,
        "embedding_provider": embedding_provider,
        "vector_store": vector_store,
        "chunker": chunker,
        "extractor_registry": registry,
        "ingestion_service": ingestion_service,
        "qa_service": qa_service,
        "provider_registry": {
            "llm": llm.get_provider_name(),
            "embedding": embedding_provider.get_provider_name(),
            "vector_store": vector_store.get_provider_name(),
            "chunker": chunker.get_strategy_name(),
        },
    }


def build_services(
    custom_settings: Settings | None = None,
    custom_config: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Construct all services outside the web server (CLI / scripting usage)."""
    return _build_all(custom_settings or settings, custom_config or config)


# ---------------------------------------------------------------------------
# Application lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=APP_VERSION,
        environment=settings.app_env,
        **components["provider_registry"],
        content_types=components["extractor_registry"].content_types(),
    )

    yield

    _logger.info("app_shutdown")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="ragdocs API",
        version=APP_VERSION,
        description=(
            "Upload text and PDF documents, index them in a vector store, and "
            "ask questions answered by an LLM grounded on the retrieved passages."
        ),
        lifespan=_lifespan,
    )

    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# Server entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "ragdocs.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
