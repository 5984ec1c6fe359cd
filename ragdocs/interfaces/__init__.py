"""Public interface definitions for pluggable pipeline components.

Services depend only on these abstract base classes; concrete adapters are
chosen from settings in ``ragdocs/main.py`` and injected at startup, so a
provider can be swapped without touching the services and tests can inject
mocks.

    Interface              →  Concrete implementations
    ─────────────────────────────────────────────────────────────────────
    IEmbeddingProvider     →  OpenAIEmbeddingProvider, OllamaEmbeddingProvider
    ILLMProvider           →  AnthropicLLMProvider, OpenAILLMProvider,
                              OllamaLLMProvider
    IVectorStoreProvider   →  ChromaDBProvider
    IDocumentExtractor     →  TextExtractor, PdfDocumentExtractor,
                              PdfPageExtractor
    IChunker               →  RecursiveChunker, SlidingWindowChunker
"""

from ragdocs.interfaces.chunker import IChunker
from ragdocs.interfaces.document_extractor import IDocumentExtractor
from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.interfaces.llm_provider import ILLMProvider
from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "IChunker",
    "IDocumentExtractor",
    "IEmbeddingProvider",
    "ILLMProvider",
    "IVectorStoreProvider",
]
