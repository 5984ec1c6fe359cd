"""Abstract base class for text-embedding service providers.

Defines the contract for turning text into embedding vectors.
Implementations wrap OpenAI-compatible embedding APIs or a local Ollama
server; the ingestion and query services depend only on this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations:
#   OpenAIEmbeddingProvider  - text-embedding-3-small or a compatible endpoint
#   OllamaEmbeddingProvider  - nomic-embed-text (or any pulled model) via Ollama
# Located in: ragdocs/providers/embedding/
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services used by the RAG pipeline.

    Vectors produced here are stored through
    :class:`~ragdocs.interfaces.vector_store_provider.IVectorStoreProvider`
    and compared against query vectors produced by the same provider.
    """

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a batch of texts.

        Parameters
        ----------
        texts:
            Text strings to embed.  Implementations batch internally when
            the underlying API has a per-call limit.  An empty list returns
            an empty list without contacting the provider.

        Returns
        -------
        list[list[float]]
            One vector per input, in input order.  Every vector has length
            :meth:`get_dimension`.

        Raises
        ------
        ragdocs.utils.errors.EmbeddingError
            If the API call fails or returns a different number of vectors
            than texts were sent.
        """

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string."""

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the dimensionality of the embedding vectors.

        Must stay constant for the provider's lifetime; a vector store
        collection holds vectors of a single dimension.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"openai_embedding"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured and reachable."""
