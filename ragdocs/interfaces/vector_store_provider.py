"""Abstract base class for vector-store providers.

Defines the contract for persisting embedded chunks and answering
nearest-neighbour queries.  The shipped implementation wraps ChromaDB;
the ingestion and query services never import chromadb directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ragdocs.models.documents import IndexEntry, SearchResult


# Concrete implementation: ChromaDBProvider (ragdocs/providers/vector_store/)
class IVectorStoreProvider(ABC):
    """Contract for the vector index behind the RAG pipeline.

    Methods are async so network-backed stores do not block the event loop.
    Scores returned by :meth:`search` are similarities where higher means
    more similar; implementations convert native distances before returning.
    """

    @abstractmethod
    async def upsert(self, entries: list[IndexEntry]) -> None:
        """Insert or replace entries by id.

        An entry whose id already exists replaces the stored one.  There is
        no rollback across entries, but any failure is raised.

        Raises
        ------
        ragdocs.utils.errors.StorageError
            If the write fails.
        """

    @abstractmethod
    async def search(self, query_vector: list[float], top_k: int) -> list[SearchResult]:
        """Return up to *top_k* entries nearest to *query_vector*, best first.

        An empty collection yields an empty list.

        Raises
        ------
        ragdocs.utils.errors.StorageError
            If the query fails.
        """

    @abstractmethod
    async def count(self) -> int:
        """Return the number of entries currently stored."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"chromadb"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the store is configured and usable."""
