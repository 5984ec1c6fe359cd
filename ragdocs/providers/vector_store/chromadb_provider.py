"""ChromaDB vector store provider adapter.

Wraps a ChromaDB client to implement :class:`IVectorStoreProvider`.  Runs
against a local ``PersistentClient`` by default, or a ChromaDB server via
``HttpClient`` when a host is configured.

Collections use cosine distance.  ChromaDB reports *distances* (0 =
identical, 2 = opposite); :meth:`ChromaDBProvider.search` converts them to
similarities ``1 - distance`` clamped to [0, 1], so the query service can
filter with ``score >= threshold``.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any

# ChromaDB ships PostHog telemetry; disable it before chromadb is imported.
# The env var, the posthog flag and Settings(anonymized_telemetry=False)
# each cover a different ChromaDB release.
os.environ["ANONYMIZED_TELEMETRY"] = "False"

import posthog

posthog.disabled = True

import chromadb
import structlog

from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
from ragdocs.models.documents import IndexEntry, SearchResult
from ragdocs.utils.errors import StorageError

logger = structlog.get_logger(logger_name=__name__)

_COLLECTION_METADATA = {"hnsw:space": "cosine"}


class _NoopEmbeddingFunction(chromadb.EmbeddingFunction[list[str]]):
    """Embedding function that is never called.

    ragdocs always passes pre-computed vectors, so attaching this stops
    ChromaDB from loading its default ONNX model on collection creation.
    """

    def __call__(self, input: list[str]) -> list[list[float]]:
        raise NotImplementedError(
            "ragdocs uses pre-computed embeddings; "
            "ChromaDB's built-in embedding should never be called."
        )

    def name(self) -> str:
        """Return function name (required by ChromaDB's EmbeddingFunction protocol)."""
        return "noop_precomputed"


class ChromaDBProvider(IVectorStoreProvider):
    """Vector store provider backed by ChromaDB.

    Collections are created lazily on first use and cached per name for the
    lifetime of the provider, so each name costs at most one
    ``get_or_create_collection`` round-trip.
    """

    def __init__(
        self,
        persist_directory: str = "./data/chromadb",
        collection_name: str = "docs",
        host: str | None = None,
        port: int = 8000,
        client: Any | None = None,
        batch_size: int = 500,
    ) -> None:
        self._persist_directory = persist_directory
        self._collection_name = collection_name
        self._host = host or None
        self._port = port
        self._batch_size = batch_size
        self._client = client if client is not None else self._build_client()
        self._collections: dict[str, Any] = {}

    def _build_client(self) -> Any:
        client_settings = chromadb.config.Settings(anonymized_telemetry=False)
        if self._host:
            return chromadb.HttpClient(host=self._host, port=self._port, settings=client_settings)
        return chromadb.PersistentClient(path=self._persist_directory, settings=client_settings)

    # ------------------------------------------------------------------
    # Collection cache
    # ------------------------------------------------------------------

    def _get_collection(self, name: str | None = None) -> Any:
        """Return the named collection, creating and caching it on first access."""
        name = name or self._collection_name
        cached = self._collections.get(name)
        if cached is not None:
            return cached

        try:
            try:
                collection = self._client.get_or_create_collection(
                    name=name,
                    metadata=_COLLECTION_METADATA,
                    embedding_function=_NoopEmbeddingFunction(),
                )
            except ValueError:
                # Collections persisted with a different embedding function
                # reject ours; open them with whatever they were created with.
                collection = self._client.get_or_create_collection(
                    name=name,
                    metadata=_COLLECTION_METADATA,
                )
        except Exception as exc:
            raise StorageError(
                message=f"ChromaDB collection '{name}' could not be opened: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._collections[name] = collection
        logger.info("chromadb_collection_ready", collection=name)
        return collection

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------
    # The ChromaDB client is synchronous (an HTTP round-trip for
    # HttpClient), so every call runs in a worker thread.

    async def upsert(self, entries: list[IndexEntry]) -> None:
        """Insert or replace entries by id, in batches of ``batch_size``.

        When the same id appears more than once in *entries* the last
        occurrence wins, matching the outcome of sequential upserts.
        """
        if not entries:
            return

        unique = list({entry.id: entry for entry in entries}.values())
        await asyncio.to_thread(self._upsert_sync, unique)

        logger.info(
            "chromadb_upsert",
            collection=self._collection_name,
            count=len(unique),
            batches=(len(unique) + self._batch_size - 1) // self._batch_size,
        )

    def _upsert_sync(self, unique: list[IndexEntry]) -> None:
        collection = self._get_collection()
        try:
            for start in range(0, len(unique), self._batch_size):
                batch = unique[start : start + self._batch_size]
                collection.upsert(
                    ids=[entry.id for entry in batch],
                    embeddings=[entry.embedding for entry in batch],
                    documents=[entry.text for entry in batch],
                    metadatas=[self._to_chroma_metadata(entry.metadata) for entry in batch],
                )
        except Exception as exc:
            raise StorageError(
                message=f"ChromaDB upsert failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def search(self, query_vector: list[float], top_k: int) -> list[SearchResult]:
        """Return up to *top_k* nearest entries, most similar first."""
        results = await asyncio.to_thread(self._query_sync, query_vector, top_k)
        if not results:
            return []

        ids = results["ids"][0] if results.get("ids") else []
        if not ids:
            return []
        documents = results["documents"][0] if results.get("documents") else [""] * len(ids)
        metadatas = results["metadatas"][0] if results.get("metadatas") else [{}] * len(ids)
        distances = results["distances"][0] if results.get("distances") else [0.0] * len(ids)

        hits = [
            SearchResult(
                id=entry_id,
                text=document or "",
                metadata=dict(metadata or {}),
                score=max(0.0, min(1.0, 1.0 - distance)),
            )
            for entry_id, document, metadata, distance in zip(
                ids, documents, metadatas, distances, strict=True
            )
        ]
        hits.sort(key=lambda hit: hit.score, reverse=True)

        logger.info(
            "chromadb_query",
            collection=self._collection_name,
            results_count=len(hits),
            top_score=hits[0].score if hits else 0.0,
        )
        return hits

    def _query_sync(self, query_vector: list[float], top_k: int) -> dict[str, Any] | None:
        collection = self._get_collection()
        try:
            stored = collection.count()
            if stored == 0 or top_k <= 0:
                return None
            return collection.query(
                query_embeddings=[query_vector],
                n_results=min(top_k, stored),
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            raise StorageError(
                message=f"ChromaDB query failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def count(self) -> int:
        return await asyncio.to_thread(self._count_sync)

    def _count_sync(self) -> int:
        try:
            return self._get_collection().count()
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(
                message=f"ChromaDB count failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def get_provider_name(self) -> str:
        return "chromadb"

    def is_available(self) -> bool:
        """Return ``True`` if the client answers a heartbeat."""
        try:
            self._client.heartbeat()
            return True
        except Exception:  # noqa: BLE001
            return False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_chroma_metadata(metadata: dict[str, Any]) -> dict[str, Any] | None:
        """Flatten metadata to the scalar types ChromaDB accepts.

        ``None`` values are dropped and other non-scalars are stringified.
        ChromaDB rejects empty metadata dicts, so an empty mapping becomes
        ``None``.
        """
        flat: dict[str, Any] = {}
        for key, value in metadata.items():
            if value is None:
                continue
            if isinstance(value, (str, int, float, bool)):
                flat[key] = value
            else:
                flat[key] = str(value)
        return flat or None
