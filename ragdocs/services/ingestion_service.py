"""Orchestrator for the document ingestion pipeline.

Pipeline stages: **dispatch -> extract -> chunk -> embed -> store**.

:class:`IngestionService` coordinates four collaborators (extractor
registry, chunker, embedding provider, vector store) without any of them
knowing about each other.  All of them are injected through the
constructor, so providers can be swapped without changing this class.

A call is all-or-nothing: files are processed one after another and every
chunk is kept in memory until the end, when all chunk texts are embedded
in a single batch call and stored in a single upsert.  Any failure before
that point aborts the call and nothing is written.
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from ragdocs.models.documents import Chunk, IndexEntry, IngestionResult, RawFile
from ragdocs.utils.errors import ConfigurationError, EmbeddingError

if TYPE_CHECKING:
    from ragdocs.interfaces.chunker import IChunker
    from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
    from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
    from ragdocs.services.extraction.registry import ExtractorRegistry

logger = structlog.get_logger(logger_name=__name__)


class IngestionService:
    """Turns a batch of raw files into stored, searchable chunks.

    Parameters
    ----------
    registry:
        Content-type to extractor mapping, populated at startup.
    chunker:
        Splits each extracted unit into bounded chunks.
    embedding_provider:
        Embeds all chunk texts of a call in one batch.
    vector_store:
        Receives all embedded chunks of a call in one upsert.
    """

    def __init__(
        self,
        registry: ExtractorRegistry,
        chunker: IChunker,
        embedding_provider: IEmbeddingProvider,
        vector_store: IVectorStoreProvider,
    ) -> None:
        self._registry = registry
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store

    async def ingest(
        self,
        files: Sequence[RawFile],
        params: Mapping[str, Any] | None = None,
    ) -> IngestionResult:
        """Extract, chunk, embed and store every file in *files*.

        Parameters
        ----------
        files:
            Non-empty batch of raw files.
        params:
            Free-form resolution parameters passed to extractor factories.

        Returns
        -------
        IngestionResult
            Counts and wall-clock duration for the call.

        Raises
        ------
        ConfigurationError
            If *files* is empty (no provider is contacted).
        UnresolvedHandlerError
            If any file's content type has no registered extractor.
        ExtractionError
            If any file cannot be parsed.
        EmbeddingError
            If the embedding call fails or returns misaligned vectors.
        StorageError
            If the upsert fails.
        """
        if not files:
            raise ConfigurationError(
                message="No files provided for ingestion",
                provider_name="ingestion",
            )

        start = time.monotonic()
        resolution_params = dict(params or {})
        all_chunks: list[Chunk] = []
        units_extracted = 0

        for raw_file in files:
            extractor = self._registry.resolve(raw_file.content_type, resolution_params)
            units = await extractor.extract(raw_file)
            units_extracted += len(units)

            file_chunks = 0
            for unit in units:
                metadata = {
                    "source": raw_file.name,
                    "content_type": raw_file.content_type,
                    **unit.metadata,
                }
                chunks = self._chunker.chunk(unit.text, metadata)
                file_chunks += len(chunks)
                all_chunks.extend(chunks)

            logger.info(
                "file_processed",
                file=raw_file.name,
                content_type=raw_file.content_type,
                extractor=extractor.get_extractor_name(),
                units=len(units),
                chunks=file_chunks,
            )

        if all_chunks:
            await self._store(all_chunks)
        else:
            logger.warning("ingestion_no_chunks", files=len(files))

        result = IngestionResult(
            files_processed=len(files),
            units_extracted=units_extracted,
            chunks_created=len(all_chunks),
            ingestion_time=round(time.monotonic() - start, 3),
        )
        logger.info(
            "ingestion_complete",
            files=result.files_processed,
            units=result.units_extracted,
            chunks=result.chunks_created,
            seconds=result.ingestion_time,
        )
        return result

    async def _store(self, chunks: list[Chunk]) -> None:
        """Embed *chunks* in one call and upsert them in one call, order preserved."""
        embeddings = await self._embedding_provider.embed([chunk.text for chunk in chunks])
        if len(embeddings) != len(chunks):
            raise EmbeddingError(
                message=f"Expected {len(chunks)} embeddings, received {len(embeddings)}",
                provider_name=self._embedding_provider.get_provider_name(),
            )

        entries = [
            IndexEntry(
                id=chunk.id,
                embedding=embedding,
                text=chunk.text,
                metadata=chunk.metadata,
            )
            for chunk, embedding in zip(chunks, embeddings, strict=True)
        ]
        await self._vector_store.upsert(entries)
