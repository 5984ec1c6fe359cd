"""Character-bounded text chunkers.

Splits normalized unit text into :class:`~ragdocs.models.documents.Chunk`
objects no longer than ``chunk_size`` characters, with ``overlap``
characters of shared context between consecutive chunks.

Two strategies are provided:

1. **RecursiveChunker** -- hierarchical splitting that prefers paragraph
   breaks, then line breaks, then sentence ends, then spaces, and only
   falls back to raw characters when a single word exceeds the budget.
   Backed by LangChain's ``RecursiveCharacterTextSplitter``.

2. **SlidingWindowChunker** -- fixed windows advancing by
   ``chunk_size - overlap`` characters, with each window end pulled back
   to the nearest whitespace in its second half so words stay whole.

Both stamp every chunk with a fresh UUID and ``chunk`` / ``total_chunks``
metadata on top of the caller's metadata.
"""

from __future__ import annotations

import uuid
from typing import Any

import structlog
from langchain_text_splitters import RecursiveCharacterTextSplitter

from ragdocs.interfaces.chunker import IChunker
from ragdocs.models.documents import Chunk
from ragdocs.utils.errors import ConfigurationError

logger = structlog.get_logger(logger_name=__name__)

# Paragraph -> line -> sentence -> word -> character.
_RECURSIVE_SEPARATORS: list[str] = ["\n\n", "\n", ". ", "! ", "? ", " ", ""]

_WHITESPACE = (" ", "\n", "\t")


class _BaseChunker(IChunker):
    """Shared validation and chunk assembly for the concrete strategies.

    Parameters
    ----------
    chunk_size:
        Maximum characters per chunk.  Must be positive.
    overlap:
        Characters shared between consecutive chunks.  Must satisfy
        ``0 <= overlap < chunk_size``.
    """

    def __init__(self, chunk_size: int = 1000, overlap: int = 0) -> None:
        if chunk_size <= 0:
            raise ConfigurationError(
                message=f"chunk_size must be positive, got {chunk_size}",
                provider_name=self.get_strategy_name(),
            )
        if overlap < 0:
            raise ConfigurationError(
                message=f"overlap must be non-negative, got {overlap}",
                provider_name=self.get_strategy_name(),
            )
        if overlap >= chunk_size:
            raise ConfigurationError(
                message=f"overlap ({overlap}) must be smaller than chunk_size ({chunk_size})",
                provider_name=self.get_strategy_name(),
            )
        self._chunk_size = chunk_size
        self._overlap = overlap

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def overlap(self) -> int:
        return self._overlap

    def get_strategy_name(self) -> str:
        return "chunker"

    def chunk(self, text: str, metadata: dict[str, Any] | None = None) -> list[Chunk]:
        """Split *text* into :class:`Chunk` objects.

        Parameters
        ----------
        text:
            Normalized text of one extracted unit.
        metadata:
            Copied into every chunk, then extended with ``chunk`` and
            ``total_chunks``.

        Returns
        -------
        list[Chunk]
            Chunks in document order.  Empty or whitespace-only input
            returns an empty list.
        """
        if not text or not text.strip():
            return []

        pieces = [piece for piece in self._split(text) if piece.strip()]
        base_metadata = dict(metadata or {})
        total = len(pieces)

        chunks = [
            Chunk(
                id=str(uuid.uuid4()),
                text=piece,
                metadata={**base_metadata, "chunk": index, "total_chunks": total},
            )
            for index, piece in enumerate(pieces)
        ]

        logger.debug(
            "chunking_complete",
            strategy=self.get_strategy_name(),
            num_chunks=total,
            chunk_size=self._chunk_size,
            source=base_metadata.get("source"),
        )
        return chunks

    def _split(self, text: str) -> list[str]:
        raise NotImplementedError


class RecursiveChunker(_BaseChunker):
    """Hierarchical splitter that keeps chunks semantically coherent."""

    def __init__(self, chunk_size: int = 1000, overlap: int = 0) -> None:
        super().__init__(chunk_size=chunk_size, overlap=overlap)
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=overlap,
            length_function=len,
            separators=_RECURSIVE_SEPARATORS,
            keep_separator="end",
            strip_whitespace=True,
        )

    def get_strategy_name(self) -> str:
        return "recursive"

    def _split(self, text: str) -> list[str]:
        return self._splitter.split_text(text)


class SlidingWindowChunker(_BaseChunker):
    """Fixed-width windows with a whitespace-aligned right edge."""

    def get_strategy_name(self) -> str:
        return "sliding_window"

    def _split(self, text: str) -> list[str]:
        text = text.strip()
        length = len(text)
        pieces: list[str] = []
        start = 0

        while start < length:
            end = min(start + self._chunk_size, length)
            if end < length:
                boundary = max(
                    text.rfind(char, start + self._chunk_size // 2, end) for char in _WHITESPACE
                )
                if boundary > start:
                    end = boundary

            piece = text[start:end].strip()
            if piece:
                pieces.append(piece)
            if end >= length:
                break

            next_start = end - self._overlap
            # A snapped window can be shorter than the overlap; never move backwards.
            start = next_start if next_start > start else end

        return pieces
