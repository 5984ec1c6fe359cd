"""Abstract base class for text chunkers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ragdocs.models.documents import Chunk


# Concrete implementations: RecursiveChunker, SlidingWindowChunker
# Located in: ragdocs/services/chunking/
class IChunker(ABC):
    """Contract for splitting text into bounded, identified chunks."""

    @abstractmethod
    def chunk(self, text: str, metadata: dict[str, Any] | None = None) -> list[Chunk]:
        """Split *text* into chunks of at most :attr:`chunk_size` characters.

        Each chunk gets a fresh unique id and ``metadata`` plus ``chunk``
        (zero-based index) and ``total_chunks``.  Empty text yields ``[]``.
        """

    @property
    @abstractmethod
    def chunk_size(self) -> int:
        """Maximum characters per chunk."""

    @property
    @abstractmethod
    def overlap(self) -> int:
        """Characters shared between consecutive chunks."""

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Return the strategy identifier, e.g. ``"recursive"``."""
