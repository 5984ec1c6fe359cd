"""Chunking strategies for the ingestion pipeline.

- **RecursiveChunker** -- paragraph / sentence / word aware splitting (default).
- **SlidingWindowChunker** -- fixed character windows with whitespace snapping.

``CHUNKERS`` maps the ``CHUNK_STRATEGY`` setting to a class.
"""

from ragdocs.services.chunking.chunker import RecursiveChunker, SlidingWindowChunker

CHUNKERS = {
    "recursive": RecursiveChunker,
    "sliding_window": SlidingWindowChunker,
}

__all__ = ["CHUNKERS", "RecursiveChunker", "SlidingWindowChunker"]
