"""Shared pytest fixtures for the ragdocs test suite."""

from __future__ import annotations

import hashlib
import math
import re
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from ragdocs.config.settings import Settings
from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.interfaces.llm_provider import ILLMProvider
from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
from ragdocs.models.documents import IndexEntry, RawFile, SearchResult

# ---------------------------------------------------------------------------
# Deterministic embeddings
# ---------------------------------------------------------------------------

_EMBEDDING_DIM = 512

_TOKEN_RE = re.compile(r"[a-z0-9]+")


def _bag_of_words_vector(text: str, dim: int = _EMBEDDING_DIM) -> list[float]:
    """Hash each lower-cased word into a bucket and normalise to unit length.

    Texts sharing words get a high cosine similarity; unrelated texts land
    near zero, which is enough to exercise score thresholds.
    """
    vector = [0.0] * dim
    for token in _TOKEN_RE.findall(text.lower()):
        bucket = int.from_bytes(hashlib.sha256(token.encode("utf-8")).digest()[:4], "little") % dim
        vector[bucket] += 1.0
    magnitude = math.sqrt(sum(v * v for v in vector))
    if magnitude == 0:
        vector[0] = 1.0
        return vector
    return [v / magnitude for v in vector]


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b, strict=False))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class MockEmbeddingProvider(IEmbeddingProvider):
    """In-memory deterministic embedding provider for tests."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [_bag_of_words_vector(t) for t in texts]

    async def embed_single(self, text: str) -> list[float]:
        return (await self.embed([text]))[0]

    def get_dimension(self) -> int:
        return _EMBEDDING_DIM

    def get_provider_name(self) -> str:
        return "mock-embedding"

    def is_available(self) -> bool:
        return True


class MockVectorStore(IVectorStoreProvider):
    """In-memory vector store keyed by entry id.

    ``search`` ranks by cosine similarity clamped to [0, 1], the same score
    convention as the ChromaDB provider.
    """

    def __init__(self) -> None:
        self.entries: dict[str, IndexEntry] = {}
        self.upsert_calls = 0

    async def upsert(self, entries: list[IndexEntry]) -> None:
        self.upsert_calls += 1
        for entry in entries:
            self.entries[entry.id] = entry

    async def search(self, query_vector: list[float], top_k: int) -> list[SearchResult]:
        scored = [
            SearchResult(
                id=entry.id,
                text=entry.text,
                metadata=dict(entry.metadata),
                score=max(0.0, min(1.0, _cosine(query_vector, entry.embedding))),
            )
            for entry in self.entries.values()
        ]
        scored.sort(key=lambda hit: hit.score, reverse=True)
        return scored[: max(top_k, 0)]

    async def count(self) -> int:
        return len(self.entries)

    def get_provider_name(self) -> str:
        return "mock-vector-store"

    def is_available(self) -> bool:
        return True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def mock_embedding_provider() -> MockEmbeddingProvider:
    return MockEmbeddingProvider()


@pytest.fixture
def mock_vector_store() -> MockVectorStore:
    return MockVectorStore()


@pytest.fixture
def mock_llm_provider() -> ILLMProvider:
    """Mock ILLMProvider whose ``complete`` returns a fixed answer.

    Override with ``mock_llm_provider.complete.return_value = "..."``.
    """
    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = "mock-llm"
    mock.is_available.return_value = True
    mock.complete = AsyncMock(return_value="Paris.")
    return mock


@pytest.fixture
def mock_settings() -> Settings:
    """Settings with dummy keys and no dependence on the local environment."""
    return Settings(
        _env_file=None,
        llm_provider="",
        embedding_provider="",
        openai_api_key="sk-test-key",
        openai_base_url="",
        anthropic_api_key="test-anthropic-key",
        chromadb_persist_dir="/tmp/ragdocs_test_chromadb",
        chromadb_host="",
        chunk_strategy="recursive",
        chunk_size=1000,
        chunk_overlap=0,
        app_env="test",
    )


def make_raw_file(
    content: bytes | str,
    name: str = "doc.txt",
    content_type: str = "text/plain",
) -> RawFile:
    data = content.encode("utf-8") if isinstance(content, str) else content
    return RawFile(name=name, size=len(data), content_type=content_type, content=data)


@pytest.fixture
def raw_text_file() -> Any:
    """Factory fixture building a :class:`RawFile` from text or bytes."""
    return make_raw_file
