"""Google Gemini embedding provider adapter.

Wraps LangChain's ``GoogleGenerativeAIEmbeddings`` to implement
:class:`IEmbeddingProvider`.  Every text, including the question at query
time, is embedded with the ``RETRIEVAL_DOCUMENT`` task type so stored chunks
and queries live in the same space.  Requires ``GOOGLE_API_KEY``.
"""

from __future__ import annotations

import structlog
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from ragdocs.config.settings import Settings
from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
from ragdocs.utils.errors import ConfigurationError, EmbeddingError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_MODEL = "models/gemini-embedding-001"
_TASK_TYPE = "RETRIEVAL_DOCUMENT"

_MODEL_DIMENSIONS: dict[str, int] = {
    "models/gemini-embedding-001": 3072,
    "models/text-embedding-004": 768,
}


class GeminiEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by the Gemini embeddings API."""

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.google_api_key
        if not self._api_key:
            raise ConfigurationError(
                message="GOOGLE_API_KEY must be set to use Gemini embeddings",
                provider_name="gemini_embedding",
            )

        self._model = settings.gemini_embedding_model or _DEFAULT_MODEL
        self._dimension = _MODEL_DIMENSIONS.get(self._model, 768)
        self._client = GoogleGenerativeAIEmbeddings(
            model=self._model,
            google_api_key=self._api_key,
            task_type=_TASK_TYPE,
        )

    async def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        try:
            embeddings = await self._client.aembed_documents(texts)
        except Exception as exc:
            raise EmbeddingError(
                message=f"Gemini embedding API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if len(embeddings) != len(texts):
            raise EmbeddingError(
                message=f"Gemini returned {len(embeddings)} embeddings for {len(texts)} inputs",
                provider_name=self.get_provider_name(),
            )
        if embeddings:
            self._dimension = len(embeddings[0])

        logger.info("gemini_embedding_batch", model=self._model, batch_size=len(texts))
        return [list(vector) for vector in embeddings]

    async def embed_single(self, text: str) -> list[float]:
        result = await self.embed([text])
        return result[0]

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return "gemini_embedding"

    def is_available(self) -> bool:
        return bool(self._api_key)
