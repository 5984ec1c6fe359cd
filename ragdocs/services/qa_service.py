"""Retrieval-augmented question answering.

Data flow for one question:

  1. EMBED     -- The question is embedded as a single-element batch.
  2. RETRIEVE  -- The vector store returns the ``top_k`` nearest chunks,
                  best first, with similarity scores in [0, 1].
  3. FILTER    -- Chunks scoring below ``score_threshold`` are dropped.
  4. SHORTCUT  -- If nothing survives, the answer is the empty string and
                  the LLM is never called.
  5. GENERATE  -- Surviving chunks, in retrieval order, become the numbered
                  context handed to :class:`AnswerGenerator`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ragdocs.models.documents import PromptContext, QAAnswer
from ragdocs.utils.errors import EmbeddingError
from ragdocs.utils.logging import get_logger

if TYPE_CHECKING:
    from ragdocs.interfaces.embedding_provider import IEmbeddingProvider
    from ragdocs.interfaces.vector_store_provider import IVectorStoreProvider
    from ragdocs.services.answer_generator import AnswerGenerator

logger: structlog.BoundLogger = get_logger(__name__)


class QAService:
    """Answers questions from the indexed corpus.

    Parameters
    ----------
    embedding_provider:
        Must be the provider the corpus was indexed with.
    vector_store:
        Source of candidate passages.
    generator:
        Writes the answer from the filtered passages.
    """

    def __init__(
        self,
        embedding_provider: IEmbeddingProvider,
        vector_store: IVectorStoreProvider,
        generator: AnswerGenerator,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._generator = generator

    async def query(
        self,
        question: str,
        top_k: int,
        score_threshold: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Return the answer text for *question*, or ``""`` when nothing relevant is indexed."""
        result = await self.ask(
            question,
            top_k=top_k,
            score_threshold=score_threshold,
            max_tokens=max_tokens,
        )
        return result.answer

    async def ask(
        self,
        question: str,
        top_k: int,
        score_threshold: float | None = None,
        max_tokens: int | None = None,
    ) -> QAAnswer:
        """Answer *question* and report which passages the answer used.

        Parameters
        ----------
        question:
            Natural-language question.
        top_k:
            Number of nearest chunks to retrieve.
        score_threshold:
            Minimum similarity a chunk needs to be used.  ``None`` or 0
            disables filtering.
        max_tokens:
            Cap on the answer length; the generator default applies when
            ``None``.
        """
        vectors = await self._embedding_provider.embed([question])
        if not vectors:
            raise EmbeddingError(
                message="Embedding provider returned no vector for the question",
                provider_name=self._embedding_provider.get_provider_name(),
            )

        results = await self._vector_store.search(vectors[0], top_k)
        threshold = score_threshold or 0.0
        relevant = [result for result in results if result.score >= threshold]

        logger.info(
            "qa_retrieval",
            top_k=top_k,
            retrieved=len(results),
            relevant=len(relevant),
            threshold=threshold,
            top_score=results[0].score if results else None,
        )

        if not relevant:
            return QAAnswer(answer="", sources=[])

        context = PromptContext(question=question, sources=relevant, max_tokens=max_tokens)
        answer = await self._generator.generate_response(context)
        return QAAnswer(answer=answer, sources=relevant)
