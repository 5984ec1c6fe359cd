"""Prompt assembly and answer generation over any :class:`ILLMProvider`.

The generator owns the wording of the system instruction and the user
message, so every LLM backend answers from the same prompt.  The user
message has two shapes:

- **with context**::

      Context: [1] first passage

      [2] second passage

      Question: <question>

      Answer:

- **without context**: the question plus an explicit statement that no
  relevant information was found, so the model declines politely instead
  of inventing an answer.
"""

from __future__ import annotations

import structlog

from ragdocs.interfaces.llm_provider import ILLMProvider
from ragdocs.models.documents import PromptContext, SearchResult
from ragdocs.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

DEFAULT_MAX_TOKENS = 512


class AnswerGenerator:
    """Builds the RAG prompt and asks the injected LLM for an answer.

    Parameters
    ----------
    llm:
        Provider used for the completion call.
    temperature:
        Sampling temperature forwarded to the provider.
    """

    _SYSTEM_PROMPT = (
        "You are a helpful assistant. Use the following context to answer the "
        "question. If the context doesn't contain relevant information, say so politely."
    )

    _NO_CONTEXT_INSTRUCTION = (
        "You don't have any relevant information to answer this question. "
        "Please say so politely."
    )

    def __init__(self, llm: ILLMProvider, temperature: float = 0.3) -> None:
        self._llm = llm
        self._temperature = temperature

    @property
    def system_prompt(self) -> str:
        return self._SYSTEM_PROMPT

    def get_provider_name(self) -> str:
        return self._llm.get_provider_name()

    async def generate_response(self, context: PromptContext) -> str:
        """Return the model's answer to ``context.question``.

        ``context.max_tokens`` caps the answer length; 512 when unset.
        """
        user_prompt = self.build_user_message(context.question, context.sources)
        max_tokens = context.max_tokens or DEFAULT_MAX_TOKENS

        answer = await self._llm.complete(
            system_prompt=self._SYSTEM_PROMPT,
            user_prompt=user_prompt,
            temperature=self._temperature,
            max_tokens=max_tokens,
        )
        logger.info(
            "answer_generated",
            provider=self._llm.get_provider_name(),
            sources=len(context.sources),
            max_tokens=max_tokens,
            answer_chars=len(answer),
        )
        return answer

    @staticmethod
    def build_context(sources: list[SearchResult]) -> str:
        """Number passages ``[1]..[n]`` in retrieval order, blank-line separated."""
        return "\n\n".join(f"[{index}] {source.text}" for index, source in enumerate(sources, start=1))

    def build_user_message(self, question: str, sources: list[SearchResult]) -> str:
        context = self.build_context(sources)
        if not context:
            return f"Question: {question}\n\n{self._NO_CONTEXT_INSTRUCTION}"
        return f"Context: {context}\n\nQuestion: {question}\n\nAnswer:"
