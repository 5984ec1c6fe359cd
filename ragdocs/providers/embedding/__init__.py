"""Embedding provider implementations.

Embeddings convert text into numeric vectors that capture semantic meaning.
These vectors are stored in ChromaDB and compared at query time.

    1. OpenAIEmbeddingProvider  - text-embedding-3-small (1536 dims), or any
       OpenAI-compatible endpoint via OPENAI_BASE_URL.
    2. OllamaEmbeddingProvider  - nomic-embed-text (768 dims) via a local
       Ollama server.
    3. GeminiEmbeddingProvider  - gemini-embedding-001 through LangChain's
       Google GenAI integration; needs GOOGLE_API_KEY.
"""

from ragdocs.providers.embedding.gemini_embedding_provider import GeminiEmbeddingProvider
from ragdocs.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from ragdocs.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = ["GeminiEmbeddingProvider", "OpenAIEmbeddingProvider", "OllamaEmbeddingProvider"]
