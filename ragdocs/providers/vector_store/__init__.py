"""Vector store provider implementations.

ChromaDB is the sole vector store implementation: local on-disk persistence
by default (CHROMADB_PERSIST_DIR) or a ChromaDB server when CHROMADB_HOST is
set.  To swap it for another vector database, implement
IVectorStoreProvider and select it in main.py.
"""

from ragdocs.providers.vector_store.chromadb_provider import ChromaDBProvider

__all__ = ["ChromaDBProvider"]
