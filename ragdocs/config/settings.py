"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources, in priority order:
#
#   1. **Environment variables** - e.g. OPENAI_API_KEY=sk-abc123
#   2. **.env file** - key=value lines in the project root .env file
#
# Field ``openai_api_key`` maps to env var ``OPENAI_API_KEY``.  Defaults
# below apply when neither source sets a value.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """ragdocs application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Provider selection ===
    # Empty string = automatic selection in main.py (first configured wins).
    llm_provider: str = ""  # "anthropic" | "openai" | "ollama"
    embedding_provider: str = ""  # "openai" | "ollama" | "gemini"

    # === LLM / embedding providers ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoint (TogetherAI, vLLM, ...)
    openai_text_model: str = ""
    openai_embedding_model: str = ""
    anthropic_api_key: str = ""
    anthropic_model: str = ""
    ollama_base_url: str = "http://localhost:11434"
    ollama_text_model: str = "llama3.1"
    ollama_embedding_model: str = "nomic-embed-text"
    google_api_key: str = ""
    gemini_embedding_model: str = "models/gemini-embedding-001"
    llm_temperature: float = 0.3

    # === Vector store ===
    # When chromadb_host is set the provider talks to a ChromaDB server;
    # otherwise it persists locally under chromadb_persist_dir.
    chromadb_persist_dir: str = "./data/chromadb"
    chromadb_host: str = ""
    chromadb_port: int = 8000
    chromadb_collection: str = "docs"

    # === Chunking ===
    chunk_strategy: str = "recursive"  # "recursive" | "sliding_window"
    chunk_size: int = 1000
    chunk_overlap: int = 0

    # === Retrieval / generation ===
    rag_top_k: int = 3
    rag_score_threshold: float = 0.35
    rag_max_tokens: int = 1000

    # === Ingestion ===
    max_upload_mb: int = 25
    pdf_mode: str = "page"  # "page" | "document"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_llm_providers(self) -> list[str]:
        """Return LLM provider names that have credentials or a URL configured."""
        providers: list[str] = []
        if self.anthropic_api_key:
            providers.append("anthropic")
        if self.openai_api_key:
            providers.append("openai")
        if self.ollama_base_url:
            providers.append("ollama")
        return providers
