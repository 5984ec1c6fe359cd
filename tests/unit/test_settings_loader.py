"""Unit tests for Settings, the YAML loader and the error hierarchy."""

from __future__ import annotations

import inspect
from pathlib import Path

import pytest

from ragdocs.config.loader import DEFAULT_EXTRACTORS, load_config
from ragdocs.config.settings import Settings
from ragdocs.utils.errors import (
    ConfigurationError,
    EmbeddingError,
    ExtractionError,
    GenerationError,
    ProviderError,
    RagDocsError,
    StorageError,
    UnresolvedHandlerError,
)


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for var in ("CHUNK_SIZE", "CHUNK_OVERLAP", "RAG_TOP_K", "RAG_SCORE_THRESHOLD", "CHROMADB_COLLECTION"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.chunk_size == 1000
        assert settings.chunk_overlap == 0
        assert settings.rag_top_k == 3
        assert settings.rag_score_threshold == 0.35
        assert settings.chromadb_collection == "docs"

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("CHUNK_SIZE", "250")
        monkeypatch.setenv("LLM_PROVIDER", "ollama")

        settings = Settings(_env_file=None)

        assert settings.chunk_size == 250
        assert settings.llm_provider == "ollama"

    def test_available_llm_providers_order(self) -> None:
        settings = Settings(
            _env_file=None,
            anthropic_api_key="a",
            openai_api_key="o",
            ollama_base_url="http://localhost:11434",
        )
        assert settings.get_available_llm_providers() == ["anthropic", "openai", "ollama"]

        bare = Settings(_env_file=None, anthropic_api_key="", openai_api_key="", ollama_base_url="")
        assert bare.get_available_llm_providers() == []


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path: Path, mock_settings: Settings) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=mock_settings)

        assert config["extractors"] == DEFAULT_EXTRACTORS
        assert config["normalizer"] == {}
        assert config["chunking"] == {"strategy": "recursive", "size": 1000, "overlap": 0}

    def test_yaml_merged_with_settings(self, tmp_path: Path, mock_settings: Settings) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "extractors:\n"
            "  text/plain: text\n"
            "  text/csv: text\n"
            "normalizer:\n"
            "  header_labels: [ACME Corp]\n"
            "chunking:\n"
            "  note: kept\n"
            "  size: 1\n",
            encoding="utf-8",
        )

        config = load_config(str(path), settings=mock_settings)

        assert config["extractors"] == {"text/plain": "text", "text/csv": "text"}
        assert config["normalizer"]["header_labels"] == ["ACME Corp"]
        assert config["chunking"]["note"] == "kept"
        assert config["chunking"]["size"] == 1000
        assert config["retrieval"]["top_k"] == 3
        assert config["llm"]["available_providers"] == ["anthropic", "openai", "ollama"]

    def test_repository_config(self, project_root: Path, mock_settings: Settings) -> None:
        config = load_config(str(project_root / "config" / "config.yaml"), settings=mock_settings)

        assert config["extractors"]["application/pdf"] == "pdf"
        assert config["extractors"]["text/plain"] == "text"


class TestConfigPackage:
    def test_exports_no_settings_instance(self) -> None:
        import ragdocs.config as config_pkg

        assert config_pkg.__all__ == ["Settings", "load_config"]
        # The name resolves to the submodule, not a Settings built at import time.
        assert inspect.ismodule(config_pkg.settings)


class TestErrors:
    def test_str_includes_provider(self) -> None:
        assert str(StorageError(message="disk full", provider_name="chromadb")) == "[chromadb] disk full"
        assert str(ConfigurationError(message="bad overlap")) == "bad overlap"

    @pytest.mark.parametrize(
        ("error_cls", "parent"),
        [
            (ConfigurationError, RagDocsError),
            (UnresolvedHandlerError, RagDocsError),
            (ExtractionError, RagDocsError),
            (ProviderError, RagDocsError),
            (EmbeddingError, ProviderError),
            (GenerationError, ProviderError),
            (StorageError, RagDocsError),
        ],
    )
    def test_hierarchy(self, error_cls, parent) -> None:
        assert issubclass(error_cls, parent)
