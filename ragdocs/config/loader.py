"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - static defaults checked into the repo
#                            (extractor registry, normalizer labels)
#   2. .env file           - local developer overrides (not committed)
#   3. Environment vars    - set at deploy time
#
# _deep_merge does recursive dict merging:
#   base = {"chunking": {"size": 1000}}
#   overrides = {"chunking": {"overlap": 100}}
#   result = {"chunking": {"size": 1000, "overlap": 100}}
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ragdocs.config.settings import Settings

# Used when config.yaml is absent or has no "extractors" section.
DEFAULT_EXTRACTORS: dict[str, str] = {
    "text/plain": "text",
    "application/pdf": "pdf",
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict[str, Any]:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Settings instance to merge; a fresh one is read from the
                  environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    yaml_config.setdefault("extractors", dict(DEFAULT_EXTRACTORS))
    yaml_config.setdefault("normalizer", {})

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "llm": {
            "provider": settings.llm_provider,
            "available_providers": settings.get_available_llm_providers(),
            "temperature": settings.llm_temperature,
        },
        "embedding": {
            "provider": settings.embedding_provider,
        },
        "vector_store": {
            "collection": settings.chromadb_collection,
            "host": settings.chromadb_host,
            "port": settings.chromadb_port,
            "persist_dir": settings.chromadb_persist_dir,
        },
        "chunking": {
            "strategy": settings.chunk_strategy,
            "size": settings.chunk_size,
            "overlap": settings.chunk_overlap,
        },
        "retrieval": {
            "top_k": settings.rag_top_k,
            "score_threshold": settings.rag_score_threshold,
            "max_tokens": settings.rag_max_tokens,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
