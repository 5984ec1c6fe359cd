"""Configuration module - exports Settings and load_config."""

from ragdocs.config.loader import load_config
from ragdocs.config.settings import Settings

__all__ = ["Settings", "load_config"]
