# =============================================================================
# ragdocs/cli/__init__.py - Command-line interface
# =============================================================================
#
# One-shot commands that run the ingestion and query pipelines without the
# HTTP server.  Services are assembled by ragdocs.main.build_services, so the
# CLI honours the same .env settings and config/config.yaml as the API.
#
# Heavy imports (providers, ChromaDB) are deferred into the command handlers
# so `--help` stays fast.
# =============================================================================

"""Command-line tools for ragdocs.

- ``python -m ragdocs.cli ingest FILE [FILE ...]`` - index documents.
- ``python -m ragdocs.cli query "question"`` - answer from the index.
"""
