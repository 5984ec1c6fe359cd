"""Content-type registry that dispatches raw files to document extractors.

The host process builds one :class:`ExtractorRegistry` at startup (see
``ragdocs/main.py``), registers an entry per supported content type, seals
it, and injects it into the ingestion service.  After sealing, the registry
is read-only, so concurrent requests share it without locking.

An entry is either a ready-made :class:`IDocumentExtractor` instance or a
factory called with the free-form resolution parameters of the ingest call
(e.g. HTTP query parameters), which lets one content type map to different
extractors per request::

    registry = ExtractorRegistry()
    registry.register_extractors({
        "text/plain": TextExtractor(),
        "application/pdf": lambda params: (
            PdfDocumentExtractor() if params.get("pdf_mode") == "document" else PdfPageExtractor()
        ),
    })
    registry.seal()
    extractor = registry.resolve("application/pdf", {"pdf_mode": "document"})
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Union

import structlog

from ragdocs.interfaces.document_extractor import IDocumentExtractor
from ragdocs.utils.errors import ConfigurationError, UnresolvedHandlerError

logger = structlog.get_logger(logger_name=__name__)

ExtractorFactory = Callable[[Mapping[str, Any]], IDocumentExtractor]
ExtractorEntry = Union[IDocumentExtractor, ExtractorFactory]


def _normalize_content_type(content_type: str) -> str:
    """Lower-case and drop parameters: ``Text/Plain; charset=utf-8`` -> ``text/plain``."""
    return content_type.split(";", 1)[0].strip().lower()


class ExtractorRegistry:
    """Maps content types to extractor instances or factories."""

    def __init__(self, mapping: Mapping[str, ExtractorEntry] | None = None) -> None:
        self._entries: dict[str, ExtractorEntry] = {}
        self._sealed = False
        if mapping:
            self.register_extractors(mapping)

    def register_extractors(self, mapping: Mapping[str, ExtractorEntry]) -> None:
        """Merge *mapping* into the registry; later keys overwrite earlier ones.

        Raises
        ------
        ConfigurationError
            If the registry has been sealed.
        """
        if self._sealed:
            raise ConfigurationError(
                message="Extractor registry is sealed; register extractors at startup",
                provider_name="extractor_registry",
            )
        for content_type, entry in mapping.items():
            key = _normalize_content_type(content_type)
            if key in self._entries:
                logger.debug("extractor_overwritten", content_type=key)
            self._entries[key] = entry

    def seal(self) -> None:
        """Freeze the registry against further registration."""
        self._sealed = True
        logger.info("extractor_registry_sealed", content_types=self.content_types())

    @property
    def sealed(self) -> bool:
        return self._sealed

    def resolve(
        self,
        content_type: str,
        params: Mapping[str, Any] | None = None,
    ) -> IDocumentExtractor:
        """Return the extractor for *content_type*.

        Factories are called with *params* (an empty dict when omitted).

        Raises
        ------
        UnresolvedHandlerError
            If no entry is registered for the content type.
        """
        key = _normalize_content_type(content_type or "")
        entry = self._entries.get(key)
        if entry is None:
            raise UnresolvedHandlerError(
                message=f"No extractor registered for content type '{content_type}'",
                provider_name="extractor_registry",
            )
        if isinstance(entry, IDocumentExtractor):
            return entry
        return entry(dict(params or {}))

    def content_types(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, content_type: object) -> bool:
        return isinstance(content_type, str) and _normalize_content_type(content_type) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
