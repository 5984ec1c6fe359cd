"""Abstract base class for document extractors.

An extractor turns one :class:`~ragdocs.models.documents.RawFile` into one
or more normalized :class:`~ragdocs.models.documents.ExtractedUnit` objects.
Extractors are looked up by content type through
:class:`~ragdocs.services.extraction.registry.ExtractorRegistry`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ragdocs.models.documents import ExtractedUnit, RawFile


# Concrete implementations: TextExtractor, PdfDocumentExtractor, PdfPageExtractor
# Located in: ragdocs/services/extraction/
class IDocumentExtractor(ABC):
    """Contract for format-specific text extraction."""

    @abstractmethod
    async def extract(self, raw_file: RawFile) -> list[ExtractedUnit]:
        """Extract normalized text units from *raw_file*.

        Raises
        ------
        ragdocs.utils.errors.ExtractionError
            If the file cannot be decoded or parsed.  Not retried.
        """

    @abstractmethod
    def get_extractor_name(self) -> str:
        """Return a short identifier such as ``"pdf_page"``."""
