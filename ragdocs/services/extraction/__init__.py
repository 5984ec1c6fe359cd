"""Document extraction for the ingestion pipeline.

Format-specific extractors turn a :class:`~ragdocs.models.documents.RawFile`
into normalized :class:`~ragdocs.models.documents.ExtractedUnit` objects:

- **TextExtractor** -- UTF-8 text, one unit per file.
- **PdfDocumentExtractor** -- whole PDF as one unit.
- **PdfPageExtractor** -- one unit per PDF page.

:class:`ExtractorRegistry` selects the extractor for a file's content type.
"""

from ragdocs.services.extraction.pdf_extractor import PdfDocumentExtractor, PdfPageExtractor
from ragdocs.services.extraction.registry import ExtractorRegistry
from ragdocs.services.extraction.text_extractor import TextExtractor

__all__ = [
    "ExtractorRegistry",
    "PdfDocumentExtractor",
    "PdfPageExtractor",
    "TextExtractor",
]
