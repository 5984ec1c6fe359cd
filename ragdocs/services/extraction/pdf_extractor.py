"""PDF document extractors backed by PyMuPDF (fitz).

Two granularities are offered:

- :class:`PdfDocumentExtractor` returns the whole document as one unit
  tagged with ``total_pages``.
- :class:`PdfPageExtractor` returns one unit per page tagged with the
  1-based ``page`` and the constant ``total_pages``, so answers can be
  traced back to a page.

PyMuPDF is synchronous, so parsing runs in a worker thread via
``asyncio.to_thread``.  The document handle is closed in a ``finally``
block on every path, including parse failures.
"""

from __future__ import annotations

import asyncio

import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention
import structlog

from ragdocs.interfaces.document_extractor import IDocumentExtractor
from ragdocs.models.documents import ExtractedUnit, RawFile
from ragdocs.utils.errors import ExtractionError
from ragdocs.utils.text_normalizer import TextNormalizer

logger = structlog.get_logger(logger_name=__name__)


class _PdfExtractor(IDocumentExtractor):
    """Opens the PDF, delegates to :meth:`_read`, and always closes it."""

    def __init__(self, normalizer: TextNormalizer | None = None) -> None:
        self._normalizer = normalizer or TextNormalizer()

    async def extract(self, raw_file: RawFile) -> list[ExtractedUnit]:
        units = await asyncio.to_thread(self._extract_sync, raw_file)
        logger.info(
            "pdf_extracted",
            file=raw_file.name,
            extractor=self.get_extractor_name(),
            units=len(units),
        )
        return units

    def _extract_sync(self, raw_file: RawFile) -> list[ExtractedUnit]:
        try:
            doc = fitz.open(stream=raw_file.content, filetype="pdf")
        except Exception as exc:
            raise ExtractionError(
                message=f"Could not open PDF '{raw_file.name}': {exc}",
                provider_name=self.get_extractor_name(),
            ) from exc

        try:
            return self._read(doc)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(
                message=f"Could not read PDF '{raw_file.name}': {exc}",
                provider_name=self.get_extractor_name(),
            ) from exc
        finally:
            doc.close()

    @staticmethod
    def _page_text(doc, page_number: int) -> str:  # noqa: ANN001
        """Return the raw text of the 1-based *page_number*."""
        return doc[page_number - 1].get_text("text")

    def _read(self, doc) -> list[ExtractedUnit]:  # noqa: ANN001
        raise NotImplementedError


class PdfDocumentExtractor(_PdfExtractor):
    """Whole-document PDF extraction: one unit per file."""

    def _read(self, doc) -> list[ExtractedUnit]:  # noqa: ANN001
        total_pages = len(doc)
        full_text = "\n".join(
            self._page_text(doc, page_number) for page_number in range(1, total_pages + 1)
        )
        return [
            ExtractedUnit(
                text=self._normalizer.normalize(full_text),
                metadata={"total_pages": total_pages},
            )
        ]

    def get_extractor_name(self) -> str:
        return "pdf_document"


class PdfPageExtractor(_PdfExtractor):
    """Per-page PDF extraction: one unit per page, normalized independently."""

    def _read(self, doc) -> list[ExtractedUnit]:  # noqa: ANN001
        total_pages = len(doc)
        return [
            ExtractedUnit(
                text=self._normalizer.normalize(self._page_text(doc, page_number)),
                metadata={"page": page_number, "total_pages": total_pages},
            )
            for page_number in range(1, total_pages + 1)
        ]

    def get_extractor_name(self) -> str:
        return "pdf_page"
