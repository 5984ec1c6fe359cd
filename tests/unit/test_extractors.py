"""Unit tests for the text and PDF document extractors.

PyMuPDF is patched at the module level, so no real PDF is parsed here;
tests/integration/test_rag_end_to_end.py builds a real one.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from ragdocs.models.documents import RawFile
from ragdocs.services.extraction import PdfDocumentExtractor, PdfPageExtractor, TextExtractor
from ragdocs.utils.errors import ExtractionError
from ragdocs.utils.text_normalizer import TextNormalizer

_FITZ = "ragdocs.services.extraction.pdf_extractor.fitz"


def _pdf_file(name: str = "report.pdf") -> RawFile:
    return RawFile(name=name, size=4, content_type="application/pdf", content=b"%PDF")


def _mock_doc(page_texts: list[str]) -> MagicMock:
    pages = []
    for text in page_texts:
        page = MagicMock()
        page.get_text.return_value = text
        pages.append(page)

    doc = MagicMock()
    doc.__len__.return_value = len(pages)
    doc.__getitem__.side_effect = lambda index: pages[index]
    return doc


# ======================================================================
# Text
# ======================================================================


class TestTextExtractor:
    @pytest.mark.asyncio
    async def test_single_normalized_unit(self, raw_text_file) -> None:
        units = await TextExtractor().extract(raw_text_file("First line.\nPage 3 of 10\nSecond line."))

        assert len(units) == 1
        assert units[0].text == "First line.\n\nSecond line."
        assert units[0].metadata == {"content_type": "text"}

    @pytest.mark.asyncio
    async def test_byte_order_mark_is_dropped(self, raw_text_file) -> None:
        units = await TextExtractor().extract(raw_text_file("\ufeffHello there.".encode("utf-8")))
        assert units[0].text == "Hello there."

    @pytest.mark.asyncio
    async def test_empty_file_gives_empty_text(self, raw_text_file) -> None:
        units = await TextExtractor().extract(raw_text_file(b""))
        assert [u.text for u in units] == [""]

    @pytest.mark.asyncio
    async def test_invalid_utf8_raises(self, raw_text_file) -> None:
        with pytest.raises(ExtractionError) as exc_info:
            await TextExtractor().extract(raw_text_file(b"\xff\xfe\xfa broken", name="bad.txt"))

        assert "bad.txt" in exc_info.value.message
        assert exc_info.value.provider_name == "text"

    @pytest.mark.asyncio
    async def test_uses_injected_normalizer(self, raw_text_file) -> None:
        normalizer = TextNormalizer(header_labels=["ACME Corp"])
        units = await TextExtractor(normalizer).extract(raw_text_file("ACME Corp 2024\nBody text."))
        assert units[0].text == "Body text."

    def test_name(self) -> None:
        assert TextExtractor().get_extractor_name() == "text"


# ======================================================================
# PDF
# ======================================================================


class TestPdfPageExtractor:
    @pytest.mark.asyncio
    async def test_one_unit_per_page(self) -> None:
        doc = _mock_doc(["Page one text.", "Page two text.", "Page three text."])

        with patch(_FITZ) as mock_fitz:
            mock_fitz.open.return_value = doc
            units = await PdfPageExtractor().extract(_pdf_file())

        assert [u.text for u in units] == ["Page one text.", "Page two text.", "Page three text."]
        assert [u.metadata for u in units] == [
            {"page": 1, "total_pages": 3},
            {"page": 2, "total_pages": 3},
            {"page": 3, "total_pages": 3},
        ]
        mock_fitz.open.assert_called_once_with(stream=b"%PDF", filetype="pdf")
        doc.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_pages_are_normalized(self) -> None:
        doc = _mock_doc(["Body of page.\n1\n"])

        with patch(_FITZ) as mock_fitz:
            mock_fitz.open.return_value = doc
            units = await PdfPageExtractor().extract(_pdf_file())

        assert units[0].text == "Body of page."

    @pytest.mark.asyncio
    async def test_zero_page_document(self) -> None:
        doc = _mock_doc([])

        with patch(_FITZ) as mock_fitz:
            mock_fitz.open.return_value = doc
            units = await PdfPageExtractor().extract(_pdf_file())

        assert units == []
        doc.close.assert_called_once()

    def test_name(self) -> None:
        assert PdfPageExtractor().get_extractor_name() == "pdf_page"


class TestPdfDocumentExtractor:
    @pytest.mark.asyncio
    async def test_single_unit(self) -> None:
        doc = _mock_doc(["Alpha section.", "Beta section."])

        with patch(_FITZ) as mock_fitz:
            mock_fitz.open.return_value = doc
            units = await PdfDocumentExtractor().extract(_pdf_file())

        assert len(units) == 1
        assert units[0].text == "Alpha section.\nBeta section."
        assert units[0].metadata == {"total_pages": 2}
        doc.close.assert_called_once()

    def test_name(self) -> None:
        assert PdfDocumentExtractor().get_extractor_name() == "pdf_document"


class TestPdfErrors:
    @pytest.mark.asyncio
    async def test_corrupt_pdf_raises(self) -> None:
        with patch(_FITZ) as mock_fitz:
            mock_fitz.open.side_effect = RuntimeError("cannot open broken document")
            with pytest.raises(ExtractionError) as exc_info:
                await PdfPageExtractor().extract(_pdf_file("broken.pdf"))

        assert "broken.pdf" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_handle_closed_when_page_read_fails(self) -> None:
        doc = _mock_doc(["ok"])
        doc.__getitem__.side_effect = RuntimeError("page tree damaged")

        with patch(_FITZ) as mock_fitz:
            mock_fitz.open.return_value = doc
            with pytest.raises(ExtractionError):
                await PdfDocumentExtractor().extract(_pdf_file())

        doc.close.assert_called_once()
