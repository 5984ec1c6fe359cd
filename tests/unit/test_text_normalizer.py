"""Unit tests for ragdocs.utils.text_normalizer."""

from __future__ import annotations

import pytest

from ragdocs.utils.text_normalizer import DEFAULT_HEADER_LABELS, TextNormalizer, normalize_text

_NOISY_REPORT = (
    "Annual Report\n"
    "Page 1\n"
    "\n"
    "Table of Contents\n"
    "1. Introduction ........ 3\n"
    "2. Results ........ 7\n"
    "\n"
    "The company grew\n"
    "quickly this year.\n"
    "The company grew\n"
    "quickly this year.\n"
    "\n"
    "Revenue doubled.\n"
    "Confidential\n"
    "- 2 -\n"
)


class TestTextNormalizer:
    def test_empty_and_whitespace_input(self) -> None:
        assert normalize_text("") == ""
        assert normalize_text("  \n\t \n") == ""

    def test_removes_page_number_lines(self) -> None:
        assert normalize_text("First line.\nPage 3 of 10\nSecond line.") == "First line.\n\nSecond line."

    def test_removes_bare_page_numbers(self) -> None:
        assert normalize_text("Intro.\n12\nMore.") == "Intro.\n\nMore."

    def test_strips_toc_leaders(self) -> None:
        assert normalize_text("Introduction ........ 3") == "Introduction"

    def test_removes_header_label_lines(self) -> None:
        assert normalize_text("Confidential - do not distribute\nReal content.") == "Real content."

    def test_joins_hard_wrapped_lines(self) -> None:
        assert normalize_text("The quick brown\nfox jumps.") == "The quick brown fox jumps."

    def test_collapses_spaces(self) -> None:
        assert normalize_text("Too    many   spaces.") == "Too many spaces."

    def test_converts_crlf(self) -> None:
        assert normalize_text("Line one.\r\nLine two.") == "Line one.\nLine two."

    def test_collapses_duplicate_lines(self) -> None:
        assert normalize_text("Same line.\nSame line.\nOther.") == "Same line.\nOther."

    def test_collapses_duplicate_paragraphs(self) -> None:
        assert normalize_text("Para one.\n\nPara one.\n\nPara two.") == "Para one.\n\nPara two."

    def test_inserts_blank_line_before_heading(self) -> None:
        assert (
            normalize_text("Intro text.\nBackground\n\nMore text.")
            == "Intro text.\n\nBackground\n\nMore text."
        )

    def test_heading_repeated_across_page_break_collapses(self) -> None:
        assert (
            normalize_text("End of intro.\nSummary\n\nSummary\n\nBody text here.")
            == "End of intro.\n\nSummary\n\nBody text here."
        )

    def test_full_document(self) -> None:
        assert normalize_text(_NOISY_REPORT) == (
            "Annual Report\n\n"
            "Table of Contents 1. Introduction 2. Results\n\n"
            "The company grew quickly this year.\n\n"
            "Revenue doubled."
        )

    @pytest.mark.parametrize(
        "raw",
        [
            _NOISY_REPORT,
            "First line.\nPage 3 of 10\nSecond line.",
            "Intro text.\nBackground\n\nMore text.",
            "Chapter One ........ 1\nChapter Two ........ 9\n\nBody.\nBody.\n",
            "Para one.\n\nPara one.\n\nPara two.",
            "End of intro.\nSummary\n\nSummary\n\nBody text here.",
            "Closing remarks.\nAppendix\nAppendix\n\nAppendix\n\nTables follow.",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        once = normalize_text(raw)
        assert normalize_text(once) == once


class TestHeaderLabels:
    def test_default_labels(self) -> None:
        assert TextNormalizer().header_labels == DEFAULT_HEADER_LABELS

    def test_custom_labels(self) -> None:
        normalizer = TextNormalizer(header_labels=["ACME Corp"])
        assert normalizer.normalize("ACME Corp 2024\nBody text.") == "Body text."

    def test_label_match_is_case_insensitive(self) -> None:
        assert normalize_text("CONFIDENTIAL\nBody text.") == "Body text."

    def test_no_labels_keeps_lines(self) -> None:
        normalizer = TextNormalizer(header_labels=[])
        assert "Confidential" in normalizer.normalize("Confidential\nBody text.")
