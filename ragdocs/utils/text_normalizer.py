"""Text normalization for extracted document text.

Raw text pulled out of PDFs and plain-text exports carries layout noise that
pollutes embeddings: page-number lines, table-of-contents leaders, running
headers and footers, hard-wrapped lines, and repeated lines where a page
break duplicated content.  :class:`TextNormalizer` strips that noise with a
fixed sequence of regex rewrites.

The passes run in a fixed order.  Later passes assume earlier ones have
already removed noise: line joining must not glue a page number onto a
sentence, and duplicate removal only works once wrapped lines are joined.

    1. page-number lines          6. paragraph / spacing normalization
    2. TOC leaders + numbered TOC 7. duplicate lines, duplicate paragraphs
    3. leader-dot lines           8. blank line before section headings,
    4. header / footer labels        then duplicate paragraphs again
    5. mid-sentence line joins    9. trim

The sequence is repeated until the text stops changing, so normalizing
already-normalized text is a no-op.

Duplicate collapsing is a heuristic: two adjacent identical lines or
paragraphs are merged even when the repetition was intentional.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

DEFAULT_HEADER_LABELS: tuple[str, ...] = ("Company Name", "Document Title", "Confidential")

# ------------------------------------------------------------------
# Input cleanup
# ------------------------------------------------------------------

_CARRIAGE_RETURN = re.compile(r"\r\n?")
_TRAILING_SPACE = re.compile(r"[ \t]+$", re.MULTILINE)

# ------------------------------------------------------------------
# 1. Page numbers
# ------------------------------------------------------------------

_PAGE_NUMBER_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "Page 12", "Page 12 of 34"
    re.compile(r"^[ \t]*Page[ \t]+\d+(?:[ \t]+of[ \t]+\d+)?[ \t]*$", re.MULTILINE | re.IGNORECASE),
    # "12", "12 of 34"
    re.compile(r"^[ \t]*\d+(?:[ \t]+of[ \t]+\d+)?[ \t]*$", re.MULTILINE),
    # "-- 12 of 34 --"
    re.compile(r"^[ \t]*[-–—]+[ \t]*\d+[ \t]+of[ \t]+\d+[ \t]*[-–—]+[ \t]*$", re.MULTILINE),
    # "- 12 -"
    re.compile(r"^[ \t]*[-–—]+[ \t]*\d+[ \t]*[-–—]+[ \t]*$", re.MULTILINE),
)

# ------------------------------------------------------------------
# 2-3. Table of contents artifacts
# ------------------------------------------------------------------

# "Introduction ........ 3" -> "Introduction"
_TOC_LEADER = re.compile(
    r"(?:^|[ \t])(?:\.{3,}|·{2,}|[-–—]{2,})[ \t]*\d+[ \t]*$",
    re.MULTILINE,
)

# "1.2 Section Title....14" -> "1.2 Section Title"
_NUMBERED_TOC = re.compile(r"^(\d+(?:\.\d+)*[ \t]+.+?)[ \t]*\.{3,}[ \t]*\d+[ \t]*$", re.MULTILINE)

_LEADER_RUN = re.compile(r"\.{3,}")
_LEADER_LINE_MIN_LENGTH = 20

# ------------------------------------------------------------------
# 5-8. Line and paragraph structure
# ------------------------------------------------------------------

# A single newline not ending a sentence (or a blank line) joins the lines.
_MID_SENTENCE_BREAK = re.compile(r"(?<![.!?:\n])\n(?!\n)")

_LINE_EDGE_SPACE = re.compile(r"^[ \t]+|[ \t]+$", re.MULTILINE)
_MULTI_SPACE = re.compile(r"[ \t]{2,}")
_MULTI_NEWLINE = re.compile(r"\n{3,}")

_DUPLICATE_LINE = re.compile(r"^(.+)(?:\n\1)+$", re.MULTILINE)

# Capitalized line of letters and spaces, at least four characters long.
_SECTION_HEADING = re.compile(r"(?<=[^\n])\n(?=[A-Z][A-Za-z \t]{3,}\n)")

# Upper bound on repeated passes; real text settles in one or two.
_MAX_ROUNDS = 5


class TextNormalizer:
    """Deterministic cleaner for text extracted from documents.

    Parameters
    ----------
    header_labels:
        Literal prefixes identifying running header/footer lines.  Any line
        starting with one of them (case-insensitive) is removed.
    """

    def __init__(self, header_labels: Iterable[str] | None = None) -> None:
        labels = tuple(header_labels) if header_labels is not None else DEFAULT_HEADER_LABELS
        self._header_labels = labels
        self._header_pattern: re.Pattern[str] | None = None
        if labels:
            alternatives = "|".join(re.escape(label) for label in labels)
            self._header_pattern = re.compile(
                rf"^[ \t]*(?:{alternatives}).*$", re.MULTILINE | re.IGNORECASE
            )

    @property
    def header_labels(self) -> tuple[str, ...]:
        return self._header_labels

    def normalize(self, raw: str) -> str:
        """Return *raw* with layout noise removed.

        The passes are repeated until the text stops changing, because a
        heading split off in pass 8 can become a duplicate of the next
        paragraph.  The result is therefore a fixed point:
        ``normalize(normalize(x)) == normalize(x)``.

        Never raises; empty or whitespace-only input yields ``""``.
        """
        if not raw or not raw.strip():
            return ""

        text = self._normalize_once(raw)
        for _ in range(_MAX_ROUNDS):
            again = self._normalize_once(text)
            if again == text:
                break
            text = again
        return text

    def _normalize_once(self, raw: str) -> str:
        text = _CARRIAGE_RETURN.sub("\n", raw)
        text = _TRAILING_SPACE.sub("", text)

        # 1. Page-number-only lines
        for pattern in _PAGE_NUMBER_PATTERNS:
            text = pattern.sub("", text)

        # 2. TOC leaders, then numbered TOC entries without spaced leaders
        text = _TOC_LEADER.sub("", text)
        text = _NUMBERED_TOC.sub(r"\1", text)

        # 3. Lines made mostly of leader dots
        text = self._remove_leader_lines(text)

        # 4. Running headers / footers
        if self._header_pattern is not None:
            text = self._header_pattern.sub("", text)

        # 5. Hard-wrapped lines
        text = _MID_SENTENCE_BREAK.sub(" ", text)

        # 6. Paragraph normalization
        text = _LINE_EDGE_SPACE.sub("", text)
        text = _MULTI_SPACE.sub(" ", text)
        text = _MULTI_NEWLINE.sub("\n\n", text)

        # 7. Duplicate lines, then duplicate paragraphs
        text = _DUPLICATE_LINE.sub(r"\1", text)
        text = self._remove_duplicate_paragraphs(text)

        # 8. Section heading spacing; a split-off heading may repeat the next paragraph
        text = _SECTION_HEADING.sub("\n\n", text)
        text = self._remove_duplicate_paragraphs(text)

        # 9.
        return text.strip()

    @staticmethod
    def _remove_leader_lines(text: str) -> str:
        lines = text.split("\n")
        kept = [
            "" if len(line) >= _LEADER_LINE_MIN_LENGTH and len(_LEADER_RUN.findall(line)) >= 2 else line
            for line in lines
        ]
        return "\n".join(kept)

    @staticmethod
    def _remove_duplicate_paragraphs(text: str) -> str:
        paragraphs: list[str] = []
        for paragraph in text.split("\n\n"):
            if paragraphs and paragraph.strip() and paragraph.strip() == paragraphs[-1].strip():
                continue
            paragraphs.append(paragraph)
        return "\n\n".join(paragraphs)


_DEFAULT_NORMALIZER = TextNormalizer()


def normalize_text(raw: str) -> str:
    """Normalize *raw* with the default header/footer labels."""
    return _DEFAULT_NORMALIZER.normalize(raw)
