"""Plain-text document extractor."""

from __future__ import annotations

import structlog

from ragdocs.interfaces.document_extractor import IDocumentExtractor
from ragdocs.models.documents import ExtractedUnit, RawFile
from ragdocs.utils.errors import ExtractionError
from ragdocs.utils.text_normalizer import TextNormalizer

logger = structlog.get_logger(logger_name=__name__)


class TextExtractor(IDocumentExtractor):
    """Decodes a UTF-8 text file into a single normalized unit.

    A leading byte-order mark is tolerated.  Any other undecodable byte
    sequence fails the file with :class:`ExtractionError`.
    """

    def __init__(self, normalizer: TextNormalizer | None = None) -> None:
        self._normalizer = normalizer or TextNormalizer()

    async def extract(self, raw_file: RawFile) -> list[ExtractedUnit]:
        try:
            decoded = raw_file.content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ExtractionError(
                message=f"'{raw_file.name}' is not valid UTF-8 text: {exc}",
                provider_name=self.get_extractor_name(),
            ) from exc

        text = self._normalizer.normalize(decoded)
        logger.debug(
            "text_extracted",
            file=raw_file.name,
            raw_chars=len(decoded),
            normalized_chars=len(text),
        )
        return [ExtractedUnit(text=text, metadata={"content_type": "text"})]

    def get_extractor_name(self) -> str:
        return "text"
