"""
RTF Document Extractor

Extracts the body text, paragraphs, style names and document info of RTF
(Rich Text Format) files. The text itself comes from the event-driven
``RtfParser``; this module only collects the events into an ``RtfContent``.
"""

import io
import logging
from typing import Any, Generator, List, Optional

from rtf2text.exceptions import ExtractionError, ExtractionFailedError
from rtf2text.extractors.data_types import RtfContent, RtfMetadata, RtfParagraph
from rtf2text.extractors.rtf.delegate import NO_STYLE, Destination
from rtf2text.extractors.rtf.parser import RtfParser
from rtf2text.extractors.rtf.plain_text import RtfPlainTextExtractor

logger = logging.getLogger(__name__)

# \info sub-destinations holding text, mapped to RtfMetadata attributes
_INFO_TEXT_FIELDS = {
    "title": "title",
    "subject": "subject",
    "author": "author",
    "keywords": "keywords",
    "doccomm": "comments",
    "operator": "operator",
    "category": "category",
    "manager": "manager",
    "company": "company",
}

# \info control words carrying a number
_INFO_NUMERIC_FIELDS = {
    "version": "version",
    "vern": "revision",
    "nofpages": "num_pages",
    "nofwords": "num_words",
    "nofchars": "num_chars",
}


def _style_name(style: str) -> str:
    """Style names are written with a trailing semicolon in the stylesheet."""
    return style.rstrip(";").strip()


class _RtfContentCollector(RtfPlainTextExtractor):
    """Plain-text extractor that also records paragraphs, styles and info."""

    def __init__(self, newline: str = "\n"):
        super().__init__(newline=newline)
        self.metadata = RtfMetadata()
        self.styles: List[str] = []
        self.paragraphs: List[RtfParagraph] = []

        self._depth = 0
        self._info_field: Optional[str] = None
        self._info_depth = 0

        self._last_style = NO_STYLE
        self._paragraph: List[str] = []
        self._paragraph_style: Optional[str] = None

    def to_content(self) -> RtfContent:
        return RtfContent(
            metadata=self.metadata,
            styles=self.styles,
            paragraphs=self.paragraphs,
            full_text=self._buffer.getvalue(),
        )

    # paragraphs

    def _write(self, text: str, context: Destination) -> None:
        if context is Destination.DOCUMENT and not self._in_ignorable_destination:
            for index, segment in enumerate(text.split(self.newline)):
                if index > 0:
                    self._finish_paragraph()
                if self._paragraph_style is None and segment.strip():
                    self._paragraph_style = _style_name(self._last_style) or None
                self._paragraph.append(segment)
        super()._write(text, context)

    def _finish_paragraph(self) -> None:
        text = "".join(self._paragraph).strip()
        if text:
            self.paragraphs.append(
                RtfParagraph(text=text, style_name=self._paragraph_style)
            )
        self._paragraph = []
        self._paragraph_style = None

    # RtfParserDelegate

    def end_document(self) -> None:
        self._finish_paragraph()
        logger.debug(f"Collected {len(self.paragraphs)} paragraphs from RTF")

    def text(self, text: str, style: str, context: Destination) -> None:
        if context is Destination.INFO and self._info_field is not None:
            current = getattr(self.metadata, self._info_field)
            setattr(self.metadata, self._info_field, current + text)
        self._last_style = style
        super().text(text, style, context)

    def control_word(self, word: str, value: int, context: Destination) -> None:
        if context is Destination.INFO:
            if word in _INFO_TEXT_FIELDS:
                self._info_field = _INFO_TEXT_FIELDS[word]
                self._info_depth = self._depth
            elif word in _INFO_NUMERIC_FIELDS:
                setattr(self.metadata, _INFO_NUMERIC_FIELDS[word], value)
            return
        super().control_word(word, value, context)

    def open_group(self, depth: int) -> None:
        self._depth = depth
        super().open_group(depth)

    def close_group(self, depth: int) -> None:
        if self._info_field is not None and depth <= self._info_depth:
            self._info_field = None
        self._depth = depth - 1
        super().close_group(depth)

    def style_list(self, styles: List[str]) -> None:
        self.styles = [_style_name(style) for style in styles]


def read_rtf(
    file_like: io.BytesIO, path: str | None = None, newline: str = "\n"
) -> Generator[RtfContent, Any, None]:
    """
    Extract content from an RTF file.

    Uses a generator pattern for API consistency. RTF files yield exactly one
    RtfContent object containing the text, paragraphs, style names and the
    metadata of the \\info destination.

    Args:
        file_like: A BytesIO object containing the RTF file data.
        path: Optional file path to populate file metadata fields.
        newline: String emitted for paragraph, line and table row breaks.

    Raises:
        RtfMalformedInputError: The document is not well-formed RTF.
        ExtractionFailedError: Any other failure during extraction.
    """
    try:
        logger.debug("Reading RTF file")
        file_like.seek(0)
        data = file_like.read()

        collector = _RtfContentCollector(newline=newline)
        RtfParser(data, delegate=collector, newline=newline).parse()

        content = collector.to_content()
        content.metadata.populate_from_path(path)

        yield content
    except ExtractionError:
        raise
    except Exception as exc:
        raise ExtractionFailedError("Failed to extract RTF file", cause=exc) from exc
