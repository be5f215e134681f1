"""
Plain-text consumer of RTF parser events.

Text is kept only when it belongs to the document body and is not inside an
ignorable destination: a group marked with ``\\*`` or an ``\\object`` /
``\\pict`` group. The parser still reports the text of those groups; it is
dropped here.
"""

import io
import logging
import typing
from typing import List

from rtf2text.exceptions import ExtractionError, ExtractionFailedError
from rtf2text.extractors.rtf.delegate import Destination
from rtf2text.extractors.rtf.parser import EOL, RtfParser

logger = logging.getLogger(__name__)

IGNORABLE_DESTINATION_SYMBOL = "*"
IGNORABLE_DESTINATION_WORDS = frozenset({"object", "pict"})


class RtfPlainTextExtractor:
    """Extracts plain text from RTF documents.

    Implements the ``RtfParserDelegate`` protocol. Table cells are separated
    by a space and table rows end with ``newline``, the same string the
    parser uses for ``\\par`` and ``\\line``.
    """

    def __init__(self, newline: str = EOL, strict_charsets: bool = False):
        self.newline = newline
        self.strict_charsets = strict_charsets
        self._reset()

    def extract(
        self,
        file_like: typing.BinaryIO | bytes,
        output: typing.TextIO,
        encoding: str | None = None,
    ) -> None:
        """
        Extract the plain text of an RTF document into ``output``.

        Args:
            file_like: Binary stream or bytes holding the RTF document.
            output: Text stream that receives the extracted text.
            encoding: Ignored; RTF declares its own encodings.

        Raises:
            ExtractionError: The document could not be parsed. Nothing is
                written to ``output`` in that case.
        """
        logger.debug("Extracting plain text from RTF")
        self._reset()
        try:
            parser = RtfParser(
                file_like,
                delegate=self,
                newline=self.newline,
                strict_charsets=self.strict_charsets,
            )
            parser.parse()
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionFailedError(
                "Failed to extract RTF text", cause=exc
            ) from exc
        output.write(self._buffer.getvalue())

    def extract_text(
        self, file_like: typing.BinaryIO | bytes, encoding: str | None = None
    ) -> str:
        """Extract the plain text of an RTF document and return it."""
        output = io.StringIO()
        self.extract(file_like, output, encoding)
        return output.getvalue()

    def get_used_encoding(self) -> str | None:
        """Encodings are internal to RTF, so there is nothing to report."""
        return None

    def _reset(self) -> None:
        self._buffer = io.StringIO()
        self._brace_level = 0
        self._in_ignorable_destination = False
        self._ignorable_brace_level = 0

    def _write(self, text: str, context: Destination) -> None:
        if context is Destination.DOCUMENT and not self._in_ignorable_destination:
            self._buffer.write(text)

    def _ignore_current_group(self) -> None:
        if not self._in_ignorable_destination:
            self._in_ignorable_destination = True
            self._ignorable_brace_level = self._brace_level

    # RtfParserDelegate

    def start_document(self) -> None:
        pass

    def end_document(self) -> None:
        pass

    def text(self, text: str, style: str, context: Destination) -> None:
        self._write(text, context)

    def control_symbol(self, symbol: str, context: Destination) -> None:
        if symbol == IGNORABLE_DESTINATION_SYMBOL:
            self._ignore_current_group()

    def control_word(self, word: str, value: int, context: Destination) -> None:
        if word == "cell":
            self._write(" ", context)
        elif word == "row":
            self._write(self.newline, context)
        elif word in IGNORABLE_DESTINATION_WORDS:
            self._ignore_current_group()

    def open_group(self, depth: int) -> None:
        self._brace_level += 1

    def close_group(self, depth: int) -> None:
        self._brace_level -= 1
        if (
            self._in_ignorable_destination
            and self._brace_level < self._ignorable_brace_level
        ):
            self._in_ignorable_destination = False

    def style_list(self, styles: List[str]) -> None:
        pass
