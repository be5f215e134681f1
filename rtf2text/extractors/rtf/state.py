"""
Mutable state of one RTF parse.

Everything the grammar productions read or change lives on ``ParserState``:
the scope stack, the active destination, the font and style tables and the
two encodings. The encoding resolution rules are implemented here as the
``on_*`` methods the parser calls when it meets the corresponding control
word.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from rtf2text.exceptions import RtfMalformedInputError
from rtf2text.extractors.rtf.codepages import (
    DEFAULT_ENCODING,
    resolve_charset,
    resolve_codepage,
)
from rtf2text.extractors.rtf.delegate import NO_STYLE, Destination

logger = logging.getLogger(__name__)

# the default number of fallback bytes to skip after a unicode character
DEFAULT_SKIP_COUNT = 1


@dataclass(frozen=True)
class Scope:
    """Values saved when a group opens and restored when it closes."""

    encoding: str
    skip_count: int
    style: str


class ParserState:
    def __init__(self, strict_charsets: bool = False):
        # use the \fcharset table instead of the document encoding for fonts
        self.strict_charsets = strict_charsets
        self.reset()

    def reset(self) -> None:
        """Discard everything learned from a previous document."""
        self.document_encoding: str = DEFAULT_ENCODING
        self.current_encoding: str = DEFAULT_ENCODING
        self.skip_count: int = DEFAULT_SKIP_COUNT
        self.style: str = NO_STYLE

        self.depth = 0
        self.destination = Destination.DOCUMENT
        self.destination_depth = 0

        self.pending_font = 0
        self.font_encodings: Dict[int, str] = {}

        self.pending_style: Optional[int] = None
        self.styles: Dict[int, str] = {}
        self.styles_frozen = False

        self._scopes: List[Scope] = []

    @property
    def text_encoding(self) -> str:
        """Encoding for text met right now; font switches only apply in the body."""
        if self.destination is Destination.DOCUMENT:
            return self.current_encoding
        return self.document_encoding

    # ------------------------------------------------------------------
    # scopes
    # ------------------------------------------------------------------

    def push_scope(self) -> int:
        """Save the scoped values for a new group and return its depth."""
        self._scopes.append(Scope(self.current_encoding, self.skip_count, self.style))
        self.depth += 1
        return self.depth

    def pop_scope(self) -> int:
        """Restore the values of the enclosing group and return the closed depth."""
        if not self._scopes:
            raise RtfMalformedInputError("Unbalanced closing brace")
        scope = self._scopes.pop()
        self.current_encoding = scope.encoding
        self.skip_count = scope.skip_count
        self.style = scope.style
        closed = self.depth
        self.depth -= 1
        if (
            self.destination is Destination.STYLESHEET
            and closed == self.destination_depth + 1
        ):
            # a style definition group ended
            self.pending_style = None
        return closed

    # ------------------------------------------------------------------
    # destinations
    # ------------------------------------------------------------------

    def enter_destination(self, destination: Destination) -> None:
        if self.destination is Destination.DOCUMENT:
            self.destination_depth = self.depth
        self.destination = destination
        logger.debug(f"Entering {destination.value} at depth {self.depth}")

    def closes_destination(self, closed_depth: int) -> bool:
        return (
            self.destination is not Destination.DOCUMENT
            and closed_depth <= self.destination_depth
        )

    def leave_destination(self) -> None:
        logger.debug(f"Leaving {self.destination.value}")
        self.destination = Destination.DOCUMENT
        self.destination_depth = 0

    # ------------------------------------------------------------------
    # encodings
    # ------------------------------------------------------------------

    def on_document_charset(self, encoding: str) -> None:
        """\\ansi, \\mac, \\pc, \\pca: only the document encoding changes."""
        self.document_encoding = encoding

    def on_ansicpg(self, codepage: int) -> None:
        """
        \\ansicpgN sets both the document and the current encoding, so an
        explicit codepage always overrides a font encoding already in effect.
        """
        encoding = resolve_codepage(codepage)
        if encoding is None:
            logger.warning(
                f"Unsupported codepage {codepage}, falling back to {DEFAULT_ENCODING}"
            )
            encoding = DEFAULT_ENCODING
        self.document_encoding = encoding
        self.current_encoding = encoding

    def on_fcharset(self, charset: int) -> None:
        if self.destination is not Destination.FONT_TABLE:
            return
        encoding = self.document_encoding
        if self.strict_charsets:
            resolved = resolve_charset(charset)
            if resolved is None:
                logger.warning(
                    f"Unsupported font charset {charset} for font {self.pending_font}"
                )
            else:
                encoding = resolved
        self.font_encodings[self.pending_font] = encoding

    def on_font(self, font: int) -> None:
        if self.destination is Destination.FONT_TABLE:
            self.pending_font = font
        elif self.destination is Destination.DOCUMENT:
            self.current_encoding = self.font_encodings.get(font, DEFAULT_ENCODING)

    def on_unicode_skip(self, count: int) -> None:
        self.skip_count = max(count, 0)

    def font_for_encoding(self, encoding: str) -> int:
        """
        Returns a font index whose font table entry uses ``encoding``, or -1.
        Only meaningful once the font table has been parsed; if several fonts
        share the encoding, no guarantee is made about which one is returned.
        """
        for font, font_encoding in self.font_encodings.items():
            if font_encoding == encoding:
                return font
        return -1

    # ------------------------------------------------------------------
    # styles
    # ------------------------------------------------------------------

    def on_character_style(self, style: int) -> None:
        if self.destination is Destination.STYLESHEET:
            if not self.styles_frozen:
                self.pending_style = style
        elif self.destination is Destination.DOCUMENT:
            self.style = self.styles.get(style, NO_STYLE)

    def on_plain(self) -> None:
        self.style = NO_STYLE

    def on_stylesheet_text(self, text: str) -> None:
        if self.pending_style is not None and not self.styles_frozen:
            self.styles[self.pending_style] = text

    def freeze_styles(self) -> List[str] | None:
        """Freeze the style table and return its names ordered by style index.

        Returns None when the table was already delivered.
        """
        if self.styles_frozen:
            return None
        self.styles_frozen = True
        self.pending_style = None
        return [self.styles[index] for index in sorted(self.styles)]
