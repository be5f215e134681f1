"""
Recursive-descent RTF parser.

Grammar (informal):

    document    := '{' \\rtfN charset header* item* '}'
    charset     := \\ansi | \\mac | \\pc | \\pca
    header      := \\ucN | \\ansicpgN | \\deffN
    group       := '{' item* '}'
    item        := group | table | state-word | control-symbol
                 | control-word | text
    text        := (TEXT | HEX_ESCAPE | SPECIAL_CHAR | ESCAPED_LITERAL | \\uN)+

The parser keeps all mutable state on a ``ParserState`` and forwards what it
finds to an ``RtfParserDelegate``. Text handed to the delegate is fully
decoded: raw bytes are buffered until something other than raw bytes shows up
and then decoded with the encoding in effect at that point.
"""

import io
import logging
import os

from rtf2text.exceptions import RtfEncodingError, RtfMalformedInputError
from rtf2text.extractors.rtf.codepages import resolve_codepage
from rtf2text.extractors.rtf.delegate import (
    Destination,
    NullRtfParserDelegate,
    RtfParserDelegate,
)
from rtf2text.extractors.rtf.state import ParserState
from rtf2text.extractors.rtf.tokenizer import RtfTokenizer
from rtf2text.extractors.rtf.tokens import (
    NEWLINE_CHARS,
    SPECIAL_CHAR_TEXT,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)

# system end-of-line
EOL = os.linesep

# charset keywords that must follow \rtfN
DOCUMENT_CHARSETS = {
    "ansi": resolve_codepage(1252),
    "mac": "mac_roman",
    "pc": resolve_codepage(437),
    "pca": resolve_codepage(850),
}

# keywords that open a table declaration (destination)
TABLE_DESTINATIONS = {
    "info": Destination.INFO,
    "fonttbl": Destination.FONT_TABLE,
    "colortbl": Destination.COLOR_TABLE,
    "stylesheet": Destination.STYLESHEET,
    "listtable": Destination.LIST_TABLE,
    "revtbl": Destination.REVISION_TABLE,
    "pntext": Destination.PAGE_NUMBER_TEXT,
    "pnseclvl": Destination.PAGE_NUMBER_TEXT,
}

HEADER_WORDS = frozenset({"uc", "ansicpg", "deff"})

# words the parser consumes itself; each of them needs a numeric parameter
_VALUED_STATE_WORDS = frozenset({"uc", "f", "fcharset", "cs", "deff", "ansicpg"})

_TEXT_KINDS = frozenset(
    {
        TokenKind.TEXT,
        TokenKind.HEX_ESCAPE,
        TokenKind.SPECIAL_CHAR,
        TokenKind.ESCAPED_LITERAL,
    }
)


def _join_surrogates(text: str) -> str:
    """
    Combine UTF-16 surrogate pairs produced by consecutive \\u escapes.
    An unpaired surrogate becomes U+FFFD.
    """
    if not any(0xD800 <= ord(ch) <= 0xDFFF for ch in text):
        return text
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


class RtfParser:
    """Parses one RTF document and reports it to a delegate.

    Example:
        >>> parser = RtfParser(b"{\\\\rtf1\\\\ansi Hello}", delegate=my_delegate)
        >>> parser.parse()
    """

    def __init__(
        self,
        data: bytes | bytearray | io.BufferedIOBase,
        delegate: RtfParserDelegate | None = None,
        newline: str = EOL,
        strict_charsets: bool = False,
    ):
        self._tokens = RtfTokenizer(data)
        self._delegate: RtfParserDelegate = delegate or NullRtfParserDelegate()
        self.newline = newline
        self.state = ParserState(strict_charsets=strict_charsets)

    def set_delegate(self, delegate: RtfParserDelegate | None) -> None:
        self._delegate = delegate or NullRtfParserDelegate()

    def reset(self, data: bytes | bytearray | io.BufferedIOBase) -> None:
        """Prepare the parser for another document."""
        self._tokens = RtfTokenizer(data)
        self.state.reset()

    def parse(self) -> None:
        """Parse the whole document, raising on malformed input."""
        self._document()

    def font_for_encoding(self, encoding: str) -> int:
        return self.state.font_for_encoding(encoding)

    # ------------------------------------------------------------------
    # token helpers
    # ------------------------------------------------------------------

    def _peek(self) -> Token | None:
        return self._tokens.peek()

    def _consume(self) -> Token:
        token = self._tokens.consume()
        if token is None:
            raise RtfMalformedInputError(
                f"Unexpected end of input at group depth {self.state.depth}",
                offset=self._tokens.position,
            )
        return token

    def _expect(self, kind: TokenKind, what: str) -> Token:
        token = self._consume()
        if token.kind is not kind:
            raise RtfMalformedInputError(
                f"Expected {what}, found {str(token)!r}", offset=token.offset
            )
        return token

    def _value_of(self, token: Token) -> int:
        if not token.has_value:
            raise RtfMalformedInputError(
                f"Control word \\{token.name} requires a numeric parameter",
                offset=token.offset,
            )
        return token.value

    # ------------------------------------------------------------------
    # document structure
    # ------------------------------------------------------------------

    def _document(self) -> None:
        self._delegate.start_document()
        self._open_group()

        token = self._consume()
        if not token.is_word("rtf"):
            raise RtfMalformedInputError(
                f"Missing RTF header, found {str(token)!r}", offset=token.offset
            )
        version = self._value_of(token)
        logger.debug(f"RTF version {version}")

        self._document_charset()

        while True:
            token = self._peek()
            if token is None or token.kind is not TokenKind.CONTROL_WORD:
                break
            if token.name not in HEADER_WORDS:
                break
            self._state_word(self._consume())

        self._group_body(top_level=True)
        self._close_group()

        trailing = self._tokens.remaining().strip(b"\x00 \t\r\n")
        if trailing:
            logger.debug(f"Ignoring {len(trailing)} bytes after the document group")

        self._delegate.end_document()

    def _document_charset(self) -> None:
        token = self._consume()
        if (
            token.kind is not TokenKind.CONTROL_WORD
            or token.name not in DOCUMENT_CHARSETS
        ):
            raise RtfMalformedInputError(
                f"Expected a document charset after \\rtf, found {str(token)!r}",
                offset=token.offset,
            )
        self.state.on_document_charset(DOCUMENT_CHARSETS[token.name])
        logger.debug(f"Document charset \\{token.name}")

    def _open_group(self) -> None:
        self._expect(TokenKind.LBRACE, "'{'")
        self._delegate.open_group(self.state.push_scope())

    def _close_group(self) -> None:
        self._expect(TokenKind.RBRACE, "'}'")
        closed = self.state.pop_scope()
        self._delegate.close_group(closed)
        if self.state.closes_destination(closed):
            if self.state.destination is Destination.STYLESHEET:
                styles = self.state.freeze_styles()
                if styles is not None:
                    logger.debug(f"Delivering {len(styles)} styles")
                    self._delegate.style_list(styles)
            self.state.leave_destination()

    def _group(self) -> None:
        self._open_group()
        self._group_body(top_level=False)
        self._close_group()

    def _group_body(self, top_level: bool) -> None:
        while True:
            token = self._peek()
            if token is None:
                raise RtfMalformedInputError(
                    f"Unexpected end of input inside group at depth {self.state.depth}",
                    offset=self._tokens.position,
                )
            kind = token.kind
            if kind is TokenKind.RBRACE:
                return
            if kind is TokenKind.LBRACE:
                self._group()
            elif kind is TokenKind.CONTROL_SYMBOL:
                self._consume()
                self._delegate.control_symbol(token.name, self.state.destination)
            elif kind in _TEXT_KINDS or token.is_word("u"):
                self._text()
            elif kind is TokenKind.CONTROL_WORD:
                self._control_word(self._consume(), top_level)
            else:
                raise RtfMalformedInputError(
                    f"Unexpected token {str(token)!r}", offset=token.offset
                )

    # ------------------------------------------------------------------
    # control words
    # ------------------------------------------------------------------

    def _control_word(self, token: Token, top_level: bool) -> None:
        name = token.name
        if name in TABLE_DESTINATIONS and not top_level:
            self.state.enter_destination(TABLE_DESTINATIONS[name])
        elif name in _VALUED_STATE_WORDS or name == "plain":
            self._state_word(token)
        else:
            self._delegate.control_word(name, token.value, self.state.destination)

    def _state_word(self, token: Token) -> None:
        name = token.name
        if name == "plain":
            self.state.on_plain()
            return

        value = self._value_of(token)
        if name == "uc":
            self.state.on_unicode_skip(value)
        elif name == "f":
            self.state.on_font(value)
        elif name == "fcharset":
            self.state.on_fcharset(value)
        elif name == "cs":
            self.state.on_character_style(value)
        elif name == "ansicpg":
            self.state.on_ansicpg(value)
        # \deffN names the default font; nothing to track

    # ------------------------------------------------------------------
    # text
    # ------------------------------------------------------------------

    def _decode(self, raw: bytes) -> str:
        encoding = self.state.text_encoding
        try:
            return raw.decode(encoding, errors="replace")
        except LookupError as exc:
            raise RtfEncodingError(encoding, cause=exc) from exc

    def _text(self) -> None:
        """
        Collect one contiguous text span and send it to the delegate.

        Raw text and hex escapes are buffered as bytes so that multi-byte
        characters spread over several \\'hh escapes decode correctly.
        """
        parts: list[str] = []
        pending = bytearray()

        while True:
            token = self._peek()
            if token is None:
                break
            kind = token.kind
            if kind is TokenKind.TEXT or kind is TokenKind.HEX_ESCAPE:
                self._consume()
                pending.extend(token.data)
                continue
            if kind is TokenKind.SPECIAL_CHAR:
                chars = self._special_char(token)
            elif kind is TokenKind.ESCAPED_LITERAL:
                chars = token.name
            elif token.is_word("u"):
                chars = self._unicode_char(token)
            else:
                break

            self._consume()
            if pending:
                parts.append(self._decode(bytes(pending)))
                pending.clear()
            parts.append(chars)
            if kind is TokenKind.CONTROL_WORD:
                pending.extend(self._skip_fallback())

        if pending:
            parts.append(self._decode(bytes(pending)))

        text = _join_surrogates("".join(parts))
        if self.state.destination is Destination.STYLESHEET:
            self.state.on_stylesheet_text(text)
        self._delegate.text(text, self.state.style, self.state.destination)

    def _special_char(self, token: Token) -> str:
        if token.special in NEWLINE_CHARS:
            return self.newline
        return SPECIAL_CHAR_TEXT[token.special]

    def _unicode_char(self, token: Token) -> str:
        value = self._value_of(token)
        # RTF writers emit code points above 32767 as negative numbers
        if value < 0:
            value += 65536
        if not 0 <= value <= 0x10FFFF:
            raise RtfMalformedInputError(
                f"Unicode escape out of range: {token.value}", offset=token.offset
            )
        return chr(value)

    def _skip_fallback(self) -> bytes:
        """
        Skip the fallback representation that follows a \\uN escape.

        The number of units comes from the \\ucN in effect. A hex escape
        counts as one unit; a text token gives up as many bytes as are still
        needed and its remainder is returned as ordinary text. Skipping stops
        early at anything that is not text.
        """
        remaining = self.state.skip_count
        while remaining > 0:
            token = self._peek()
            if token is None:
                break
            if token.kind is TokenKind.HEX_ESCAPE:
                self._consume()
                remaining -= 1
            elif token.kind is TokenKind.TEXT:
                self._consume()
                if len(token.data) > remaining:
                    return token.data[remaining:]
                remaining -= len(token.data)
            else:
                break
        return b""
