"""
RTF tokenizer.

Turns the raw bytes of an RTF document into a lazy stream of ``Token``
objects. Text is never decoded here: text runs and ``\\'hh`` escapes are
handed to the parser as raw bytes, because the encoding that applies to them
depends on parser state (font table, group scope, ``\\ansicpg``).
"""

import io
import logging
import re
from typing import Iterator

from rtf2text.exceptions import RtfMalformedInputError
from rtf2text.extractors.rtf.tokens import (
    SPECIAL_CHAR_SYMBOLS,
    SPECIAL_CHAR_WORDS,
    SpecialChar,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Pre-compiled patterns
# =============================================================================

# letters, optional signed numeric parameter, optional single space delimiter
_RE_CONTROL_WORD = re.compile(rb"\\([a-zA-Z]+)(-?[0-9]+)? ?")
_RE_HEX_ESCAPE = re.compile(rb"\\'([0-9a-fA-F]{2})")
_RE_TEXT = re.compile(rb"[^\\{}\r\n]+")
_RE_LINE_BREAKS = re.compile(rb"[\r\n]+")

_LBRACE = ord("{")
_RBRACE = ord("}")
_BACKSLASH = ord("\\")
_QUOTE = ord("'")

_ESCAPED_LITERALS = frozenset(b"\\{}")


def _is_control_symbol(byte: int) -> bool:
    """Printable ASCII punctuation that may follow a backslash."""
    return 0x21 <= byte <= 0x7E and not chr(byte).isalnum()


class RtfTokenizer:
    """Lazy, single-pass tokenizer over an RTF byte string.

    Supports one token of lookahead through ``peek``; ``consume`` returns the
    peeked token (if any) before reading further. Iteration yields the same
    tokens as repeated ``consume`` calls and stops at end of input.
    """

    def __init__(self, data: bytes | bytearray | io.BufferedIOBase):
        if not isinstance(data, (bytes, bytearray)):
            data = data.read()
        self._data = bytes(data)
        self._length = len(self._data)
        self._pos = 0
        self._peeked: Token | None = None

    @property
    def position(self) -> int:
        """Byte offset of the next unread token."""
        if self._peeked is not None:
            return self._peeked.offset
        return self._pos

    def remaining(self) -> bytes:
        """Undecoded bytes after the last consumed token."""
        return self._data[self.position :]

    def peek(self) -> Token | None:
        if self._peeked is None:
            self._peeked = self._read_token()
        return self._peeked

    def consume(self) -> Token | None:
        token = self.peek()
        self._peeked = None
        return token

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.consume()
        if token is None:
            raise StopIteration
        return token

    def _read_token(self) -> Token | None:
        data = self._data

        # raw CR/LF are not significant in RTF
        match = _RE_LINE_BREAKS.match(data, self._pos)
        if match:
            self._pos = match.end()

        if self._pos >= self._length:
            return None

        start = self._pos
        byte = data[start]

        if byte == _LBRACE:
            self._pos += 1
            return Token(TokenKind.LBRACE, b"{", start)
        if byte == _RBRACE:
            self._pos += 1
            return Token(TokenKind.RBRACE, b"}", start)
        if byte == _BACKSLASH:
            return self._read_control(start)

        match = _RE_TEXT.match(data, start)
        self._pos = match.end()
        return Token(TokenKind.TEXT, match.group(0), start, data=match.group(0))

    def _read_control(self, start: int) -> Token:
        data = self._data
        if start + 1 >= self._length:
            raise RtfMalformedInputError("Backslash at end of input", offset=start)

        match = _RE_CONTROL_WORD.match(data, start)
        if match:
            return self._control_word(match)

        follower = data[start + 1]

        if follower == _QUOTE:
            match = _RE_HEX_ESCAPE.match(data, start)
            if not match:
                raise RtfMalformedInputError(
                    "Hex escape without two hex digits", offset=start
                )
            self._pos = match.end()
            return Token(
                TokenKind.HEX_ESCAPE,
                match.group(0),
                start,
                data=bytes([int(match.group(1), 16)]),
            )

        self._pos = start + 2
        lexeme = data[start : start + 2]
        symbol = chr(follower)

        if follower in _ESCAPED_LITERALS:
            return Token(TokenKind.ESCAPED_LITERAL, lexeme, start, name=symbol)
        if symbol in SPECIAL_CHAR_SYMBOLS:
            return Token(
                TokenKind.SPECIAL_CHAR,
                lexeme,
                start,
                name=symbol,
                special=SPECIAL_CHAR_SYMBOLS[symbol],
            )
        if _is_control_symbol(follower):
            return Token(TokenKind.CONTROL_SYMBOL, lexeme, start, name=symbol)

        raise RtfMalformedInputError(
            f"Unexpected byte 0x{follower:02x} after backslash", offset=start
        )

    def _control_word(self, match: re.Match) -> Token:
        start = match.start()
        name = match.group(1).decode("ascii")
        raw_value = match.group(2)
        value = int(raw_value) if raw_value is not None else 0
        self._pos = match.end()

        special: SpecialChar | None = SPECIAL_CHAR_WORDS.get(name)
        if special is not None:
            return Token(
                TokenKind.SPECIAL_CHAR,
                match.group(0),
                start,
                name=name,
                value=value,
                has_value=raw_value is not None,
                special=special,
            )

        if name == "bin" and value > 0:
            # \binN is followed by N bytes of raw binary data
            if self._pos + value > self._length:
                raise RtfMalformedInputError(
                    f"Binary data of {value} bytes runs past end of input",
                    offset=start,
                )
            logger.debug(f"Skipping {value} bytes of binary data at offset {start}")
            self._pos += value

        return Token(
            TokenKind.CONTROL_WORD,
            match.group(0),
            start,
            name=name,
            value=value,
            has_value=raw_value is not None,
        )
