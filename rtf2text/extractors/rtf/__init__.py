"""
RTF Parser Package
==================

A hand-written tokenizer and recursive-descent parser for RTF (Rich Text
Format) documents, plus a plain-text consumer of the parser's events.

File Format Background
----------------------
RTF is a 7-bit text format made of three things:

    - groups delimited by ``{`` and ``}``
    - control words (``\\par``, ``\\f2``, ``\\ansicpg1251``) and control
      symbols (``\\*``, ``\\~``)
    - plain text, with 8-bit characters written as ``\\'hh`` escapes and
      Unicode characters as ``\\uN`` followed by a fallback representation

Which encoding applies to a ``\\'hh`` byte is not fixed: it depends on the
document charset, ``\\ansicpg``, the font selected with ``\\fN`` (declared in
the font table) and on the group the text sits in, because groups save and
restore that state.

Modules
-------
codepages:
    Windows codepage and font charset to Python codec lookup.
tokens / tokenizer:
    Token model and the byte-level lexer.
state:
    Scope stack, destination tracking, font/style tables, encoding rules.
delegate:
    Event protocol (``RtfParserDelegate``) and the ``Destination`` enum.
parser:
    The grammar engine (``RtfParser``).
plain_text:
    ``RtfPlainTextExtractor``, the reference consumer.

Usage
-----
    >>> from rtf2text.extractors.rtf import RtfPlainTextExtractor
    >>> RtfPlainTextExtractor(newline="\\n").extract_text(b"{\\\\rtf1\\\\ansi Hi\\\\par}")
    'Hi\\n'
"""

from rtf2text.extractors.rtf.codepages import (
    DEFAULT_ENCODING,
    resolve_charset,
    resolve_codepage,
)
from rtf2text.extractors.rtf.delegate import (
    NO_STYLE,
    Destination,
    NullRtfParserDelegate,
    RtfParserDelegate,
)
from rtf2text.extractors.rtf.parser import RtfParser
from rtf2text.extractors.rtf.plain_text import RtfPlainTextExtractor
from rtf2text.extractors.rtf.tokenizer import RtfTokenizer
from rtf2text.extractors.rtf.tokens import SpecialChar, Token, TokenKind

__all__ = [
    "DEFAULT_ENCODING",
    "NO_STYLE",
    "Destination",
    "NullRtfParserDelegate",
    "RtfParser",
    "RtfParserDelegate",
    "RtfPlainTextExtractor",
    "RtfTokenizer",
    "SpecialChar",
    "Token",
    "TokenKind",
    "resolve_charset",
    "resolve_codepage",
]
