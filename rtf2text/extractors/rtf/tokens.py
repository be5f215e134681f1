"""Token types produced by the RTF tokenizer."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    LBRACE = "lbrace"
    RBRACE = "rbrace"
    CONTROL_WORD = "control_word"
    CONTROL_SYMBOL = "control_symbol"
    HEX_ESCAPE = "hex_escape"
    TEXT = "text"
    SPECIAL_CHAR = "special_char"
    # \\ \{ \}
    ESCAPED_LITERAL = "escaped_literal"


class SpecialChar(Enum):
    TAB = "tab"
    ZWJ = "zwj"
    ZWNJ = "zwnj"
    PAR = "par"
    LINE = "line"
    EMDASH = "emdash"
    ENDASH = "endash"
    EMSPACE = "emspace"
    ENSPACE = "enspace"
    BULLET = "bullet"
    LQUOTE = "lquote"
    RQUOTE = "rquote"
    LDBLQUOTE = "ldblquote"
    RDBLQUOTE = "rdblquote"
    LTRMARK = "ltrmark"
    RTLMARK = "rtlmark"
    NON_BREAKING_SPACE = "~"
    OPTIONAL_HYPHEN = "-"
    NON_BREAKING_HYPHEN = "_"
    ESCAPED_NEWLINE = "\n"
    ESCAPED_CARRIAGE_RETURN = "\r"


# Control words that stand for a single character
SPECIAL_CHAR_WORDS = {
    member.value: member
    for member in SpecialChar
    if member.value.isalpha()
}

# Control symbols (backslash + one character) that stand for a single character
SPECIAL_CHAR_SYMBOLS = {
    member.value: member
    for member in SpecialChar
    if not member.value.isalpha()
}

# Special characters rendered as the caller's newline string
NEWLINE_CHARS = frozenset(
    {
        SpecialChar.PAR,
        SpecialChar.LINE,
        SpecialChar.ESCAPED_NEWLINE,
        SpecialChar.ESCAPED_CARRIAGE_RETURN,
    }
)

SPECIAL_CHAR_TEXT = {
    SpecialChar.TAB: "\t",
    SpecialChar.ZWJ: "\u200d",
    SpecialChar.ZWNJ: "\u200c",
    SpecialChar.EMDASH: "\u2014",
    SpecialChar.ENDASH: "\u2013",
    SpecialChar.EMSPACE: "\u2003",
    SpecialChar.ENSPACE: " ",
    SpecialChar.BULLET: "\u2022",
    SpecialChar.LQUOTE: "\u2018",
    SpecialChar.RQUOTE: "\u2019",
    SpecialChar.LDBLQUOTE: "\u201c",
    SpecialChar.RDBLQUOTE: "\u201d",
    SpecialChar.LTRMARK: "\u200e",
    SpecialChar.RTLMARK: "\u200f",
    SpecialChar.NON_BREAKING_SPACE: "\u00a0",
    SpecialChar.OPTIONAL_HYPHEN: "\u00ad",
    SpecialChar.NON_BREAKING_HYPHEN: "\u2011",
}


@dataclass(frozen=True)
class Token:
    """A single lexical unit of an RTF stream.

    ``lexeme`` always holds the raw bytes the token was read from. The other
    fields are filled depending on ``kind``:

    - CONTROL_WORD: ``name`` and ``value`` (0 when ``has_value`` is False)
    - CONTROL_SYMBOL / ESCAPED_LITERAL: ``name`` is the character after the backslash
    - HEX_ESCAPE / TEXT: ``data`` holds the undecoded byte(s)
    - SPECIAL_CHAR: ``special``
    """

    kind: TokenKind
    lexeme: bytes
    offset: int = 0
    name: str = ""
    value: int = 0
    has_value: bool = False
    data: bytes = b""
    special: SpecialChar | None = None

    def is_word(self, name: str) -> bool:
        return self.kind is TokenKind.CONTROL_WORD and self.name == name

    def __str__(self) -> str:
        return self.lexeme.decode("latin_1")
