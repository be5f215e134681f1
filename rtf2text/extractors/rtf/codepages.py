"""
Windows codepage and RTF charset lookup tables.

RTF declares encodings in two ways: a codepage number (``\\ansicpgN``) and a
font charset byte (``\\fcharsetN``). Both are mapped here to Python codec
names. The codepage numbers are too sparse for a list, so they live in two
parallel sorted tuples searched with ``bisect``.
"""

from bisect import bisect_left

# the default encoding for all RTF documents
DEFAULT_ENCODING = "cp1252"

_CODEPAGES = (
    437,  # United States IBM
    737,  # Greek (DOS)
    775,  # Baltic (DOS)
    819,  # Windows 3.1 (United States and Western Europe)
    850,  # IBM multilingual
    852,  # Eastern European
    855,  # Cyrillic (DOS)
    857,  # Turkish (DOS)
    860,  # Portuguese
    861,  # Icelandic
    862,  # Hebrew
    863,  # French Canadian
    864,  # Arabic
    865,  # Norwegian
    866,  # Soviet Union
    869,  # Modern Greek
    874,  # Thai
    932,  # Japanese
    936,  # Simplified Chinese
    949,  # Korean
    950,  # Traditional Chinese
    1250,  # Windows 3.1 (Eastern European)
    1251,  # Windows 3.1 (Cyrillic)
    1252,  # Western European
    1253,  # Greek
    1254,  # Turkish
    1255,  # Hebrew
    1256,  # Arabic
    1257,  # Baltic
    1258,  # Vietnamese
    1361,  # Johab
    10000,  # Macintosh Roman
    10006,  # Macintosh Greek
    10007,  # Macintosh Cyrillic
    10029,  # Macintosh Central European
    20866,  # Russian KOI8-R
    21866,  # Ukrainian KOI8-U
    65001,  # UTF-8
)

_ENCODINGS = (
    "cp437",
    "cp737",
    "cp775",
    "latin_1",
    "cp850",
    "cp852",
    "cp855",
    "cp857",
    "cp860",
    "cp861",
    "cp862",
    "cp863",
    "cp864",
    "cp865",
    "cp866",
    "cp869",
    "cp874",
    "cp932",
    "gbk",
    "cp949",
    "cp950",
    "cp1250",
    "cp1251",
    "cp1252",
    "cp1253",
    "cp1254",
    "cp1255",
    "cp1256",
    "cp1257",
    "cp1258",
    "johab",
    "mac_roman",
    "mac_greek",
    "mac_cyrillic",
    "mac_latin2",
    "koi8_r",
    "koi8_u",
    "utf_8",
)

# sparse: charset bytes not listed here have no encoding
_CHARSET_ENCODINGS = {
    0: "cp1252",  # ANSI
    1: "cp1252",  # Default
    2: "cp1252",  # Symbol
    77: "mac_roman",  # Mac
    128: "cp932",  # Shift JIS
    129: "cp949",  # Hangul
    130: "johab",  # Johab
    134: "gbk",  # GB2312
    136: "big5",  # Big5
    161: "cp1253",  # Greek
    162: "cp1254",  # Turkish
    163: "cp1258",  # Vietnamese
    177: "cp1255",  # Hebrew
    178: "cp1256",  # Arabic
    179: "cp1256",  # Arabic Traditional
    180: "cp1256",  # Arabic User
    181: "cp1255",  # Hebrew User
    186: "cp1257",  # Baltic
    204: "cp1251",  # Russian
    222: "cp874",  # Thai
    238: "cp1250",  # East European
    254: "cp437",  # PC 437
}


def resolve_codepage(codepage: int) -> str | None:
    """Return the codec name for a Windows codepage, or None if unknown."""
    offset = bisect_left(_CODEPAGES, codepage)
    if offset < len(_CODEPAGES) and _CODEPAGES[offset] == codepage:
        return _ENCODINGS[offset]
    return None


def resolve_charset(charset: int) -> str | None:
    """Return the codec name for an RTF ``\\fcharset`` value, or None if unknown."""
    return _CHARSET_ENCODINGS.get(charset)
