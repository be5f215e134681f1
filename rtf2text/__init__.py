"""
rtf2text: Plain text extraction for RTF documents.

A Python library for turning RTF (Rich Text Format) files into plain text.
It ships an event-driven RTF parser that resolves the character encoding of
every piece of text (document charset, ``\\ansicpg``, font table charsets,
``\\uN`` escapes) and a plain-text consumer of its events.
"""

import io
from pathlib import Path
from typing import Any, Generator

from rtf2text.extractors.data_types import (
    ExtractionInterface,
    RtfContent,
    RtfMetadata,
    RtfParagraph,
)
from rtf2text.router import (
    get_extractor,
    get_extractor_for_mime_type,
    is_supported_file,
)

__version__ = "0.1.0"


def read_rtf(
    file_like: io.BytesIO, path: str | None = None, newline: str = "\n"
) -> Generator[RtfContent, Any, None]:
    """Extract content from an RTF file."""
    from rtf2text.extractors.rtf_extractor import read_rtf as _read_rtf

    return _read_rtf(file_like, path, newline)


def read_file(
    path: str | Path, newline: str = "\n"
) -> Generator[ExtractionInterface, Any, None]:
    """
    Read and extract content from a file.

    Detects the file type based on extension and uses the matching extractor.
    Only RTF (.rtf, application/rtf, text/rtf) is supported.

    Args:
        path: Path to the file to read.
        newline: Line break emitted for paragraphs and table rows.

    Yields:
        RtfContent with the extracted text and metadata.

    Raises:
        ExtractionFileFormatNotSupportedError: If the file type is not supported.
        FileNotFoundError: If the file does not exist.

    Example:
        >>> import rtf2text
        >>> for result in rtf2text.read_file("document.rtf"):
        ...     print(result.get_full_text())
    """
    path = Path(path)
    extractor = get_extractor(str(path))
    with open(path, "rb") as f:
        yield from extractor(io.BytesIO(f.read()), str(path), newline)


def _encode_document(data: str) -> bytes:
    """
    Encode a str document for the parser.

    Characters up to U+00FF map to their byte, which covers every 7-bit RTF
    document. Anything above is written as one \\uN? escape per UTF-16 unit,
    so its fallback is skipped under the default \\uc1.
    """
    out = bytearray()
    for ch in data:
        code = ord(ch)
        if code < 0x100:
            out.append(code)
            continue
        units = ch.encode("utf-16-le", "surrogatepass")
        for i in range(0, len(units), 2):
            out += b"\\u%d?" % int.from_bytes(units[i : i + 2], "little")
    return bytes(out)


def extract_text(data: bytes | str, newline: str | None = None) -> str:
    """
    Return the plain text of an RTF document given as bytes or str.

    ``newline`` defaults to the platform's line separator.
    """
    from rtf2text.extractors.rtf.parser import EOL
    from rtf2text.extractors.rtf.plain_text import RtfPlainTextExtractor

    if isinstance(data, str):
        data = _encode_document(data)
    extractor = RtfPlainTextExtractor(newline=EOL if newline is None else newline)
    return extractor.extract_text(data)


__all__ = [
    # Version
    "__version__",
    # Main functions
    "read_file",
    "read_rtf",
    "extract_text",
    "is_supported_file",
    "get_extractor",
    "get_extractor_for_mime_type",
    # Result types
    "RtfContent",
    "RtfMetadata",
    "RtfParagraph",
]
