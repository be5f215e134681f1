import io
import logging
import mimetypes
import os
from typing import Any, Callable, Generator

from rtf2text.exceptions import ExtractionFileFormatNotSupportedError
from rtf2text.extractors.data_types import ExtractionInterface
from rtf2text.mime_types import EXTENSION_MAPPING, MIME_TYPE_MAPPING

logger = logging.getLogger(__name__)


def _get_extractor(
    file_type: str,
) -> Callable[[io.BytesIO, str | None], Generator[ExtractionInterface, Any, None]]:
    """Return the extractor function for a file type (lazy import)."""
    if file_type == "rtf":
        from rtf2text.extractors.rtf_extractor import read_rtf

        return read_rtf
    else:
        raise ExtractionFileFormatNotSupportedError(
            file_type, f"No extractor for file type: {file_type}"
        )


def _detect_file_type(path: str) -> str | None:
    path = path.lower()
    mime_type, _ = mimetypes.guess_type(path)
    if mime_type is not None and mime_type in MIME_TYPE_MAPPING:
        file_type = MIME_TYPE_MAPPING[mime_type]
        logger.debug(
            f"Detected file type: {file_type} (MIME: {mime_type}) for file: {path}"
        )
        return file_type

    # the extension table is keyed with the leading dot
    extension = os.path.splitext(path)[1]
    if extension in EXTENSION_MAPPING:
        file_type = EXTENSION_MAPPING[extension]
        logger.debug(f"Detected file type: {file_type} for file: {path}")
        return file_type

    logger.debug(f"File [{path}] with mime type [{mime_type}] is not supported")
    return None


def is_supported_file(path: str) -> bool:
    """Checks if the path is a supported file"""
    return _detect_file_type(path) is not None


def get_extractor(
    path: str,
) -> Callable[[io.BytesIO, str | None], Generator[ExtractionInterface, Any, None]]:
    """Analysis the path of a file and returns a suited extractor.
       The file MUST not exist (yet). The path or filename alone suffices to return an
       extractor.

    :returns a function of an extractor. All extractors take a file-like object as parameter
    :raises ExtractionFileFormatNotSupportedError: File is not covered by any extractor
    """
    file_type = _detect_file_type(path)
    if file_type is None:
        raise ExtractionFileFormatNotSupportedError(path)
    return _get_extractor(file_type)


def get_extractor_for_mime_type(
    mime_type: str,
) -> Callable[[io.BytesIO, str | None], Generator[ExtractionInterface, Any, None]]:
    """Returns the extractor for a mime type such as ``application/rtf``.

    :raises ExtractionFileFormatNotSupportedError: The mime type is not covered
    """
    normalized = (mime_type or "").split(";")[0].strip().lower()
    if normalized not in MIME_TYPE_MAPPING:
        logger.debug(f"Mime type [{mime_type}] is not supported")
        raise ExtractionFileFormatNotSupportedError(
            mime_type, f"Unsupported mime type: {mime_type}"
        )
    return _get_extractor(MIME_TYPE_MAPPING[normalized])
