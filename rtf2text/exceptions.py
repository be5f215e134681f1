class ExtractionError(Exception):
    """Base class for all errors raised while extracting text."""

    def __init__(self, message: str = None, *, cause: Exception = None):
        super().__init__(message)
        self.__cause__ = cause  # Optional chaining for debugging


class ExtractionFailedError(ExtractionError):
    """Raised when extraction fails for a reason not covered by a subclass."""


class ExtractionFileFormatNotSupportedError(ExtractionError):
    """Raised when the file format for extraction is not supported."""

    def __init__(self, file_path: str, message: str = None, *, cause: Exception = None):
        self.file_path = file_path
        if message is None:
            message = f"Extraction file format not supported: {file_path}"
        super().__init__(message, cause=cause)


class RtfParsingError(ExtractionFailedError):
    """Raised when an RTF document cannot be parsed."""


class RtfMalformedInputError(RtfParsingError):
    """Raised when the RTF input matches no token rule or grammar production."""

    def __init__(
        self, message: str = None, *, offset: int | None = None, cause: Exception = None
    ):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte offset {offset})"
        super().__init__(message, cause=cause)


class RtfEncodingError(RtfParsingError):
    """Raised when buffered RTF text cannot be decoded with its encoding."""

    def __init__(self, encoding: str, message: str = None, *, cause: Exception = None):
        self.encoding = encoding
        if message is None:
            message = f"Could not decode bytes in encoding: {encoding}"
        super().__init__(message, cause=cause)
