import typing
from abc import abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol


@dataclass
class FileMetadataInterface:
    filename: str | None = None
    file_extension: str | None = None
    file_path: str | None = None
    folder_path: str | None = None

    def populate_from_path(self, path: str | Path | None) -> None:
        """Populate file metadata fields from a path."""
        if path is None:
            return
        p = Path(path)
        self.filename = p.name
        self.file_extension = p.suffix
        self.file_path = str(p.resolve()) if p.exists() else str(p)
        self.folder_path = (
            str(p.parent.resolve()) if p.parent.exists() else str(p.parent)
        )

    def to_dict(self) -> dict:
        return asdict(self)


class ExtractionInterface(Protocol):
    @abstractmethod
    def iterator(self) -> typing.Iterator[str]:
        """
        Returns an iterator over the extracted text i.e., the main text body of a file.
        Content of headers, footnotes, the info block or alike is not part of
        this iterator's return values.
        """
        ...

    @abstractmethod
    def get_full_text(self) -> str:
        """Full text of the document as one single block of text"""
        ...

    @abstractmethod
    def get_metadata(self) -> FileMetadataInterface:
        """Returns the metadata of the extracted file"""
        ...


#######
# RTF
#######


@dataclass
class RtfMetadata(FileMetadataInterface):
    """Metadata extracted from an RTF file (the \\info destination)."""

    title: str = ""
    subject: str = ""
    author: str = ""
    keywords: str = ""
    comments: str = ""  # \doccomm
    operator: str = ""  # Last editor
    category: str = ""
    manager: str = ""
    company: str = ""
    version: int = 0
    revision: int = 0
    num_pages: int = 0
    num_words: int = 0
    num_chars: int = 0


@dataclass
class RtfParagraph:
    """A paragraph of body text and the character style it started in."""

    text: str = ""
    style_name: Optional[str] = None


@dataclass
class RtfContent(ExtractionInterface):
    """Complete extracted content from an RTF file."""

    metadata: RtfMetadata = field(default_factory=RtfMetadata)
    styles: List[str] = field(default_factory=list)
    paragraphs: List[RtfParagraph] = field(default_factory=list)
    full_text: str = ""

    def iterator(self) -> typing.Iterator[str]:
        """RTF has no reliable page units, so the full text is the only unit."""
        if self.full_text:
            yield self.full_text

    def get_full_text(self) -> str:
        """Full text of the RTF document as one single block of text."""
        return self.full_text

    def get_metadata(self) -> RtfMetadata:
        """Returns the metadata of the extracted file."""
        return self.metadata
