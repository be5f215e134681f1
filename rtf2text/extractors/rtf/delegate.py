"""
Event protocol between the RTF parser and its consumers.

The parser resolves all text encoding itself, so a delegate only ever sees
decoded ``str`` text, together with the style name in effect and the
destination (``Destination``) in which the text occurred.
"""

from enum import Enum
from typing import List, Protocol


class Destination(Enum):
    """RTF contexts in which text events may occur."""

    DOCUMENT = "document"
    INFO = "info"
    FONT_TABLE = "fonttbl"
    COLOR_TABLE = "colortbl"
    STYLESHEET = "stylesheet"
    LIST_TABLE = "listtable"
    REVISION_TABLE = "revtbl"
    PAGE_NUMBER_TEXT = "pntext"


NO_STYLE = ""


class RtfParserDelegate(Protocol):
    """Implemented by classes that receive RTF parser events."""

    def start_document(self) -> None:
        """The document parsing has begun."""
        ...

    def end_document(self) -> None:
        """Parsing is complete."""
        ...

    def text(self, text: str, style: str, context: Destination) -> None:
        """
        Receive a block of decoded text in the named style, occurring in
        ``context``. ``style`` is one of the names delivered by
        ``style_list`` (or ``NO_STYLE``).
        """
        ...

    def control_symbol(self, symbol: str, context: Destination) -> None:
        """Receive a control symbol, e.g. ``"*"`` for ``\\*``."""
        ...

    def control_word(self, word: str, value: int, context: Destination) -> None:
        """
        Receive a control word without its backslash. The value is ``0`` when
        the word carries no numeric parameter.
        """
        ...

    def open_group(self, depth: int) -> None:
        """A group was opened; ``depth`` is the depth of the new group."""
        ...

    def close_group(self, depth: int) -> None:
        """A group was closed; ``depth`` is the depth of the group just closed."""
        ...

    def style_list(self, styles: List[str]) -> None:
        """Receive the style names defined in the stylesheet, in style order."""
        ...


class NullRtfParserDelegate:
    """No-op delegate, used when the parser only has to validate a document."""

    def start_document(self) -> None:
        pass

    def end_document(self) -> None:
        pass

    def text(self, text: str, style: str, context: Destination) -> None:
        pass

    def control_symbol(self, symbol: str, context: Destination) -> None:
        pass

    def control_word(self, word: str, value: int, context: Destination) -> None:
        pass

    def open_group(self, depth: int) -> None:
        pass

    def close_group(self, depth: int) -> None:
        pass

    def style_list(self, styles: List[str]) -> None:
        pass
