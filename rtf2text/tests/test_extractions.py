import io
import logging
import typing
from unittest import TestCase

import pytest

from rtf2text import read_file
from rtf2text.exceptions import ExtractionFailedError, RtfMalformedInputError
from rtf2text.extractors.data_types import (
    FileMetadataInterface,
    RtfContent,
    RtfMetadata,
    RtfParagraph,
)
from rtf2text.extractors.rtf_extractor import read_rtf

logger = logging.getLogger(__name__)

tc = TestCase()
tc.maxDiff = None


def _read_file_to_file_like(path: str) -> io.BytesIO:
    with open(path, mode="rb") as file:
        file_like = io.BytesIO(file.read())
        file_like.seek(0)
        return file_like


def test_file_metadata_extraction() -> None:
    meta = FileMetadataInterface()
    meta.populate_from_path("my/dummy/path.rtf")

    tc.assertEqual("path.rtf", meta.filename)
    tc.assertEqual(".rtf", meta.file_extension)
    tc.assertEqual("my/dummy/path.rtf", meta.file_path)
    tc.assertEqual("my/dummy", meta.folder_path)

    tc.assertDictEqual(
        {
            "filename": "path.rtf",
            "file_extension": ".rtf",
            "file_path": "my/dummy/path.rtf",
            "folder_path": "my/dummy",
        },
        meta.to_dict(),
    )


def test_read_rtf_1() -> None:
    path = "rtf2text/tests/resources/sample.rtf"
    rtf: RtfContent = next(read_rtf(_read_file_to_file_like(path), path=path))

    tc.assertIsInstance(rtf, RtfContent)
    tc.assertEqual(
        "Caf\xe9 au lait\nEmphasized text\nA1 B1 \nDone\n", rtf.get_full_text()
    )
    tc.assertListEqual(["Emphasis", "Strong"], rtf.styles)
    tc.assertListEqual(
        [
            RtfParagraph(text="Caf\xe9 au lait", style_name=None),
            RtfParagraph(text="Emphasized text", style_name="Emphasis"),
            RtfParagraph(text="A1 B1", style_name=None),
            RtfParagraph(text="Done", style_name=None),
        ],
        rtf.paragraphs,
    )
    tc.assertEqual(1, len(list(rtf.iterator())))


def test_read_rtf_1__metadata() -> None:
    path = "rtf2text/tests/resources/sample.rtf"
    rtf = next(read_rtf(_read_file_to_file_like(path), path=path))
    meta: RtfMetadata = rtf.get_metadata()

    tc.assertEqual("Quarterly Report", meta.title)
    tc.assertEqual("Jane Roe", meta.author)
    tc.assertEqual("Acme Corp", meta.company)
    tc.assertEqual("Draft", meta.comments)
    tc.assertEqual("", meta.subject)
    tc.assertEqual(3, meta.version)
    tc.assertEqual(57, meta.revision)
    tc.assertEqual(2, meta.num_pages)
    tc.assertEqual(0, meta.num_words)

    tc.assertEqual("sample.rtf", meta.filename)
    tc.assertEqual(".rtf", meta.file_extension)


def test_read_rtf_2__codepage() -> None:
    path = "rtf2text/tests/resources/cyrillic.rtf"
    rtf = next(read_rtf(_read_file_to_file_like(path), path=path))

    expected = b"\xcf\xf0\xe8\xe2\xe5\xf2, \xec\xe8\xf0!".decode("cp1251")
    tc.assertEqual(f"{expected}\n", rtf.full_text)
    tc.assertEqual(b"\xc8\xe2\xe0\xed".decode("cp1251"), rtf.metadata.author)


def test_read_rtf_3__unicode() -> None:
    path = "rtf2text/tests/resources/unicode.rtf"
    rtf = next(read_rtf(_read_file_to_file_like(path), path=path))

    tc.assertListEqual(
        [
            "Snow " + chr(0x2603) + "man",
            "Sun " + chr(0x2600) + "done",
            "Santa " + chr(0x1F385),
        ],
        [paragraph.text for paragraph in rtf.paragraphs],
    )


def test_read_rtf_newline() -> None:
    path = "rtf2text/tests/resources/sample.rtf"
    rtf = next(read_rtf(_read_file_to_file_like(path), newline="\r\n"))

    tc.assertTrue(rtf.full_text.startswith("Caf\xe9 au lait\r\nEmphasized text\r\n"))
    tc.assertEqual(4, len(rtf.paragraphs))
    tc.assertIsNone(rtf.metadata.filename)


def test_read_file() -> None:
    results = list(read_file("rtf2text/tests/resources/sample.rtf"))

    tc.assertEqual(1, len(results))
    tc.assertIsInstance(results[0], RtfContent)
    tc.assertEqual("sample.rtf", results[0].get_metadata().filename)


def test_read_rtf_empty_body() -> None:
    rtf = next(read_rtf(io.BytesIO(b"{\\rtf1\\ansi{\\fonttbl{\\f0 Arial;}}}")))

    tc.assertEqual("", rtf.get_full_text())
    tc.assertListEqual([], rtf.paragraphs)
    tc.assertListEqual([], rtf.styles)
    tc.assertListEqual([], list(rtf.iterator()))


def test_read_rtf_malformed() -> None:
    with pytest.raises(RtfMalformedInputError):
        next(read_rtf(io.BytesIO(b"{\\rtf1\\ansi unterminated")))

    with pytest.raises(RtfMalformedInputError):
        next(read_rtf(io.BytesIO(b"not rtf at all")))


def test_read_rtf_wraps_unexpected_errors() -> None:
    with pytest.raises(ExtractionFailedError) as excinfo:
        next(read_rtf(typing.cast(io.BytesIO, None)))
    tc.assertIsInstance(excinfo.value.__cause__, AttributeError)
