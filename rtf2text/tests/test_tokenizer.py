import io
import logging
import unittest

import pytest

from rtf2text.exceptions import RtfMalformedInputError
from rtf2text.extractors.rtf.tokenizer import RtfTokenizer
from rtf2text.extractors.rtf.tokens import SpecialChar, TokenKind

logger = logging.getLogger(__name__)

tc = unittest.TestCase()


def _kinds(data) -> list:
    return [token.kind for token in RtfTokenizer(data)]


def test_tokenize_minimal_document() -> None:
    tokens = list(RtfTokenizer(b"{\\rtf1\\ansi Hello}"))

    tc.assertListEqual(
        [
            TokenKind.LBRACE,
            TokenKind.CONTROL_WORD,
            TokenKind.CONTROL_WORD,
            TokenKind.TEXT,
            TokenKind.RBRACE,
        ],
        [token.kind for token in tokens],
    )
    tc.assertEqual("rtf", tokens[1].name)
    tc.assertEqual(1, tokens[1].value)
    tc.assertTrue(tokens[1].has_value)
    tc.assertEqual("ansi", tokens[2].name)
    tc.assertFalse(tokens[2].has_value)
    # the space after \ansi delimits the control word
    tc.assertEqual(b"Hello", tokens[3].data)


def test_control_word_parameters() -> None:
    tokens = list(RtfTokenizer(b"\\b0\\li-720\\fs24 x"))

    b0 = tokens[0]
    tc.assertEqual(("b", 0, True), (b0.name, b0.value, b0.has_value))
    tc.assertEqual(("li", -720), (tokens[1].name, tokens[1].value))
    tc.assertEqual(("fs", 24), (tokens[2].name, tokens[2].value))
    tc.assertEqual(b"x", tokens[3].data)
    tc.assertEqual(b"\\fs24 ", tokens[2].lexeme)


def test_only_one_delimiting_space_is_consumed() -> None:
    tokens = list(RtfTokenizer(b"\\b  Bold"))
    tc.assertEqual(b" Bold", tokens[1].data)


def test_hex_escape() -> None:
    token = next(RtfTokenizer(b"\\'e9"))
    tc.assertEqual(TokenKind.HEX_ESCAPE, token.kind)
    tc.assertEqual(b"\xe9", token.data)

    token = next(RtfTokenizer(b"\\'C4"))
    tc.assertEqual(b"\xc4", token.data)


def test_escaped_literals() -> None:
    tokens = list(RtfTokenizer(b"\\{\\}\\\\"))
    tc.assertListEqual([TokenKind.ESCAPED_LITERAL] * 3, [t.kind for t in tokens])
    tc.assertListEqual(["{", "}", "\\"], [t.name for t in tokens])


def test_special_characters() -> None:
    tokens = list(RtfTokenizer(b"\\tab\\emdash\\par\\~\\-\\_\\line"))

    tc.assertListEqual([TokenKind.SPECIAL_CHAR] * 7, [t.kind for t in tokens])
    tc.assertListEqual(
        [
            SpecialChar.TAB,
            SpecialChar.EMDASH,
            SpecialChar.PAR,
            SpecialChar.NON_BREAKING_SPACE,
            SpecialChar.OPTIONAL_HYPHEN,
            SpecialChar.NON_BREAKING_HYPHEN,
            SpecialChar.LINE,
        ],
        [t.special for t in tokens],
    )


def test_escaped_line_breaks_are_special_characters() -> None:
    tokens = list(RtfTokenizer(b"a\\\nb\\\rc"))
    tc.assertListEqual(
        [
            TokenKind.TEXT,
            TokenKind.SPECIAL_CHAR,
            TokenKind.TEXT,
            TokenKind.SPECIAL_CHAR,
            TokenKind.TEXT,
        ],
        [t.kind for t in tokens],
    )
    tc.assertEqual(SpecialChar.ESCAPED_NEWLINE, tokens[1].special)
    tc.assertEqual(SpecialChar.ESCAPED_CARRIAGE_RETURN, tokens[3].special)


def test_control_symbols() -> None:
    tokens = list(RtfTokenizer(b"{\\*\\generator x}\\|\\:"))
    tc.assertEqual(TokenKind.CONTROL_SYMBOL, tokens[1].kind)
    tc.assertEqual("*", tokens[1].name)
    tc.assertEqual(("|", ":"), (tokens[-2].name, tokens[-1].name))


def test_raw_line_breaks_are_ignored() -> None:
    tokens = list(RtfTokenizer(b"one\r\ntwo\nthree\r"))
    tc.assertListEqual([b"one", b"two", b"three"], [t.data for t in tokens])


def test_binary_data_is_skipped() -> None:
    tokens = list(RtfTokenizer(b"{\\bin4 \x00{}\\}"))
    tc.assertListEqual(
        [TokenKind.LBRACE, TokenKind.CONTROL_WORD, TokenKind.RBRACE],
        [t.kind for t in tokens],
    )
    tc.assertEqual("bin", tokens[1].name)


def test_peek_does_not_consume() -> None:
    tokenizer = RtfTokenizer(b"{x}")
    tc.assertEqual(0, tokenizer.position)
    tc.assertIs(tokenizer.peek(), tokenizer.peek())
    tc.assertEqual(TokenKind.LBRACE, tokenizer.consume().kind)
    tc.assertEqual(1, tokenizer.position)
    tc.assertEqual(b"x}", tokenizer.remaining())
    tc.assertEqual(TokenKind.TEXT, tokenizer.consume().kind)
    tc.assertEqual(TokenKind.RBRACE, tokenizer.consume().kind)
    tc.assertIsNone(tokenizer.consume())
    tc.assertIsNone(tokenizer.peek())


def test_tokenizer_reads_streams() -> None:
    tc.assertListEqual(
        [TokenKind.LBRACE, TokenKind.TEXT, TokenKind.RBRACE],
        _kinds(io.BytesIO(b"{x}")),
    )


def test_token_str_is_the_lexeme() -> None:
    token = next(RtfTokenizer(b"\\ansicpg1252 "))
    tc.assertEqual("\\ansicpg1252 ", str(token))
    tc.assertTrue(token.is_word("ansicpg"))
    tc.assertFalse(token.is_word("ansi"))


@pytest.mark.parametrize(
    "data",
    [
        b"\\",
        b"\\'zz",
        b"\\'e",
        b"\\\x80",
        b"\\ ",
        b"\\bin10 abc",
    ],
)
def test_malformed_input(data: bytes) -> None:
    with pytest.raises(RtfMalformedInputError):
        list(RtfTokenizer(data))


def test_malformed_input_reports_offset() -> None:
    with pytest.raises(RtfMalformedInputError) as excinfo:
        list(RtfTokenizer(b"abc\\'q1"))
    tc.assertEqual(3, excinfo.value.offset)
    tc.assertIn("offset 3", str(excinfo.value))
