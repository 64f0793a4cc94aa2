"""Tests for character classification and CharReader."""

import io

import pytest

from slon.errors import SlonIOError
from slon.lexer import CharClass, CharReader, classify, is_identifier


@pytest.mark.parametrize(
    "char, expected",
    [
        (" ", CharClass.WHITESPACE),
        ("\t", CharClass.WHITESPACE),
        ("\n", CharClass.WHITESPACE),
        ("\r", CharClass.WHITESPACE),
        ("a", CharClass.IDENTIFIER),
        ("Z", CharClass.IDENTIFIER),
        ("7", CharClass.IDENTIFIER),
        ("_", CharClass.IDENTIFIER),
        ("-", CharClass.IDENTIFIER),
        ("{", CharClass.OPEN_BRACE),
        ("}", CharClass.CLOSE_BRACE),
        ("=", CharClass.ASSIGN),
        ('"', CharClass.QUOTE),
        ("#", CharClass.COMMENT),
        (".", CharClass.OTHER),
        ("é", CharClass.OTHER),
        ("\f", CharClass.OTHER),
    ],
)
def test_classify(char, expected):
    assert classify(char) is expected


def test_is_identifier():
    assert is_identifier("user-name_2")
    assert not is_identifier("")
    assert not is_identifier("a b")


def test_reader_yields_every_char_then_none():
    reader = CharReader(io.StringIO("ab\nc"), chunk_size=2)
    chars = []
    while True:
        char = reader.next_char()
        if char is None:
            break
        chars.append(char)
    assert "".join(chars) == "ab\nc"
    assert reader.next_char() is None


def test_reader_counts_lines():
    reader = CharReader(io.StringIO("a\nb\n"))
    assert reader.line == 1
    reader.next_char()
    assert reader.line == 1
    assert reader.next_char() == "\n"
    assert reader.line == 2
    reader.next_char()
    reader.next_char()
    assert reader.line == 3


def test_reader_rejects_bad_chunk_size():
    with pytest.raises(ValueError):
        CharReader(io.StringIO(""), chunk_size=0)


class _BrokenStream(io.StringIO):
    def read(self, size=-1):
        raise OSError("device gone")


def test_reader_wraps_stream_failures():
    reader = CharReader(_BrokenStream())
    with pytest.raises(SlonIOError) as excinfo:
        reader.next_char()
    assert isinstance(excinfo.value.__cause__, OSError)
