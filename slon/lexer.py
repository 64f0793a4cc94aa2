"""Character classification and buffered character reading for SLON input."""

from __future__ import annotations

import string
from enum import Enum, auto
from typing import TextIO

from .errors import SlonIOError

WHITESPACE = frozenset(" \t\n\r")
IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_-")


class CharClass(Enum):
    WHITESPACE = auto()
    IDENTIFIER = auto()
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    ASSIGN = auto()
    QUOTE = auto()
    COMMENT = auto()
    OTHER = auto()


STRUCTURAL = {
    "{": CharClass.OPEN_BRACE,
    "}": CharClass.CLOSE_BRACE,
    "=": CharClass.ASSIGN,
    '"': CharClass.QUOTE,
    "#": CharClass.COMMENT,
}


def classify(char: str) -> CharClass:
    if char in WHITESPACE:
        return CharClass.WHITESPACE
    if char in IDENTIFIER_CHARS:
        return CharClass.IDENTIFIER
    return STRUCTURAL.get(char, CharClass.OTHER)


def is_identifier(text: str) -> bool:
    return bool(text) and all(char in IDENTIFIER_CHARS for char in text)


class CharReader:
    """Pull one character at a time from a text stream, reading it in chunks."""

    def __init__(self, stream: TextIO, chunk_size: int = 4096):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.stream = stream
        self.chunk_size = chunk_size
        self.line = 1
        self._buffer = ""
        self._pos = 0
        self._exhausted = False

    def next_char(self) -> str | None:
        if self._pos >= len(self._buffer) and not self._fill():
            return None
        char = self._buffer[self._pos]
        self._pos += 1
        if char == "\n":
            self.line += 1
        return char

    def _fill(self) -> bool:
        if self._exhausted:
            return False
        try:
            chunk = self.stream.read(self.chunk_size)
        except (OSError, UnicodeDecodeError) as exc:
            raise SlonIOError(f"Failed to read input near line {self.line}") from exc
        if not chunk:
            self._exhausted = True
            return False
        self._buffer = chunk
        self._pos = 0
        return True


__all__ = ["CharClass", "CharReader", "IDENTIFIER_CHARS", "WHITESPACE", "classify", "is_identifier"]
