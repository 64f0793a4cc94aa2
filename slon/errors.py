"""Exceptions raised while reading and writing SLON documents."""

from __future__ import annotations


class SlonError(Exception):
    """Base class for every SLON failure."""


class SlonSyntaxError(SlonError):
    def __init__(self, message: str, line: int):
        super().__init__(f"{message} at line {line}")
        self.message = message
        self.line = line


class SlonIOError(SlonError):
    """The underlying stream could not be read or written."""
