"""State-machine parser turning SLON text into a SlonNode tree."""

from __future__ import annotations

import io
import logging
from enum import Enum, auto
from typing import Callable, NotRequired, TextIO, TypedDict

from .errors import SlonSyntaxError
from .lexer import CharClass, CharReader, classify
from .logger import Logger
from .nodes import SlonNode
from .utils import resolve_config


class ParserState(Enum):
    START = auto()
    IN_BLOCK = auto()
    KEY_SCANNING = auto()
    KEY_DONE = auto()
    AWAIT_VALUE = auto()
    IN_VALUE = auto()
    IN_COMMENT = auto()
    DONE = auto()


class ParserConfig(TypedDict):
    strict: NotRequired[bool]
    enable_logger: NotRequired[bool]
    log_level: NotRequired[int]


class ParserConfigRequired(TypedDict):
    strict: bool
    enable_logger: bool
    log_level: int


DEFAULT_CONFIG: ParserConfigRequired = {"strict": False, "enable_logger": True, "log_level": logging.WARNING}


class SlonParser:
    """Single-pass parser; one character per step, no backtracking.

    Blocks are kept on a stack while open and attached to their parent when
    their closing brace is read.
    """

    def __init__(self, source: str | TextIO, config: ParserConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(
            config={
                "name": "slon.parser",
                "is_enabled": self.config["enable_logger"],
                "level": self.config["log_level"],
            }
        ).logger
        if isinstance(source, str):
            source = io.StringIO(source)
        self.reader = CharReader(source)
        self.state = ParserState.START
        self.saved_state = ParserState.START
        self.root: SlonNode | None = None
        self._stack: list[SlonNode] = []
        self._key: list[str] = []
        self._value: list[str] = []
        self._trailing_reported = False
        self._handlers: dict[ParserState, Callable[[str], None]] = {
            ParserState.START: self._handle_start,
            ParserState.IN_BLOCK: self._handle_in_block,
            ParserState.KEY_SCANNING: self._handle_key_scanning,
            ParserState.KEY_DONE: self._handle_key_done,
            ParserState.AWAIT_VALUE: self._handle_await_value,
            ParserState.IN_VALUE: self._handle_in_value,
            ParserState.IN_COMMENT: self._handle_comment,
            ParserState.DONE: self._handle_done,
        }

    @property
    def line(self) -> int:
        return self.reader.line

    @property
    def current_node(self) -> SlonNode | None:
        return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        return len(self._stack)

    def parse(self) -> SlonNode | None:
        self.logger.info("Starting parse")
        try:
            while True:
                char = self.reader.next_char()
                if char is None:
                    break
                self.step(char)
            self._finish()
        except SlonSyntaxError as e:
            self.logger.error(e)
            raise
        self.logger.info("Parse complete")
        return self.root

    def step(self, char: str) -> None:
        if char == "#" and self.state not in (ParserState.IN_COMMENT, ParserState.IN_VALUE):
            self.saved_state = self.state
            self.state = ParserState.IN_COMMENT
        self._handlers[self.state](char)

    def _error(self, message: str) -> SlonSyntaxError:
        return SlonSyntaxError(message, self.line)

    # Blocks -------------------------------------------------------------------
    def _open_node(self) -> None:
        node = SlonNode()
        if self.root is None:
            self.root = node
        self._stack.append(node)
        self.logger.debug("Opened block at depth %d, line %d", self.depth, self.line)

    def _close_node(self) -> None:
        node = self._stack.pop()
        self.logger.debug("Closed block at depth %d, line %d", self.depth + 1, self.line)
        if self._stack:
            self._stack[-1].add_child(node)
        else:
            self.state = ParserState.DONE

    # State handlers -----------------------------------------------------------
    def _handle_comment(self, char: str) -> None:
        if char == "\n":
            self.state = self.saved_state

    def _handle_start(self, char: str) -> None:
        if char == "{":
            self._open_node()
            self.state = ParserState.IN_BLOCK

    def _handle_in_block(self, char: str) -> None:
        char_class = classify(char)
        if char_class is CharClass.WHITESPACE:
            return
        if char_class is CharClass.IDENTIFIER:
            self._key = [char]
            self.state = ParserState.KEY_SCANNING
        elif char_class is CharClass.OPEN_BRACE:
            self._open_node()
        elif char_class is CharClass.CLOSE_BRACE:
            self._close_node()
        else:
            raise self._error(f"Invalid character '{char}', key or node expected")

    def _handle_key_scanning(self, char: str) -> None:
        char_class = classify(char)
        if char_class is CharClass.IDENTIFIER:
            self._key.append(char)
        elif char_class is CharClass.WHITESPACE:
            self.state = ParserState.KEY_DONE
        elif char_class is CharClass.ASSIGN:
            self.state = ParserState.AWAIT_VALUE
        else:
            raise self._error(f"Invalid character '{char}' in key name")

    def _handle_key_done(self, char: str) -> None:
        char_class = classify(char)
        if char_class is CharClass.WHITESPACE:
            return
        if char_class is not CharClass.ASSIGN:
            raise self._error(f"Value assignment expected, got '{char}'")
        self.state = ParserState.AWAIT_VALUE

    def _handle_await_value(self, char: str) -> None:
        char_class = classify(char)
        if char_class is CharClass.WHITESPACE:
            return
        if char_class is not CharClass.QUOTE:
            raise self._error(f"Quote expected, got '{char}'")
        self._value = []
        self.state = ParserState.IN_VALUE

    def _handle_in_value(self, char: str) -> None:
        if char != '"':
            self._value.append(char)
            return
        key = "".join(self._key)
        value = "".join(self._value)
        self._stack[-1].entries[key] = value
        self.logger.debug("Stored entry '%s' at line %d", key, self.line)
        self.state = ParserState.IN_BLOCK

    def _handle_done(self, char: str) -> None:
        if classify(char) is CharClass.WHITESPACE:
            return
        if self.config["strict"]:
            raise self._error(f"Unexpected character '{char}' after document root")
        if not self._trailing_reported:
            self.logger.warning("Ignoring content after document root at line %d", self.line)
            self._trailing_reported = True

    def _finish(self) -> None:
        state = self.saved_state if self.state is ParserState.IN_COMMENT else self.state
        if state is ParserState.DONE:
            return
        if state is ParserState.START:
            self.logger.warning("No document root found")
            return
        if self.config["strict"]:
            if state is ParserState.IN_VALUE:
                raise self._error("Unterminated quoted value")
            raise self._error(f"Unexpected end of document, {self.depth} block(s) not closed")
        self.logger.warning("Document ended with %d block(s) not closed", self.depth)


def loads(text: str, config: ParserConfig | None = None) -> SlonNode | None:
    return SlonParser(text, config=config).parse()


def load(stream: TextIO, config: ParserConfig | None = None) -> SlonNode | None:
    return SlonParser(stream, config=config).parse()


__all__ = ["DEFAULT_CONFIG", "ParserConfig", "ParserState", "SlonParser", "load", "loads"]
