"""Formatter writing SlonNode trees back to SLON text."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Iterator, TextIO

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import SlonIOError
from .lexer import WHITESPACE, is_identifier
from .nodes import SlonNode


class FormatterOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    values_in_line: bool = True
    save_minimal: bool = False
    indent: str = "    "

    @field_validator("indent")
    @classmethod
    def _indent_is_whitespace(cls, value: str) -> str:
        if any(char not in WHITESPACE for char in value):
            raise ValueError("indent may only contain whitespace")
        return value


@dataclass(frozen=True)
class SlonFormatter:
    options: FormatterOptions = field(default_factory=FormatterOptions)

    def iter_text(self, node: SlonNode) -> Iterator[str]:
        # (node, level, closing) frames; children pushed in reverse to keep source order
        stack: list[tuple[SlonNode, int, bool]] = [(node, 0, False)]
        while stack:
            current, level, closing = stack.pop()
            if closing:
                yield self._line("}", level)
                continue
            yield self._line("{", level)
            yield from self._entry_lines(current, level + 1)
            stack.append((current, level, True))
            for child in reversed(current.children):
                stack.append((child, level + 1, False))

    def format(self, node: SlonNode) -> str:
        return "".join(self.iter_text(node))

    def write(self, node: SlonNode, sink: TextIO) -> None:
        try:
            for chunk in self.iter_text(node):
                sink.write(chunk)
        except OSError as exc:
            raise SlonIOError("Failed to write SLON output") from exc

    def _entry_lines(self, node: SlonNode, level: int) -> Iterator[str]:
        if not node.entries:
            return
        pairs = [self._format_pair(key, value) for key, value in node.entries.items()]
        if self.options.save_minimal:
            yield "".join(pairs)
        elif self.options.values_in_line:
            yield self._line(" ".join(pairs), level)
        else:
            for pair in pairs:
                yield self._line(pair, level)

    def _format_pair(self, key: str, value: str) -> str:
        if not is_identifier(key):
            raise ValueError(f"Invalid key name: {key!r}")
        if '"' in value:
            raise ValueError(f"Value for '{key}' contains a quote and cannot be written")
        return f'{key}="{value}"'

    def _line(self, text: str, level: int) -> str:
        if self.options.save_minimal:
            return text
        return f"{self.options.indent * level}{text}\n"


def dumps(node: SlonNode, options: FormatterOptions | None = None) -> str:
    buffer = io.StringIO()
    dump(node, buffer, options)
    return buffer.getvalue()


def dump(node: SlonNode, sink: TextIO, options: FormatterOptions | None = None) -> None:
    SlonFormatter(options or FormatterOptions()).write(node, sink)


__all__ = ["FormatterOptions", "SlonFormatter", "dump", "dumps"]
