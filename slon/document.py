"""SLON document container with file and stream helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .errors import SlonIOError
from .formatter import FormatterOptions, dump, dumps
from .nodes import SlonNode
from .parser import ParserConfig, SlonParser


@dataclass
class SlonDocument:
    root: SlonNode | None = None

    @classmethod
    def load(cls, path: str | Path, config: ParserConfig | None = None) -> "SlonDocument":
        try:
            with open(path, "r", encoding="utf-8", newline="") as handle:
                return cls.read(handle, config=config)
        except OSError as exc:
            raise SlonIOError(f"Failed to read {path}") from exc

    @classmethod
    def loads(cls, text: str, config: ParserConfig | None = None) -> "SlonDocument":
        return cls(root=SlonParser(text, config=config).parse())

    @classmethod
    def read(cls, stream: TextIO, config: ParserConfig | None = None) -> "SlonDocument":
        return cls(root=SlonParser(stream, config=config).parse())

    def save(self, path: str | Path, options: FormatterOptions | None = None) -> Path:
        root = self._require_root()
        destination = Path(path)
        try:
            with open(destination, "w", encoding="utf-8", newline="") as handle:
                dump(root, handle, options)
        except OSError as exc:
            raise SlonIOError(f"Failed to write {destination}") from exc
        return destination

    def write(self, sink: TextIO, options: FormatterOptions | None = None) -> None:
        dump(self._require_root(), sink, options)

    def dumps(self, options: FormatterOptions | None = None) -> str:
        return dumps(self._require_root(), options)

    def find_child(self, key: str, value: str) -> SlonNode | None:
        if self.root is None:
            return None
        return self.root.find_child(key, value)

    def _require_root(self) -> SlonNode:
        if self.root is None:
            raise ValueError("Document has no root node")
        return self.root
