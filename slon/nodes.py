"""Node definitions for the SLON document tree."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field

from .lexer import is_identifier

SlonScalar = str | int | float | bool


def format_scalar(value: SlonScalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


@dataclass(slots=True, weakref_slot=True, eq=False, repr=False)
class SlonNode:
    """One brace-delimited block: ordered entries plus ordered child blocks.

    Children are owned by their node; the parent link is a weak reference and
    takes no part in equality.
    """

    entries: dict[str, str] = field(default_factory=dict)
    children: list["SlonNode"] = field(default_factory=list)
    _parent: "weakref.ReferenceType[SlonNode] | None" = field(default=None, init=False, repr=False, compare=False)

    @property
    def parent(self) -> "SlonNode | None":
        return self._parent() if self._parent is not None else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SlonNode):
            return NotImplemented
        # explicit stack; entry order is significant
        stack: list[tuple[SlonNode, SlonNode]] = [(self, other)]
        while stack:
            left, right = stack.pop()
            if left is right:
                continue
            if list(left.entries.items()) != list(right.entries.items()):
                return False
            if len(left.children) != len(right.children):
                return False
            stack.extend(zip(left.children, right.children))
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SlonNode(entries={self.entries!r}, children={len(self.children)})"

    # Children -----------------------------------------------------------------
    def add_child(self, node: "SlonNode") -> None:
        current_parent = node.parent
        if current_parent is not None and current_parent is not self:
            raise ValueError("Node is already attached to another parent")
        ancestor: SlonNode | None = self
        while ancestor is not None:
            if ancestor is node:
                raise ValueError("Cannot attach a node to itself or to one of its descendants")
            ancestor = ancestor.parent
        if current_parent is self and any(child is node for child in self.children):
            return
        node._parent = weakref.ref(self)
        self.children.append(node)

    @property
    def child_count(self) -> int:
        return len(self.children)

    def child_at(self, index: int) -> "SlonNode | None":
        if index < 0 or index >= len(self.children):
            return None
        return self.children[index]

    def find_child(self, key: str, value: str) -> "SlonNode | None":
        """Return the first child whose ``key`` entry equals ``value``.

        Children that lack ``key`` never match.
        """
        for child in self.children:
            if key in child.entries and child.entries[key] == value:
                return child
        return None

    # Entries ------------------------------------------------------------------
    def set_value(self, key: str, value: SlonScalar) -> None:
        if not is_identifier(key):
            raise ValueError(f"Invalid key name: {key!r}")
        text = format_scalar(value)
        if '"' in text:
            raise ValueError(f"Value for '{key}' contains a quote and cannot be stored")
        self.entries[key] = text

    def get_value(self, key: str, default: str | None = None) -> str | None:
        return self.entries.get(key, default)

    def keys(self) -> list[str]:
        return list(self.entries)

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    # Typed accessors ----------------------------------------------------------
    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        value = self.entries.get(key)
        if value is None:
            return default
        return value.lower() == "true"

    def get_int(self, key: str, default: int | None = None) -> int | None:
        value = self.entries.get(key)
        if value is None:
            return default
        return int(value)

    def get_float(self, key: str, default: float | None = None) -> float | None:
        value = self.entries.get(key)
        if value is None:
            return default
        return float(value)
