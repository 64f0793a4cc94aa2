"""Tests for slon.nodes."""

import pytest

from slon.nodes import SlonNode, format_scalar


# ---------------------------------------------------------------------------
# entries
# ---------------------------------------------------------------------------

def test_new_node_is_empty():
    node = SlonNode()
    assert node.entry_count == 0
    assert node.child_count == 0
    assert node.parent is None
    assert node.keys() == []


def test_overwrite_keeps_first_position():
    node = SlonNode()
    node.set_value("a", "1")
    node.set_value("b", "2")
    node.set_value("a", "3")
    assert node.keys() == ["a", "b"]
    assert node.get_value("a") == "3"
    assert node.entry_count == 2


def test_get_missing_key_returns_default():
    node = SlonNode()
    assert node.get_value("missing") is None
    assert node.get_value("missing", "fallback") == "fallback"


@pytest.mark.parametrize("key", ["", "has space", "a=b", 'q"', "dot.ted"])
def test_set_value_rejects_invalid_keys(key):
    with pytest.raises(ValueError):
        SlonNode().set_value(key, "v")


def test_set_value_rejects_quote_in_value():
    with pytest.raises(ValueError):
        SlonNode().set_value("k", 'say "hi"')


def test_set_value_formats_scalars():
    node = SlonNode()
    node.set_value("flag", True)
    node.set_value("off", False)
    node.set_value("count", 42)
    node.set_value("ratio", 1.5)
    assert node.entries == {"flag": "true", "off": "false", "count": "42", "ratio": "1.5"}


def test_format_scalar_rejects_other_types():
    with pytest.raises(TypeError):
        format_scalar([1, 2])


# ---------------------------------------------------------------------------
# typed accessors
# ---------------------------------------------------------------------------

class TestTypedAccessors:
    def test_bool(self):
        node = SlonNode(entries={"a": "true", "b": "TRUE", "c": "yes", "d": "false"})
        assert node.get_bool("a") is True
        assert node.get_bool("b") is True
        assert node.get_bool("c") is False
        assert node.get_bool("d") is False

    def test_int_and_float(self):
        node = SlonNode(entries={"n": "-17", "f": "2.25"})
        assert node.get_int("n") == -17
        assert node.get_float("f") == 2.25
        assert node.get_float("n") == -17.0

    def test_missing_returns_default(self):
        node = SlonNode()
        assert node.get_bool("x") is None
        assert node.get_int("x", 5) == 5
        assert node.get_float("x", 0.5) == 0.5

    def test_malformed_number_raises(self):
        node = SlonNode(entries={"n": "abc"})
        with pytest.raises(ValueError):
            node.get_int("n")
        with pytest.raises(ValueError):
            node.get_float("n")


# ---------------------------------------------------------------------------
# children
# ---------------------------------------------------------------------------

def test_add_child_sets_parent_and_order():
    root = SlonNode()
    first, second = SlonNode(), SlonNode()
    root.add_child(first)
    root.add_child(second)
    assert root.child_count == 2
    assert root.child_at(0) is first
    assert root.child_at(1) is second
    assert first.parent is root
    assert root.parent is None


def test_child_at_out_of_range_returns_none():
    root = SlonNode()
    root.add_child(SlonNode())
    assert root.child_at(1) is None
    assert root.child_at(-1) is None


def test_add_child_rejects_second_parent():
    child = SlonNode()
    owner = SlonNode()
    owner.add_child(child)
    with pytest.raises(ValueError):
        SlonNode().add_child(child)
    assert child.parent is owner


def test_add_child_rejects_cycles():
    root = SlonNode()
    child = SlonNode()
    root.add_child(child)
    with pytest.raises(ValueError):
        child.add_child(root)
    with pytest.raises(ValueError):
        root.add_child(root)


def test_add_child_twice_is_noop():
    root = SlonNode()
    child = SlonNode()
    root.add_child(child)
    root.add_child(child)
    assert root.child_count == 1


def test_find_child_skips_children_without_key():
    root = SlonNode()
    anonymous = SlonNode(entries={"id": "7"})
    user1 = SlonNode(entries={"name": "user1"})
    user2 = SlonNode(entries={"name": "user2"})
    for child in (anonymous, user1, user2):
        root.add_child(child)
    assert root.find_child("name", "user1") is user1
    assert root.find_child("name", "user2") is user2
    assert root.find_child("name", "user3") is None
    assert root.find_child("missing", "x") is None


def test_equality_ignores_parent():
    a, b = SlonNode(entries={"k": "v"}), SlonNode(entries={"k": "v"})
    SlonNode().add_child(a)
    assert a == b
    assert a != SlonNode(entries={"k": "other"})


def test_parent_is_weak():
    child = SlonNode()
    root = SlonNode()
    root.add_child(child)
    del root
    assert child.parent is None


def test_equality_respects_entry_order():
    assert SlonNode(entries={"a": "1", "b": "2"}) != SlonNode(entries={"b": "2", "a": "1"})
    assert SlonNode(entries={"a": "1", "b": "2"}) == SlonNode(entries={"a": "1", "b": "2"})


def test_equality_compares_children():
    left, right = SlonNode(), SlonNode()
    left.add_child(SlonNode(entries={"x": "1", "y": "2"}))
    right.add_child(SlonNode(entries={"y": "2", "x": "1"}))
    assert left != right
    assert left != SlonNode()
    assert left != "not a node"


def test_repr_is_shallow():
    root = SlonNode(entries={"k": "v"})
    root.add_child(SlonNode())
    assert repr(root) == "SlonNode(entries={'k': 'v'}, children=1)"


def test_get_bool_does_not_strip():
    node = SlonNode(entries={"padded": " true "})
    assert node.get_bool("padded") is False
