"""Immutable structured value model used as the persisted representation.

A value tree is a leaf, an ordered list, or an ordered string-keyed map.
Equality is structural and order-sensitive: two maps with the same entries
in a different order are different trees, because entry order is part of
what gets written to disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping, Sequence, Union

from core.errors import ValueTreeError


class LeafKind(str, Enum):
    """Scalar leaf kinds."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    BINARY = "binary"


@dataclass(frozen=True)
class TreeLeaf:
    """Scalar tree value.

    Attributes:
        kind: Leaf kind, part of equality so True and 1 never compare equal.
        value: Python scalar payload.
    """

    kind: LeafKind
    value: str | int | bool | bytes

    def __post_init__(self) -> None:
        if not isinstance(self.kind, LeafKind):
            raise ValueTreeError(f"Leaf kind must be a LeafKind, got {self.kind!r}.")
        if not _LEAF_VALUE_CHECKS[self.kind](self.value):
            raise ValueTreeError(
                f"{self.kind.value} leaf cannot hold {type(self.value).__name__} value "
                f"{self.value!r:.40}."
            )


_LEAF_VALUE_CHECKS = {
    LeafKind.STRING: lambda value: isinstance(value, str),
    LeafKind.INTEGER: lambda value: isinstance(value, int) and not isinstance(value, bool),
    LeafKind.BOOLEAN: lambda value: isinstance(value, bool),
    LeafKind.BINARY: lambda value: isinstance(value, bytes),
}


@dataclass(frozen=True)
class TreeList:
    """Ordered sequence of trees."""

    items: tuple["ValueTree", ...] = ()

    def __post_init__(self) -> None:
        for item in self.items:
            _require_tree(item, "list item")

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["ValueTree"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "ValueTree":
        return self.items[index]

    def replace(self, index: int, value: "ValueTree") -> "TreeList":
        """Return a copy with one element swapped."""
        updated = list(self.items)
        updated[index] = value
        return TreeList(tuple(updated))


@dataclass(frozen=True)
class TreeMap:
    """Ordered string-keyed map of trees.

    Attributes:
        entries: Key/value pairs in insertion order; keys are unique.
    """

    entries: tuple[tuple[str, "ValueTree"], ...] = ()

    def __post_init__(self) -> None:
        seen_keys: set[str] = set()
        for key, value in self.entries:
            if not isinstance(key, str):
                raise ValueTreeError(f"Map keys must be strings, got {type(key).__name__}.")
            if key in seen_keys:
                raise ValueTreeError(f"Duplicate map key '{key}'.")
            seen_keys.add(key)
            _require_tree(value, f"map entry '{key}'")

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return any(entry_key == key for entry_key, _ in self.entries)

    def get(self, key: str) -> "ValueTree | None":
        """Return the value stored under key, or None."""
        for entry_key, value in self.entries:
            if entry_key == key:
                return value
        return None

    def keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.entries)

    def items(self) -> tuple[tuple[str, "ValueTree"], ...]:
        return self.entries

    def with_entry(self, key: str, value: "ValueTree") -> "TreeMap":
        """Return a copy with key set, keeping its position when present."""
        if key not in self:
            return TreeMap(self.entries + ((key, value),))
        return TreeMap(
            tuple(
                (entry_key, value if entry_key == key else entry_value)
                for entry_key, entry_value in self.entries
            )
        )

    def without(self, key: str) -> "TreeMap":
        """Return a copy with key removed."""
        return TreeMap(tuple(entry for entry in self.entries if entry[0] != key))


ValueTree = Union[TreeLeaf, TreeList, TreeMap]
EMPTY_MAP = TreeMap()


def leaf(value: str | int | bool | bytes) -> TreeLeaf:
    """Build a leaf, inferring its kind from the Python type.

    Raises:
        ValueTreeError: If value is not a supported scalar.
    """
    if isinstance(value, bool):
        return TreeLeaf(LeafKind.BOOLEAN, value)
    if isinstance(value, int):
        return TreeLeaf(LeafKind.INTEGER, value)
    if isinstance(value, str):
        return TreeLeaf(LeafKind.STRING, value)
    if isinstance(value, (bytes, bytearray)):
        return TreeLeaf(LeafKind.BINARY, bytes(value))
    raise ValueTreeError(f"Unsupported leaf value of type {type(value).__name__}.")


def tree_list(*items: ValueTree) -> TreeList:
    return TreeList(tuple(items))


def tree_map(*entries: tuple[str, ValueTree]) -> TreeMap:
    return TreeMap(tuple(entries))


def from_python(value: object) -> ValueTree:
    """Convert plain Python data into a value tree.

    Args:
        value: Scalars, lists/tuples, or string-keyed dicts.

    Returns:
        Equivalent value tree, preserving dict insertion order.

    Raises:
        ValueTreeError: If any nested value is unsupported.
    """
    if isinstance(value, (TreeLeaf, TreeList, TreeMap)):
        return value
    if isinstance(value, Mapping):
        return TreeMap(tuple((key, from_python(item)) for key, item in value.items()))
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return TreeList(tuple(from_python(item) for item in value))
    return leaf(value)  # type: ignore[arg-type]


def to_python(tree: ValueTree) -> object:
    """Convert a value tree back into plain Python data."""
    if isinstance(tree, TreeLeaf):
        return tree.value
    if isinstance(tree, TreeList):
        return [to_python(item) for item in tree.items]
    if isinstance(tree, TreeMap):
        return {key: to_python(value) for key, value in tree.entries}
    raise ValueTreeError(f"Expected value tree, got {type(tree).__name__}.")


def replace_string_leaves(tree: ValueTree, old: str, new: str) -> tuple[ValueTree, int]:
    """Substitute every string leaf equal to old.

    Args:
        tree: Input tree, left untouched.
        old: String leaf value to replace.
        new: Replacement string.

    Returns:
        Rewritten tree and the number of leaves replaced.
    """
    if isinstance(tree, TreeLeaf):
        if tree.kind is LeafKind.STRING and tree.value == old:
            return leaf(new), 1
        return tree, 0
    if isinstance(tree, TreeList):
        rewritten_items = []
        total = 0
        for item in tree.items:
            rewritten, count = replace_string_leaves(item, old, new)
            rewritten_items.append(rewritten)
            total += count
        return TreeList(tuple(rewritten_items)), total
    if isinstance(tree, TreeMap):
        rewritten_entries = []
        total = 0
        for key, value in tree.entries:
            rewritten, count = replace_string_leaves(value, old, new)
            rewritten_entries.append((key, rewritten))
            total += count
        return TreeMap(tuple(rewritten_entries)), total
    raise ValueTreeError(f"Expected value tree, got {type(tree).__name__}.")


def _require_tree(value: object, context: str) -> None:
    if not isinstance(value, (TreeLeaf, TreeList, TreeMap)):
        raise ValueTreeError(f"Invalid {context}: expected value tree, got {type(value).__name__}.")
