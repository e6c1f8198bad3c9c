"""Strict record codec contract and shared field readers.

Concrete codecs implement ``encode`` as a total function and ``decode``
as a partial one that raises a ``RecordDecodeError`` subclass. The
readers below keep field validation messages uniform across codecs.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

from core.errors import MalformedFieldError, MissingRequiredFieldError
from core.value_tree import LeafKind, TreeLeaf, TreeList, TreeMap, ValueTree

T = TypeVar("T")

ROOT_FIELD = "<root>"


class RecordCodec(Protocol[T]):
    """Per-record-type encode/decode contract."""

    def encode(self, value: T) -> ValueTree: ...

    def decode(self, tree: ValueTree) -> T: ...


def require_map(tree: ValueTree, field_name: str = ROOT_FIELD) -> TreeMap:
    """Return tree as a map or raise a malformed field error."""
    if isinstance(tree, TreeMap):
        return tree
    raise MalformedFieldError(field_name, f"expected map, got {_shape_name(tree)}")


def read_required(tree: TreeMap, field_name: str) -> ValueTree:
    value = tree.get(field_name)
    if value is None:
        raise MissingRequiredFieldError(field_name)
    return value


def read_string(tree: TreeMap, field_name: str) -> str:
    value = read_required(tree, field_name)
    if isinstance(value, TreeLeaf) and value.kind is LeafKind.STRING:
        return str(value.value)
    raise MalformedFieldError(field_name, f"expected string, got {_shape_name(value)}")


def read_bool(tree: TreeMap, field_name: str) -> bool:
    value = read_required(tree, field_name)
    if isinstance(value, TreeLeaf) and value.kind is LeafKind.BOOLEAN:
        return bool(value.value)
    raise MalformedFieldError(field_name, f"expected boolean, got {_shape_name(value)}")


def read_positive_int(tree: TreeMap, field_name: str) -> int:
    value = read_required(tree, field_name)
    if not (isinstance(value, TreeLeaf) and value.kind is LeafKind.INTEGER):
        raise MalformedFieldError(field_name, f"expected integer, got {_shape_name(value)}")
    number = int(value.value)
    if number < 1:
        raise MalformedFieldError(field_name, f"expected positive integer, got {number}")
    return number


def read_list(tree: TreeMap, field_name: str) -> TreeList:
    value = read_required(tree, field_name)
    if isinstance(value, TreeList):
        return value
    raise MalformedFieldError(field_name, f"expected list, got {_shape_name(value)}")


def read_optional_map(tree: TreeMap, field_name: str) -> TreeMap | None:
    value = tree.get(field_name)
    if value is None:
        return None
    if not isinstance(value, TreeMap):
        raise MalformedFieldError(field_name, f"expected map, got {_shape_name(value)}")
    if len(value) == 0:
        raise MalformedFieldError(field_name, "empty map must be omitted")
    return value


def check_layout(tree: TreeMap, field_order: Sequence[str], optional: Sequence[str] = ()) -> None:
    """Reject unknown, duplicated, or misordered fields.

    Strict decoders only accept the exact layout their encoder produces,
    so any tree they accept re-encodes to itself.

    Args:
        tree: Decoded record map.
        field_order: Every known field in encoded order.
        optional: Fields from field_order that may be absent.

    Raises:
        MalformedFieldError: If the keys differ from the canonical layout.
    """
    unknown_keys = [key for key in tree.keys() if key not in field_order]
    if unknown_keys:
        raise MalformedFieldError(unknown_keys[0], "unexpected field")
    expected_keys = tuple(key for key in field_order if key in tree or key not in optional)
    if tree.keys() != expected_keys:
        raise MalformedFieldError(
            ROOT_FIELD,
            f"fields out of order, expected {', '.join(expected_keys)}",
        )


def _shape_name(tree: ValueTree) -> str:
    if isinstance(tree, TreeLeaf):
        return tree.kind.value
    if isinstance(tree, TreeList):
        return "list"
    if isinstance(tree, TreeMap):
        return "map"
    return type(tree).__name__
