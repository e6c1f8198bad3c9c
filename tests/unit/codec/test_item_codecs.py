"""Unit tests for strict record codecs."""

from __future__ import annotations

import pytest

from codec.item_codecs import DispatchRecordCodec, OptionalRecordCodec, SimpleItemCodec
from core.errors import (
    MalformedFieldError,
    MissingRequiredFieldError,
    StowageRegistryError,
    UnknownTypeError,
)
from core.types import ItemStack, MissingContent
from core.value_tree import TreeMap, leaf, tree_list, tree_map
from tests.record_samples import named_stick, oak_pattern, sample_registry


def _stick_tree(*extra: tuple[str, object]) -> TreeMap:
    return tree_map(("id", leaf("base:stick")), ("count", leaf(1)), *extra)  # type: ignore[arg-type]


def test_simple_item_encodes_id_and_count_only() -> None:
    """A stack without components should encode exactly two fields."""
    tree = SimpleItemCodec("base:stick").encode(ItemStack("base:stick"))

    assert tree == _stick_tree()


def test_simple_item_roundtrips_components() -> None:
    """Attached components should survive a strict round trip."""
    codec = SimpleItemCodec("base:stick")
    stack = named_stick()

    assert codec.decode(codec.encode(stack)) == stack


def test_simple_item_rejects_missing_count() -> None:
    """Count is a required field."""
    tree = tree_map(("id", leaf("base:stick")))

    with pytest.raises(MissingRequiredFieldError):
        SimpleItemCodec("base:stick").decode(tree)


@pytest.mark.parametrize("count", [leaf(0), leaf("1"), leaf(True), tree_list()])
def test_simple_item_rejects_malformed_count(count) -> None:
    """Count must be a positive integer leaf."""
    tree = tree_map(("id", leaf("base:stick")), ("count", count))

    with pytest.raises(MalformedFieldError):
        SimpleItemCodec("base:stick").decode(tree)


def test_simple_item_rejects_unknown_field() -> None:
    """Unknown fields would be lost on re-encode, so they are rejected."""
    with pytest.raises(MalformedFieldError):
        SimpleItemCodec("base:stick").decode(_stick_tree(("color", leaf("red"))))


def test_simple_item_rejects_reordered_fields() -> None:
    """Field order is part of the encoding."""
    tree = tree_map(("count", leaf(1)), ("id", leaf("base:stick")))

    with pytest.raises(MalformedFieldError):
        SimpleItemCodec("base:stick").decode(tree)


def test_simple_item_rejects_empty_components() -> None:
    """An empty components map is never produced by the encoder."""
    with pytest.raises(MalformedFieldError):
        SimpleItemCodec("base:stick").decode(_stick_tree(("components", TreeMap())))


def test_simple_item_rejects_non_map_root() -> None:
    """A leaf is not a record."""
    with pytest.raises(MalformedFieldError):
        SimpleItemCodec("base:stick").decode(leaf("base:stick"))


def test_dispatch_raises_unknown_type_with_id() -> None:
    """Unregistered ids should raise an unknown type error naming the id."""
    codec = DispatchRecordCodec(sample_registry())
    tree = tree_map(("id", leaf("mod:stick")), ("count", leaf(1)))

    with pytest.raises(UnknownTypeError) as excinfo:
        codec.decode(tree)

    assert excinfo.value.type_id == "mod:stick" and "mod:stick" in excinfo.value.message


def test_dispatch_raises_for_missing_id() -> None:
    """Records without an id cannot be dispatched."""
    with pytest.raises(MissingRequiredFieldError):
        DispatchRecordCodec(sample_registry()).decode(tree_map(("count", leaf(1))))


def test_dispatch_roundtrips_crafting_pattern() -> None:
    """Patterns should decode back to an equal pattern."""
    codec = DispatchRecordCodec(sample_registry())
    pattern = oak_pattern()

    assert codec.decode(codec.encode(pattern)) == pattern


def test_pattern_with_missing_input_type_fails_as_a_whole() -> None:
    """An unknown nested stack should fail the enclosing pattern."""
    full_codec = DispatchRecordCodec(sample_registry())
    tree = full_codec.encode(oak_pattern())
    reduced_codec = DispatchRecordCodec(sample_registry(items=("base:oak_planks",)))

    with pytest.raises(UnknownTypeError):
        reduced_codec.decode(tree)


def test_dispatch_encodes_placeholder_as_raw_tree() -> None:
    """Placeholders encode to their raw subtree even without fault tolerance."""
    raw = tree_map(("id", leaf("mod:stick")), ("count", leaf(1)))
    placeholder = MissingContent(raw=raw, diagnostic="Unknown record type 'mod:stick'")

    assert DispatchRecordCodec(sample_registry()).encode(placeholder) == raw


def test_dispatch_refuses_to_encode_unregistered_type() -> None:
    """Encoding a record the registry does not know is a programming error."""
    with pytest.raises(StowageRegistryError):
        DispatchRecordCodec(sample_registry()).encode(ItemStack("mod:stick"))


def test_optional_codec_maps_empty_slot_to_empty_map() -> None:
    """None should round trip through an empty map."""
    codec = OptionalRecordCodec(DispatchRecordCodec(sample_registry()))

    assert codec.encode(None) == TreeMap() and codec.decode(TreeMap()) is None
