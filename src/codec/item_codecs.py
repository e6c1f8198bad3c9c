"""Concrete strict codecs for stackable records.

Every record encodes to a map whose first two fields are ``id`` and
``count``, followed by type-specific fields and, when non-empty, the
``components`` map of attached metadata. ``DispatchRecordCodec`` reads
the ``id`` field and hands the tree to the registered codec.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from codec.record_codec import (
    RecordCodec,
    check_layout,
    read_bool,
    read_list,
    read_optional_map,
    read_positive_int,
    read_required,
    read_string,
    require_map,
)
from codec.registry import RecordTypeRegistry
from core.constants import (
    PATTERN_INPUTS_FIELD,
    PATTERN_RECIPE_FIELD,
    PATTERN_RESULT_FIELD,
    PATTERN_SUBSTITUTE_FIELD,
    PATTERN_SUBSTITUTE_FLUIDS_FIELD,
    RECORD_COMPONENTS_FIELD,
    RECORD_COUNT_FIELD,
    RECORD_ID_FIELD,
)
from core.errors import MalformedFieldError, StowageRegistryError, UnknownTypeError
from core.types import AnyRecord, CraftingPattern, ItemStack, MissingContent
from core.value_tree import EMPTY_MAP, TreeList, TreeMap, ValueTree, leaf

T = TypeVar("T")

ITEM_FIELDS = (RECORD_ID_FIELD, RECORD_COUNT_FIELD, RECORD_COMPONENTS_FIELD)
PATTERN_FIELDS = (
    RECORD_ID_FIELD,
    RECORD_COUNT_FIELD,
    PATTERN_INPUTS_FIELD,
    PATTERN_RESULT_FIELD,
    PATTERN_RECIPE_FIELD,
    PATTERN_SUBSTITUTE_FIELD,
    PATTERN_SUBSTITUTE_FLUIDS_FIELD,
    RECORD_COMPONENTS_FIELD,
)


class SimpleItemCodec:
    """Codec for plain item stacks of one type id."""

    def __init__(self, type_id: str) -> None:
        self._type_id = type_id

    def encode(self, value: ItemStack) -> ValueTree:
        entries: list[tuple[str, ValueTree]] = [
            (RECORD_ID_FIELD, leaf(value.type_id)),
            (RECORD_COUNT_FIELD, leaf(value.count)),
        ]
        return _with_components(entries, value.components)

    def decode(self, tree: ValueTree) -> ItemStack:
        record_map = require_map(tree)
        type_id = _read_own_id(record_map, self._type_id)
        count = read_positive_int(record_map, RECORD_COUNT_FIELD)
        components = read_optional_map(record_map, RECORD_COMPONENTS_FIELD)
        check_layout(record_map, ITEM_FIELDS, optional=(RECORD_COMPONENTS_FIELD,))
        return ItemStack(type_id=type_id, count=count, components=components or EMPTY_MAP)


class CraftingPatternCodec:
    """Codec for crafting patterns whose stacks nest inside the record.

    Nested stacks go through a strict item codec, so a pattern that
    references a missing item fails as a whole.
    """

    def __init__(self, type_id: str, item_codec: RecordCodec[Any]) -> None:
        self._type_id = type_id
        self._item_codec = item_codec

    def encode(self, value: CraftingPattern) -> ValueTree:
        entries: list[tuple[str, ValueTree]] = [
            (RECORD_ID_FIELD, leaf(value.type_id)),
            (RECORD_COUNT_FIELD, leaf(value.count)),
            (
                PATTERN_INPUTS_FIELD,
                TreeList(tuple(self._item_codec.encode(stack) for stack in value.inputs)),
            ),
            (PATTERN_RESULT_FIELD, self._item_codec.encode(value.result)),
            (PATTERN_RECIPE_FIELD, leaf(value.recipe_id)),
            (PATTERN_SUBSTITUTE_FIELD, leaf(value.can_substitute)),
            (PATTERN_SUBSTITUTE_FLUIDS_FIELD, leaf(value.can_substitute_fluids)),
        ]
        return _with_components(entries, value.components)

    def decode(self, tree: ValueTree) -> CraftingPattern:
        record_map = require_map(tree)
        _read_own_id(record_map, self._type_id)
        count = read_positive_int(record_map, RECORD_COUNT_FIELD)
        inputs = tuple(
            self._decode_stack(item, PATTERN_INPUTS_FIELD)
            for item in read_list(record_map, PATTERN_INPUTS_FIELD)
        )
        result = self._decode_stack(
            read_required(record_map, PATTERN_RESULT_FIELD), PATTERN_RESULT_FIELD
        )
        recipe_id = read_string(record_map, PATTERN_RECIPE_FIELD)
        can_substitute = read_bool(record_map, PATTERN_SUBSTITUTE_FIELD)
        can_substitute_fluids = read_bool(record_map, PATTERN_SUBSTITUTE_FLUIDS_FIELD)
        components = read_optional_map(record_map, RECORD_COMPONENTS_FIELD)
        check_layout(record_map, PATTERN_FIELDS, optional=(RECORD_COMPONENTS_FIELD,))
        return CraftingPattern(
            inputs=inputs,
            result=result,
            recipe_id=recipe_id,
            can_substitute=can_substitute,
            can_substitute_fluids=can_substitute_fluids,
            count=count,
            components=components or EMPTY_MAP,
        )

    def _decode_stack(self, tree: ValueTree, field_name: str) -> ItemStack:
        stack = self._item_codec.decode(tree)
        if not isinstance(stack, ItemStack):
            raise MalformedFieldError(field_name, f"expected item stack, got '{stack.type_id}'")
        return stack


class DispatchRecordCodec:
    """Type-id keyed codec backed by a record type registry."""

    def __init__(self, registry: RecordTypeRegistry) -> None:
        self._registry = registry

    def encode(self, value: AnyRecord) -> ValueTree:
        if isinstance(value, MissingContent):
            return value.raw
        codec = self._registry.get(value.type_id)
        if codec is None:
            raise StowageRegistryError(
                f"Cannot encode record of unregistered type '{value.type_id}'."
            )
        return codec.encode(value)

    def decode(self, tree: ValueTree) -> AnyRecord:
        record_map = require_map(tree)
        type_id = read_string(record_map, RECORD_ID_FIELD)
        codec = self._registry.get(type_id)
        if codec is None:
            raise UnknownTypeError(type_id)
        return codec.decode(record_map)


class OptionalRecordCodec(Generic[T]):
    """Codec that maps empty slots to an empty map.

    ``None`` encodes to an empty map and an empty map decodes to ``None``;
    anything else goes to the wrapped codec.
    """

    def __init__(self, inner: RecordCodec[T]) -> None:
        self._inner = inner

    def encode(self, value: T | None) -> ValueTree:
        if value is None:
            return EMPTY_MAP
        return self._inner.encode(value)

    def decode(self, tree: ValueTree) -> T | None:
        if isinstance(tree, TreeMap) and len(tree) == 0:
            return None
        return self._inner.decode(tree)


def _read_own_id(record_map: TreeMap, expected_id: str) -> str:
    type_id = read_string(record_map, RECORD_ID_FIELD)
    if type_id != expected_id:
        raise MalformedFieldError(
            RECORD_ID_FIELD, f"expected '{expected_id}', got '{type_id}'"
        )
    return type_id


def _with_components(entries: list[tuple[str, ValueTree]], components: TreeMap) -> TreeMap:
    if len(components) > 0:
        entries.append((RECORD_COMPONENTS_FIELD, components))
    return TreeMap(tuple(entries))
