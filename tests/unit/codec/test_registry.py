"""Unit tests for the record type registry."""

from __future__ import annotations

import pytest

from codec.item_codecs import SimpleItemCodec
from codec.registry import RecordTypeRegistry
from core.constants import CRAFTING_PATTERN_ID, MISSING_CONTENT_ID
from core.errors import StowageRegistryError
from tests.record_samples import BASE_ITEMS, OAK_RECIPE, sample_registry


def test_register_and_lookup() -> None:
    """Registered codecs should be returned by type id."""
    registry = RecordTypeRegistry()
    codec = SimpleItemCodec("base:stick")
    registry.register("base:stick", codec)

    assert registry.get("base:stick") is codec and "base:stick" in registry


def test_lookup_of_unknown_type_returns_none() -> None:
    """Unknown ids resolve to nothing."""
    assert RecordTypeRegistry().get("mod:stick") is None


def test_duplicate_registration_raises() -> None:
    """Each type id may be registered once."""
    registry = RecordTypeRegistry()
    registry.register("base:stick", SimpleItemCodec("base:stick"))

    with pytest.raises(StowageRegistryError):
        registry.register("base:stick", SimpleItemCodec("base:stick"))


def test_placeholder_id_is_reserved() -> None:
    """The placeholder type id cannot be claimed by content."""
    with pytest.raises(StowageRegistryError):
        RecordTypeRegistry().register(MISSING_CONTENT_ID, SimpleItemCodec(MISSING_CONTENT_ID))


def test_frozen_registry_rejects_registration() -> None:
    """Registration closes once decoding may begin."""
    registry = RecordTypeRegistry()
    registry.freeze()

    with pytest.raises(StowageRegistryError):
        registry.register_recipe(OAK_RECIPE)


def test_sample_registry_lists_types_in_registration_order() -> None:
    """Catalog items come first, then the pattern type."""
    registry = sample_registry()

    assert registry.type_ids() == BASE_ITEMS + (CRAFTING_PATTERN_ID,)
    assert registry.is_frozen and registry.has_recipe(OAK_RECIPE)
