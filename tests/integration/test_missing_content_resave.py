"""Integration test for saves surviving a temporarily missing content package."""

from __future__ import annotations

from dataclasses import replace

from codec.catalog import RecordCatalog
from codec.pattern_details import resolve_pattern
from core.config import StowageConfig
from core.types import ItemStack, MissingContent
from store.stash_sdk import StowageClient
from tests.record_samples import BASE_ITEMS, OAK_RECIPE, named_stick, oak_pattern


def _client(tmp_path, items: tuple[str, ...]) -> StowageClient:
    config = replace(StowageConfig.from_env(), data_root=tmp_path, catalog_path=None)
    catalog = RecordCatalog(version=1, items=items, recipes=(OAK_RECIPE,))
    return StowageClient(config, catalog=catalog)


def test_uninstall_resave_reinstall_restores_every_record(tmp_path) -> None:
    """Records survive a load/save cycle while their types are missing."""
    original = (named_stick(), oak_pattern(), None, ItemStack("base:diamond", count=64))
    full_client = _client(tmp_path, BASE_ITEMS)
    save_path = full_client.save("base", original)
    original_text = save_path.read_text(encoding="utf-8")

    reduced_client = _client(tmp_path, ("base:stick", "base:oak_planks"))
    reduced_records, report = reduced_client.load("base")
    reduced_client.save("base", reduced_records)

    restored, restored_report = full_client.load("base")

    assert [index for index, _ in report.missing] == [1, 3]
    assert isinstance(reduced_records[1], MissingContent)
    assert reduced_records[0] == named_stick() and reduced_records[2] is None
    assert save_path.read_text(encoding="utf-8") == original_text
    assert restored == original and restored_report.is_complete
    assert resolve_pattern(restored[1], full_client.registry) is not None
