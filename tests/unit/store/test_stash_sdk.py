"""Unit tests for the SDK client."""

from __future__ import annotations

from dataclasses import replace

import pytest

from codec.catalog import load_catalog
from core.logging_config import configure_logging, get_logger
from core.config import StowageConfig
from core.types import ItemStack, MissingContent
from store.stash_sdk import StowageClient
from tests.fixture_paths import catalog_fixture
from tests.record_samples import named_stick


def _client(tmp_path, catalog_name: str) -> StowageClient:
    config = replace(
        StowageConfig.from_env(),
        data_root=tmp_path,
        catalog_path=catalog_fixture(catalog_name),
    )
    return StowageClient(config)


def test_client_loads_configured_catalog(tmp_path) -> None:
    """The client should build its registry from the configured catalog."""
    client = _client(tmp_path, "valid_catalog")

    assert "base:diamond" in client.registry


def test_client_accepts_explicit_catalog(tmp_path) -> None:
    """An explicit catalog overrides the configured path."""
    config = replace(StowageConfig.from_env(), data_root=tmp_path, catalog_path=None)
    client = StowageClient(config, catalog=load_catalog(catalog_fixture("without_diamond")))

    assert "base:diamond" not in client.registry


def test_client_without_catalog_turns_items_into_placeholders(tmp_path) -> None:
    """With no catalog, every item is unknown but nothing is lost."""
    full_client = _client(tmp_path, "valid_catalog")
    tree = full_client.encode(named_stick())
    config = replace(StowageConfig.from_env(), data_root=tmp_path, catalog_path=None)
    bare_client = StowageClient(config)

    decoded = bare_client.decode(tree)

    assert isinstance(decoded, MissingContent) and bare_client.encode(decoded) == tree


def test_slots_keep_empty_positions(tmp_path) -> None:
    """Empty slots round trip through saves."""
    client = _client(tmp_path, "valid_catalog")
    client.save("inventory", [ItemStack("base:stick"), None, ItemStack("base:diamond")])

    records, _ = client.load("inventory")

    assert records == (ItemStack("base:stick"), None, ItemStack("base:diamond"))


def test_resave_with_missing_type_is_unchanged(tmp_path) -> None:
    """Resaving with a type missing must write back the same tree."""
    _client(tmp_path, "valid_catalog").save("inventory", [named_stick(), ItemStack("base:diamond")])

    result = _client(tmp_path, "without_diamond").resave("inventory")

    assert result.unchanged and [index for index, _ in result.report.missing] == [1]


@pytest.fixture
def default_logging():
    yield
    configure_logging()


def test_client_applies_configured_log_level(tmp_path, capsys, default_logging) -> None:
    """The client should filter logs at its config's level."""
    config = replace(StowageConfig.from_env(), data_root=tmp_path, log_level="error")

    StowageClient(config)
    get_logger("stowage.tests").warning("filtered_event")

    assert "filtered_event" not in capsys.readouterr().err
