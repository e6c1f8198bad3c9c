"""Python SDK for record persistence.

This module wires the catalog, registry, fault-tolerant codecs and the
record store behind one client object.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from codec.catalog import RecordCatalog, build_registry, load_catalog
from codec.fault_tolerant import FaultTolerantListCodec, FaultTolerantRecordCodec
from codec.item_codecs import DispatchRecordCodec, OptionalRecordCodec
from codec.registry import RecordTypeRegistry
from core.config import StowageConfig
from core.constants import CATALOG_VERSION
from core.logging_config import configure_logging
from core.types import AnyRecord, LoadReport
from core.value_tree import ValueTree
from store.record_store import RecordStore
from store.tree_file import read_tree_file


@dataclass(frozen=True)
class ResaveResult:
    """Outcome of loading and writing back one save.

    Attributes:
        save_path: Rewritten save file.
        report: Placeholder report from the load.
        unchanged: Whether the rewritten tree equals the original.
    """

    save_path: Path
    report: LoadReport
    unchanged: bool


class StowageClient:
    """Primary SDK entry point for saving and restoring records."""

    def __init__(
        self,
        config: StowageConfig | None = None,
        catalog: RecordCatalog | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            catalog: Optional catalog; loaded from config.catalog_path when omitted.

        Raises:
            StowageConfigError: If config comes from invalid environment values.
            StowageCatalogError: If the configured catalog is invalid.
        """
        self._config = config or StowageConfig.from_env()
        configure_logging(self._config.log_level)
        self._registry = build_registry(catalog or _load_configured_catalog(self._config))
        self._record_codec = FaultTolerantRecordCodec(DispatchRecordCodec(self._registry))
        self._slot_codec = FaultTolerantRecordCodec(
            OptionalRecordCodec(DispatchRecordCodec(self._registry))
        )
        self._list_codec = FaultTolerantListCodec(self._slot_codec)
        self._store = RecordStore(self._config, self._list_codec)

    @property
    def registry(self) -> RecordTypeRegistry:
        return self._registry

    @property
    def record_codec(self) -> FaultTolerantRecordCodec[AnyRecord]:
        """Fault-tolerant codec for single records."""
        return self._record_codec

    @property
    def list_codec(self) -> FaultTolerantListCodec[AnyRecord | None]:
        """Fault-tolerant codec for slot lists; empty slots decode to None."""
        return self._list_codec

    def encode(self, record: AnyRecord) -> ValueTree:
        return self._record_codec.encode(record)

    def decode(self, tree: ValueTree) -> AnyRecord:
        return self._record_codec.decode(tree)

    def save(self, name: str, records: Sequence[Any]) -> Path:
        """Persist records in slot order.

        Args:
            name: Save name.
            records: Records, placeholders, or None for empty slots.

        Returns:
            Written save file path.
        """
        return self._store.save(name, records)

    def load(self, name: str) -> tuple[tuple[Any, ...], LoadReport]:
        """Restore records in slot order.

        Raises:
            StowageStoreError: If the save file is unreadable.
        """
        return self._store.load(name)

    def resave(self, name: str) -> ResaveResult:
        """Load a save and write it back through the fault-tolerant codec."""
        save_path = self._store.save_path(name)
        original_tree = read_tree_file(save_path)
        records, report = self._store.load(name)
        self._store.save(name, records)
        return ResaveResult(
            save_path=save_path,
            report=report,
            unchanged=read_tree_file(save_path) == original_tree,
        )

    def list_saves(self) -> list[str]:
        return self._store.list_saves()


def _load_configured_catalog(config: StowageConfig) -> RecordCatalog:
    if config.catalog_path is None:
        return RecordCatalog(version=CATALOG_VERSION, items=())
    return load_catalog(config.catalog_path)
