"""Named record collection persistence.

This module saves and restores ordered record collections (inventories,
pattern storage) under the data root. Collections always go through the
fault-tolerant list codec, so a missing type costs one placeholder slot
and never the rest of the collection.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Sequence

from codec.fault_tolerant import FaultTolerantListCodec
from codec.missing_content import collect_missing
from core.config import StowageConfig
from core.constants import SAVE_FILE_SUFFIX, SAVES_DIR_NAME
from core.errors import StowageStoreError, ValueTreeError
from core.logging_config import get_logger
from core.types import LoadReport
from store.tree_file import read_tree_file, write_tree_file

_LOGGER = get_logger(__name__)
_SAVE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class RecordStore:
    """Filesystem-backed store for named record collections."""

    def __init__(self, config: StowageConfig, codec: FaultTolerantListCodec[Any]) -> None:
        self._saves_dir = config.data_root / SAVES_DIR_NAME
        self._codec = codec

    def save(self, name: str, records: Sequence[Any]) -> Path:
        """Persist a record collection.

        Args:
            name: Collection name.
            records: Records in slot order, placeholders included.

        Returns:
            Path of the written save file.
        """
        save_path = self.save_path(name)
        write_tree_file(save_path, self._codec.encode(records))
        _LOGGER.info("records_saved", name=name, record_count=len(records))
        return save_path

    def load(self, name: str) -> tuple[tuple[Any, ...], LoadReport]:
        """Restore a record collection.

        Args:
            name: Collection name.

        Returns:
            Records in slot order and a report of placeholder slots.

        Raises:
            StowageStoreError: If the save file is missing or not a list tree.
        """
        save_path = self.save_path(name)
        tree = read_tree_file(save_path)
        try:
            records = self._codec.decode(tree)
        except ValueTreeError as error:
            raise StowageStoreError(
                f"Save file at {save_path} does not hold a record list: {error}"
            ) from error
        report = LoadReport(record_count=len(records), missing=collect_missing(records))
        _LOGGER.info(
            "records_loaded",
            name=name,
            record_count=report.record_count,
            missing_count=len(report.missing),
        )
        return records, report

    def list_saves(self) -> list[str]:
        """Return collection names in sorted order."""
        if not self._saves_dir.exists():
            return []
        return sorted(path.stem for path in self._saves_dir.glob(f"*{SAVE_FILE_SUFFIX}"))

    def save_path(self, name: str) -> Path:
        if not _SAVE_NAME_PATTERN.match(name):
            raise StowageStoreError(
                f"Invalid save name '{name}'. Use letters, digits, '.', '_' or '-'."
            )
        return self._saves_dir / f"{name}{SAVE_FILE_SUFFIX}"
