"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import StowageConfig
from core.errors import StowageConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("STOWAGE_DATA_ROOT", "./.tmp-stowage")

    config = StowageConfig.from_env()

    assert config.data_root.name == ".tmp-stowage"


def test_from_env_catalog_path_defaults_to_none(monkeypatch: pytest.MonkeyPatch) -> None:
    """Catalog path should be optional."""
    monkeypatch.delenv("STOWAGE_CATALOG_PATH", raising=False)

    config = StowageConfig.from_env()

    assert config.catalog_path is None


def test_from_env_normalizes_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Log level should be case-insensitive."""
    monkeypatch.setenv("STOWAGE_LOG_LEVEL", " WARNING ")

    config = StowageConfig.from_env()

    assert config.log_level == "warning"


def test_from_env_raises_for_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unknown log levels."""
    monkeypatch.setenv("STOWAGE_LOG_LEVEL", "chatty")

    with pytest.raises(StowageConfigError):
        StowageConfig.from_env()
