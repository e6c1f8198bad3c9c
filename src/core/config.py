"""Runtime configuration model for Stowage.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_DATA_ROOT, DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS
from core.errors import StowageConfigError


@dataclass(frozen=True)
class StowageConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for save files.
        catalog_path: Optional YAML record type catalog path.
        log_level: Minimum structured log level.
    """

    data_root: Path
    catalog_path: Path | None
    log_level: str

    @classmethod
    def from_env(cls) -> "StowageConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            StowageConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("STOWAGE_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        catalog_value = os.getenv("STOWAGE_CATALOG_PATH")
        log_level = _parse_log_level(os.getenv("STOWAGE_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            catalog_path=Path(catalog_value).expanduser().resolve() if catalog_value else None,
            log_level=log_level,
        )


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized lowercase level name.

    Raises:
        StowageConfigError: If value is not a supported level.
    """
    normalized_value = raw_value.strip().lower()
    if normalized_value in SUPPORTED_LOG_LEVELS:
        return normalized_value
    supported_rows = ", ".join(SUPPORTED_LOG_LEVELS)
    raise StowageConfigError(
        "Invalid STOWAGE_LOG_LEVEL value: "
        f"expected one of {supported_rows}, got '{raw_value}'. "
        "Set STOWAGE_LOG_LEVEL to a supported level."
    )
