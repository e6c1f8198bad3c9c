"""Core constants used across Stowage modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".stowage")
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
SAVES_DIR_NAME = "saves"
SAVE_FILE_SUFFIX = ".json"
CATALOG_VERSION = 1

RECORD_ID_FIELD = "id"
RECORD_COUNT_FIELD = "count"
RECORD_COMPONENTS_FIELD = "components"

PATTERN_INPUTS_FIELD = "inputs"
PATTERN_RESULT_FIELD = "result"
PATTERN_RECIPE_FIELD = "recipe"
PATTERN_SUBSTITUTE_FIELD = "can_substitute"
PATTERN_SUBSTITUTE_FLUIDS_FIELD = "can_substitute_fluids"

CRAFTING_PATTERN_ID = "stowage:crafting_pattern"
MISSING_CONTENT_ID = "stowage:missing_content"
