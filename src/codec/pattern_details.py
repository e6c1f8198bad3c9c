"""Crafting pattern resolution.

A pattern whose recipe id no longer resolves stays a valid stored record,
it just cannot be used for crafting until the recipe returns.
"""

from __future__ import annotations

from codec.registry import RecordTypeRegistry
from core.logging_config import get_logger
from core.types import CraftingPattern, PatternDetails

_LOGGER = get_logger(__name__)


def resolve_pattern(record: object, registry: RecordTypeRegistry) -> PatternDetails | None:
    """Resolve a stored record into usable pattern details.

    Args:
        record: Any decoded record, placeholders included.
        registry: Registry holding the known recipe ids.

    Returns:
        Pattern details, or None when record is not a pattern or its
        recipe is unknown.
    """
    if not isinstance(record, CraftingPattern):
        return None
    if not registry.has_recipe(record.recipe_id):
        _LOGGER.warning("pattern_recipe_unresolved", recipe_id=record.recipe_id)
        return None
    return PatternDetails(
        recipe_id=record.recipe_id,
        inputs=record.inputs,
        result=record.result,
        can_substitute=record.can_substitute,
        can_substitute_fluids=record.can_substitute_fluids,
    )
