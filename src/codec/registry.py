"""Record type registry.

Owning subsystems register one strict codec per type id at startup, then
freeze the registry. After freezing it is only read, so any number of
threads may share it without locking.
"""

from __future__ import annotations

from typing import Any

from codec.record_codec import RecordCodec
from core.constants import MISSING_CONTENT_ID
from core.errors import StowageRegistryError


class RecordTypeRegistry:
    """Mapping from type id to strict record codec."""

    def __init__(self) -> None:
        self._codecs: dict[str, RecordCodec[Any]] = {}
        self._recipes: set[str] = set()
        self._frozen = False

    def register(self, type_id: str, codec: RecordCodec[Any]) -> None:
        """Register the codec for one type id.

        Raises:
            StowageRegistryError: If frozen, reserved, or already registered.
        """
        self._check_open(f"record type '{type_id}'")
        if type_id == MISSING_CONTENT_ID:
            raise StowageRegistryError(
                f"Type id '{MISSING_CONTENT_ID}' is reserved for missing content placeholders."
            )
        if type_id in self._codecs:
            raise StowageRegistryError(f"Record type '{type_id}' is already registered.")
        self._codecs[type_id] = codec

    def register_recipe(self, recipe_id: str) -> None:
        self._check_open(f"recipe '{recipe_id}'")
        self._recipes.add(recipe_id)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def get(self, type_id: str) -> RecordCodec[Any] | None:
        return self._codecs.get(type_id)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._codecs

    def type_ids(self) -> tuple[str, ...]:
        """Return registered type ids in registration order."""
        return tuple(self._codecs)

    def has_recipe(self, recipe_id: str) -> bool:
        return recipe_id in self._recipes

    def _check_open(self, subject: str) -> None:
        if self._frozen:
            raise StowageRegistryError(
                f"Cannot register {subject}: registry is frozen. "
                "Register all types before decoding begins."
            )
