"""Shared typed models.

This module defines the immutable record models that codecs encode
and decode, plus the small value objects used by stores and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Union

from core.constants import CRAFTING_PATTERN_ID, MISSING_CONTENT_ID
from core.value_tree import EMPTY_MAP, TreeMap, ValueTree


class Record(Protocol):
    """Minimal shape every persisted record exposes."""

    @property
    def type_id(self) -> str: ...

    @property
    def count(self) -> int: ...

    @property
    def components(self) -> TreeMap: ...


@dataclass(frozen=True)
class ItemStack:
    """Stackable item record.

    Attributes:
        type_id: Registered item type id, e.g. ``base:stick``.
        count: Positive stack size.
        components: Auxiliary attached metadata keyed by component id.
    """

    type_id: str
    count: int = 1
    components: TreeMap = EMPTY_MAP


@dataclass(frozen=True)
class CraftingPattern:
    """Encoded crafting pattern record.

    Attributes:
        inputs: Ordered ingredient stacks.
        result: Output stack.
        recipe_id: Recipe the pattern was encoded from.
        can_substitute: Whether equivalent items may replace inputs.
        can_substitute_fluids: Whether fluid containers may replace inputs.
        count: Positive stack size.
        components: Auxiliary attached metadata.
    """

    inputs: tuple[ItemStack, ...]
    result: ItemStack
    recipe_id: str
    can_substitute: bool = False
    can_substitute_fluids: bool = False
    count: int = 1
    components: TreeMap = EMPTY_MAP
    type_id: str = field(default=CRAFTING_PATTERN_ID, init=False)


@dataclass(frozen=True)
class MissingContent:
    """Placeholder for a record whose strict decode failed.

    Attributes:
        raw: The exact subtree that failed to decode, stored unmodified.
        diagnostic: Human-readable failure reason.
    """

    raw: ValueTree
    diagnostic: str
    type_id: str = field(default=MISSING_CONTENT_ID, init=False)
    count: int = field(default=1, init=False)
    components: TreeMap = field(default=EMPTY_MAP, init=False, compare=False)


AnyRecord = Union[ItemStack, CraftingPattern, MissingContent]


@dataclass(frozen=True)
class PatternDetails:
    """Resolved crafting pattern ready for use by a crafting planner.

    Attributes:
        recipe_id: Resolved recipe id.
        inputs: Ordered ingredient stacks.
        result: Output stack.
        can_substitute: Whether equivalent items may replace inputs.
        can_substitute_fluids: Whether fluid containers may replace inputs.
    """

    recipe_id: str
    inputs: tuple[ItemStack, ...]
    result: ItemStack
    can_substitute: bool
    can_substitute_fluids: bool


@dataclass(frozen=True)
class LoadReport:
    """Summary of a fault-tolerant collection load.

    Attributes:
        record_count: Number of records loaded, placeholders included.
        missing: Index and diagnostic for each placeholder, in order.
    """

    record_count: int
    missing: tuple[tuple[int, str], ...] = ()

    @property
    def is_complete(self) -> bool:
        return not self.missing
