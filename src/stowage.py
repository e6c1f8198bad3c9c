"""Public SDK surface for Stowage.

This module provides a stable import path for library users.
It re-exports the client, codecs, and typed record models.
"""

from __future__ import annotations

from codec.catalog import RecordCatalog, build_registry, load_catalog
from codec.fault_tolerant import (
    FaultTolerantListCodec,
    FaultTolerantRecordCodec,
    PlainListCodec,
    fault_tolerant,
    list_of,
)
from codec.item_codecs import (
    CraftingPatternCodec,
    DispatchRecordCodec,
    OptionalRecordCodec,
    SimpleItemCodec,
)
from codec.pattern_details import resolve_pattern
from codec.registry import RecordTypeRegistry
from core.config import StowageConfig
from core.types import CraftingPattern, ItemStack, LoadReport, MissingContent, PatternDetails
from core.value_tree import TreeLeaf, TreeList, TreeMap, ValueTree, from_python, to_python
from settings.config_manager import ConfigManager, Setting
from store.stash_sdk import StowageClient

__all__ = [
    "ConfigManager",
    "CraftingPattern",
    "CraftingPatternCodec",
    "DispatchRecordCodec",
    "FaultTolerantListCodec",
    "FaultTolerantRecordCodec",
    "ItemStack",
    "LoadReport",
    "MissingContent",
    "OptionalRecordCodec",
    "PatternDetails",
    "PlainListCodec",
    "RecordCatalog",
    "RecordTypeRegistry",
    "Setting",
    "SimpleItemCodec",
    "StowageClient",
    "StowageConfig",
    "TreeLeaf",
    "TreeList",
    "TreeMap",
    "ValueTree",
    "build_registry",
    "fault_tolerant",
    "from_python",
    "list_of",
    "load_catalog",
    "resolve_pattern",
    "to_python",
]
