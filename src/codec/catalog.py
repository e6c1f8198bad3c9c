"""Record type catalog loading.

This module loads and validates YAML catalogs naming the item types and
recipes installed in the current environment, then builds a frozen
registry from them. The catalog contents are owned by whoever installs
content; this module only checks their shape.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from pathlib import Path
from typing import Mapping, Sequence, cast

from codec.item_codecs import CraftingPatternCodec, DispatchRecordCodec, SimpleItemCodec
from codec.registry import RecordTypeRegistry
from core.constants import CATALOG_VERSION, CRAFTING_PATTERN_ID, MISSING_CONTENT_ID
from core.errors import StowageCatalogError, StowageDependencyError

_TYPE_ID_PATTERN = re.compile(r"^[a-z0-9_.-]+:[a-z0-9_./-]+$")
_RESERVED_IDS = (CRAFTING_PATTERN_ID, MISSING_CONTENT_ID)


@dataclass(frozen=True)
class RecordCatalog:
    """Validated catalog root object."""

    version: int
    items: tuple[str, ...]
    recipes: tuple[str, ...] = ()


def load_catalog(catalog_path: str | Path) -> RecordCatalog:
    """Load and validate a YAML catalog from disk.

    Args:
        catalog_path: File path to the YAML catalog.

    Returns:
        Fully validated catalog.

    Raises:
        StowageDependencyError: If PyYAML is unavailable.
        StowageCatalogError: If the file is invalid or schema checks fail.
    """
    payload = _load_yaml_payload(catalog_path)
    root_mapping = _expect_mapping(payload, "catalog root")
    _validate_root_keys(root_mapping)
    version = _parse_version(root_mapping)
    items = _parse_ids(root_mapping, "items", required=True)
    recipes = _parse_ids(root_mapping, "recipes", required=False)
    return RecordCatalog(version=version, items=items, recipes=recipes)


def build_registry(catalog: RecordCatalog) -> RecordTypeRegistry:
    """Register every catalog entry and freeze the registry."""
    registry = RecordTypeRegistry()
    for type_id in catalog.items:
        registry.register(type_id, SimpleItemCodec(type_id))
    registry.register(
        CRAFTING_PATTERN_ID,
        CraftingPatternCodec(CRAFTING_PATTERN_ID, DispatchRecordCodec(registry)),
    )
    for recipe_id in catalog.recipes:
        registry.register_recipe(recipe_id)
    registry.freeze()
    return registry


def _load_yaml_payload(catalog_path: str | Path) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise StowageDependencyError(
            "YAML catalog support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    catalog_file = Path(catalog_path).expanduser().resolve()
    if not catalog_file.exists():
        raise StowageCatalogError(
            f"Catalog file does not exist at {catalog_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(catalog_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise StowageCatalogError(
            f"Failed to read catalog at {catalog_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise StowageCatalogError(
            f"Failed to parse YAML catalog at {catalog_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise StowageCatalogError(
            f"Catalog at {catalog_file} is empty. Define 'version' and 'items'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        return value
    raise StowageCatalogError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise StowageCatalogError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise StowageCatalogError(
            f"Catalog field 'version' must be an integer. Set version: {CATALOG_VERSION}."
        )
    if raw_version != CATALOG_VERSION:
        raise StowageCatalogError(
            f"Unsupported catalog version {raw_version}. Use version: {CATALOG_VERSION}."
        )
    return raw_version


def _parse_ids(
    root_mapping: Mapping[str, object],
    field_name: str,
    required: bool,
) -> tuple[str, ...]:
    raw_ids = root_mapping.get(field_name)
    if raw_ids is None:
        if required:
            raise StowageCatalogError(
                f"Catalog missing required field '{field_name}'. Add a list of type ids."
            )
        return ()
    parsed_ids: list[str] = []
    for index, raw_id in enumerate(_expect_sequence(raw_ids, f"catalog {field_name}")):
        context = f"catalog {field_name} entry #{index + 1}"
        if not isinstance(raw_id, str) or not _TYPE_ID_PATTERN.match(raw_id):
            raise StowageCatalogError(
                f"Invalid {context}: expected 'namespace:path' id, got {raw_id!r}."
            )
        if raw_id in _RESERVED_IDS:
            raise StowageCatalogError(f"Invalid {context}: '{raw_id}' is a reserved id.")
        if raw_id in parsed_ids:
            raise StowageCatalogError(f"Invalid {context}: duplicate id '{raw_id}'.")
        parsed_ids.append(raw_id)
    return tuple(parsed_ids)


def _validate_root_keys(root_mapping: Mapping[str, object]) -> None:
    allowed_keys = {"version", "items", "recipes"}
    unknown_keys = sorted(str(key) for key in root_mapping if key not in allowed_keys)
    if unknown_keys:
        raise StowageCatalogError(
            f"Catalog contains unknown root fields: {', '.join(unknown_keys)}."
        )
