"""Stowage exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Strict record codecs raise decode errors; the fault-tolerant layer
is the only sanctioned place that absorbs them.
"""

from __future__ import annotations


class StowageError(Exception):
    """Base exception for all Stowage failures."""


class StowageConfigError(StowageError):
    """Raised for invalid runtime configuration."""


class StowageStoreError(StowageError):
    """Raised for save file read and write failures."""


class StowageCatalogError(StowageError):
    """Raised for invalid or unreadable record type catalogs."""


class StowageRegistryError(StowageError):
    """Raised for invalid record type registration."""


class StowageDependencyError(StowageError):
    """Raised when an optional runtime dependency is missing."""


class UnsupportedSettingError(StowageError):
    """Raised when a setting is not registered with a config manager."""


class ValueTreeError(StowageError):
    """Raised when input is not a structurally valid value tree.

    This is the one fatal codec failure. It is surfaced to the
    persistence layer, which owns file-level recovery policy.
    """


class RecordDecodeError(StowageError):
    """Base class for recoverable strict decode failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownTypeError(RecordDecodeError):
    """Raised when a type id does not resolve to a registered codec."""

    def __init__(self, type_id: str) -> None:
        super().__init__(f"Unknown record type '{type_id}'")
        self.type_id = type_id


class MalformedFieldError(RecordDecodeError):
    """Raised when a field exists but has the wrong shape."""

    def __init__(self, field_name: str, detail: str) -> None:
        super().__init__(f"Malformed field '{field_name}': {detail}")
        self.field_name = field_name


class MissingRequiredFieldError(RecordDecodeError):
    """Raised when a mandatory field is absent."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Missing required field '{field_name}'")
        self.field_name = field_name
