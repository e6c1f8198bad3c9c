"""Missing content placeholder helpers.

A ``MissingContent`` record holds the untouched subtree that failed to
decode together with the failure reason. It is inert: it never turns back
into the original record on its own. Callers that have reinstalled the
missing type retry with ``retry_decode``.
"""

from __future__ import annotations

from typing import Any, Iterable

from codec.record_codec import RecordCodec
from core.constants import RECORD_ID_FIELD
from core.types import MissingContent
from core.value_tree import LeafKind, TreeLeaf, TreeMap, ValueTree


def make_missing_content(raw: ValueTree, diagnostic: str) -> MissingContent:
    """Default placeholder factory for fault-tolerant codecs."""
    return MissingContent(raw=raw, diagnostic=diagnostic)


def referenced_type_id(raw: ValueTree) -> str | None:
    """Return the type id a raw record tree refers to, if readable.

    Args:
        raw: Raw record subtree.

    Returns:
        The string ``id`` field, or None for trees without one.
    """
    if not isinstance(raw, TreeMap):
        return None
    type_leaf = raw.get(RECORD_ID_FIELD)
    if isinstance(type_leaf, TreeLeaf) and type_leaf.kind is LeafKind.STRING:
        return str(type_leaf.value)
    return None


def collect_missing(records: Iterable[object]) -> tuple[tuple[int, str], ...]:
    """Return index and diagnostic for each placeholder in a sequence."""
    return tuple(
        (index, record.diagnostic)
        for index, record in enumerate(records)
        if isinstance(record, MissingContent)
    )


def retry_decode(placeholder: MissingContent, codec: RecordCodec[Any]) -> Any:
    """Decode a placeholder's raw tree again with a current codec.

    Args:
        placeholder: Placeholder produced by an earlier failed decode.
        codec: Codec backed by the current registry.

    Returns:
        Whatever the codec yields; a fault-tolerant codec returns a new
        placeholder when the type is still missing.
    """
    return codec.decode(placeholder.raw)
