"""Fault-tolerant record and list codecs.

``FaultTolerantRecordCodec`` never lets a decode failure escape: it
returns a placeholder that keeps the raw subtree, and encoding that
placeholder gives the subtree back unchanged. For any tree ``t`` this
means ``encode(decode(t)) == t``, whether or not ``t`` decodes.

``FaultTolerantListCodec`` applies that per element, so one bad entry
never drops or reorders its neighbours. ``PlainListCodec`` is the naive
sequential list codec that stops at the first bad entry.
"""

from __future__ import annotations

from typing import Callable, Generic, Sequence, TypeVar

from codec.missing_content import make_missing_content, referenced_type_id
from codec.record_codec import RecordCodec
from core.errors import RecordDecodeError, ValueTreeError
from core.logging_config import get_logger
from core.types import MissingContent
from core.value_tree import TreeLeaf, TreeList, TreeMap, ValueTree

T = TypeVar("T")

PlaceholderFactory = Callable[[ValueTree, str], T]

_LOGGER = get_logger(__name__)


class FaultTolerantRecordCodec(Generic[T]):
    """Wrap a strict codec so decode always succeeds.

    Attributes:
        inner: Wrapped strict codec.
    """

    def __init__(
        self,
        inner: RecordCodec[T],
        placeholder_factory: PlaceholderFactory | None = None,
    ) -> None:
        self.inner = inner
        self._placeholder_factory = placeholder_factory or make_missing_content

    def encode(self, value: T | MissingContent) -> ValueTree:
        """Encode a record, emitting a placeholder's raw tree verbatim."""
        if isinstance(value, MissingContent):
            return value.raw
        return self.inner.encode(value)

    def decode(self, tree: ValueTree) -> T | MissingContent:
        """Decode a record, substituting a placeholder on failure.

        Args:
            tree: Encoded record subtree.

        Returns:
            The decoded record, or a placeholder carrying tree unchanged.

        Raises:
            ValueTreeError: If tree is not a value tree at all.
        """
        _require_tree(tree)
        try:
            return self.inner.decode(tree)
        except RecordDecodeError as error:
            _LOGGER.warning(
                "record_decode_replaced",
                type_id=referenced_type_id(tree),
                diagnostic=error.message,
            )
            return self._placeholder_factory(tree, error.message)


class FaultTolerantListCodec(Generic[T]):
    """Element-wise fault-tolerant codec over ordered sequences."""

    def __init__(self, element_codec: FaultTolerantRecordCodec[T]) -> None:
        self.element_codec = element_codec

    def encode(self, values: Sequence[T | MissingContent]) -> TreeList:
        return TreeList(tuple(self.element_codec.encode(value) for value in values))

    def decode(self, trees: ValueTree) -> tuple[T | MissingContent, ...]:
        """Decode every element in order.

        Output length and order always match the input.

        Raises:
            ValueTreeError: If trees is not a list tree.
        """
        element_trees = _require_list(trees)
        return tuple(self.element_codec.decode(tree) for tree in element_trees)


class PlainListCodec(Generic[T]):
    """Sequential list codec without fault tolerance.

    Decoding stops at the first element that fails and returns only the
    decoded prefix.
    """

    def __init__(self, element_codec: RecordCodec[T]) -> None:
        self.element_codec = element_codec

    def encode(self, values: Sequence[T]) -> TreeList:
        return TreeList(tuple(self.element_codec.encode(value) for value in values))

    def decode(self, trees: ValueTree) -> tuple[T, ...]:
        element_trees = _require_list(trees)
        decoded: list[T] = []
        for index, tree in enumerate(element_trees):
            try:
                decoded.append(self.element_codec.decode(tree))
            except RecordDecodeError as error:
                _LOGGER.warning(
                    "list_decode_truncated",
                    index=index,
                    dropped=len(element_trees) - index,
                    diagnostic=error.message,
                )
                break
        return tuple(decoded)


def fault_tolerant(
    inner: RecordCodec[T],
    placeholder_factory: PlaceholderFactory | None = None,
) -> FaultTolerantRecordCodec[T]:
    return FaultTolerantRecordCodec(inner, placeholder_factory)


def list_of(element_codec: FaultTolerantRecordCodec[T]) -> FaultTolerantListCodec[T]:
    return FaultTolerantListCodec(element_codec)


def _require_tree(tree: object) -> None:
    if not isinstance(tree, (TreeLeaf, TreeList, TreeMap)):
        raise ValueTreeError(f"Expected value tree, got {type(tree).__name__}.")


def _require_list(trees: object) -> TreeList:
    if isinstance(trees, TreeList):
        return trees
    raise ValueTreeError(f"Expected list tree at root, got {type(trees).__name__}.")
