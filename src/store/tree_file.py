"""Tagged JSON persistence for value trees.

Each node is a two-element JSON array ``[tag, payload]`` so leaf kinds
and map entry order survive the trip to disk exactly:

- ``["s", "text"]``, ``["i", 3]``, ``["b", true]``, ``["x", "<base64>"]``
- ``["l", [node, ...]]``
- ``["m", [["key", node], ...]]``

A file that does not hold a well-formed tree is a fatal, file-level
error; recovery policy belongs to the caller.
"""

from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path

from core.errors import StowageStoreError, ValueTreeError
from core.value_tree import LeafKind, TreeLeaf, TreeList, TreeMap, ValueTree

_LEAF_TAGS = {
    LeafKind.STRING: "s",
    LeafKind.INTEGER: "i",
    LeafKind.BOOLEAN: "b",
    LeafKind.BINARY: "x",
}


def tree_to_payload(tree: ValueTree) -> list[object]:
    """Convert a value tree into its tagged JSON payload."""
    if isinstance(tree, TreeLeaf):
        if tree.kind is LeafKind.BINARY:
            return ["x", base64.b64encode(bytes(tree.value)).decode("ascii")]  # type: ignore[arg-type]
        return [_LEAF_TAGS[tree.kind], tree.value]
    if isinstance(tree, TreeList):
        return ["l", [tree_to_payload(item) for item in tree.items]]
    if isinstance(tree, TreeMap):
        return ["m", [[key, tree_to_payload(value)] for key, value in tree.entries]]
    raise ValueTreeError(f"Expected value tree, got {type(tree).__name__}.")


def tree_from_payload(payload: object) -> ValueTree:
    """Rebuild a value tree from its tagged JSON payload.

    Raises:
        ValueTreeError: If payload is not a well-formed tagged node.
    """
    if not (isinstance(payload, list) and len(payload) == 2 and isinstance(payload[0], str)):
        raise ValueTreeError(f"Expected [tag, payload] node, got {payload!r:.80}.")
    tag, body = payload
    if tag == "s" and isinstance(body, str):
        return TreeLeaf(LeafKind.STRING, body)
    if tag == "i" and isinstance(body, int) and not isinstance(body, bool):
        return TreeLeaf(LeafKind.INTEGER, body)
    if tag == "b" and isinstance(body, bool):
        return TreeLeaf(LeafKind.BOOLEAN, body)
    if tag == "x" and isinstance(body, str):
        try:
            return TreeLeaf(LeafKind.BINARY, base64.b64decode(body, validate=True))
        except binascii.Error as error:
            raise ValueTreeError(f"Invalid binary leaf: {error}.") from error
    if tag == "l" and isinstance(body, list):
        return TreeList(tuple(tree_from_payload(item) for item in body))
    if tag == "m" and isinstance(body, list):
        return TreeMap(tuple(_entry_from_payload(entry) for entry in body))
    raise ValueTreeError(f"Invalid '{tag}' node payload.")


def dumps_tree(tree: ValueTree) -> str:
    return json.dumps(tree_to_payload(tree), indent=2) + "\n"


def loads_tree(text: str) -> ValueTree:
    """Parse tagged JSON text into a value tree.

    Raises:
        ValueTreeError: If text is not valid tagged JSON.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise ValueTreeError(f"Invalid JSON: {error.msg}.") from error
    except ValueError as error:
        # int() digit limit on oversized numbers
        raise ValueTreeError(f"Invalid JSON: {error}.") from error
    try:
        return tree_from_payload(payload)
    except RecursionError as error:
        raise ValueTreeError("Tree nesting is too deep.") from error


def write_tree_file(file_path: Path, tree: ValueTree) -> None:
    """Write a tree to disk, replacing any previous file atomically.

    Args:
        file_path: Destination save file.
        tree: Tree to persist.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    temp_path.write_text(dumps_tree(tree), encoding="utf-8")
    temp_path.replace(file_path)


def read_tree_file(file_path: Path) -> ValueTree:
    """Read a tree from disk.

    Raises:
        StowageStoreError: If the file is missing, unreadable, or does not
            hold a tree.
    """
    if not file_path.exists():
        raise StowageStoreError(f"Save file not found at {file_path}.")
    try:
        text = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise StowageStoreError(
            f"Save file at {file_path} is not UTF-8 text: {error.reason}. "
            "Restore it from a backup."
        ) from error
    except OSError as error:
        raise StowageStoreError(f"Failed to read save file at {file_path}: {error}") from error
    try:
        return loads_tree(text)
    except ValueTreeError as error:
        raise StowageStoreError(
            f"Failed to parse save file at {file_path}: {error} "
            "The file is not a value tree; restore it from a backup."
        ) from error


def _entry_from_payload(entry: object) -> tuple[str, ValueTree]:
    if isinstance(entry, list) and len(entry) == 2 and isinstance(entry[0], str):
        return entry[0], tree_from_payload(entry[1])
    raise ValueTreeError(f"Expected [key, node] map entry, got {entry!r:.80}.")
