"""Stowage CLI entry points.
This module exposes commands for inspecting and rewriting record saves.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from codec.missing_content import referenced_type_id
from core.config import StowageConfig
from core.errors import StowageCatalogError, StowageConfigError, StowageStoreError
from core.types import MissingContent
from store.stash_sdk import StowageClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="stowage", description="Stowage record save CLI")
    parser.add_argument("--data-root", help="Override STOWAGE_DATA_ROOT for this command")
    parser.add_argument("--catalog", help="Override STOWAGE_CATALOG_PATH for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_inspect_command(subparsers)
    _add_resave_command(subparsers)
    _add_types_command(subparsers)
    _add_saves_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Stowage CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root, args.catalog)
        if args.command == "inspect":
            return _run_inspect_command(client, args)
        if args.command == "resave":
            return _run_resave_command(client, args)
        if args.command == "types":
            return _run_types_command(client)
        if args.command == "saves":
            return _run_saves_command(client)
    except (StowageCatalogError, StowageConfigError, StowageStoreError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None, catalog: str | None) -> StowageClient:
    """Build SDK client with optional path overrides.

    Args:
        data_root: Optional data root override.
        catalog: Optional catalog path override.

    Returns:
        Configured SDK client.
    """
    config = StowageConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    if catalog:
        config = replace(config, catalog_path=Path(catalog).expanduser().resolve())
    return StowageClient(config)


def _run_inspect_command(client: StowageClient, args: argparse.Namespace) -> int:
    """Handle inspect command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    records, report = client.load(args.name)
    for index, record in enumerate(records):
        print(_describe_slot(index, record))
    print(f"records={report.record_count}\tmissing={len(report.missing)}")
    return 0


def _run_resave_command(client: StowageClient, args: argparse.Namespace) -> int:
    """Handle resave command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = client.resave(args.name)
    print(f"save_path={result.save_path}")
    print(f"records={result.report.record_count}")
    print(f"missing={len(result.report.missing)}")
    print(f"unchanged={str(result.unchanged).lower()}")
    return 0


def _run_types_command(client: StowageClient) -> int:
    for type_id in client.registry.type_ids():
        print(type_id)
    return 0


def _run_saves_command(client: StowageClient) -> int:
    for name in client.list_saves():
        print(name)
    return 0


def _describe_slot(index: int, record: Any) -> str:
    if record is None:
        return f"{index}\t-"
    if isinstance(record, MissingContent):
        missing_id = referenced_type_id(record.raw) or "?"
        return f"{index}\t{record.type_id}\t{missing_id}\t{record.diagnostic}"
    return f"{index}\t{record.type_id}\t{record.count}"


def _add_inspect_command(subparsers: Any) -> None:
    """Register inspect subcommand."""
    parser = subparsers.add_parser("inspect", help="List the records stored in a save")
    parser.add_argument("name", help="Save name under <data-root>/saves")


def _add_resave_command(subparsers: Any) -> None:
    """Register resave subcommand."""
    parser = subparsers.add_parser(
        "resave",
        help="Load a save and write it back, keeping unknown records intact",
    )
    parser.add_argument("name", help="Save name under <data-root>/saves")


def _add_types_command(subparsers: Any) -> None:
    """Register types subcommand."""
    subparsers.add_parser("types", help="List registered record type ids")


def _add_saves_command(subparsers: Any) -> None:
    """Register saves subcommand."""
    subparsers.add_parser("saves", help="List save names")
