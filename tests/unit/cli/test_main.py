"""Unit tests for CLI command handling."""

from __future__ import annotations

from dataclasses import replace

from cli.main import main
from core.config import StowageConfig
from core.types import ItemStack
from store.stash_sdk import StowageClient
from tests.fixture_paths import catalog_fixture


def _seed_inventory(data_root) -> None:
    config = replace(
        StowageConfig.from_env(),
        data_root=data_root,
        catalog_path=catalog_fixture("valid_catalog"),
    )
    StowageClient(config).save(
        "inventory",
        [ItemStack("base:stick"), ItemStack("base:diamond", count=2), None],
    )


def _args(tmp_path, catalog_name: str, *command: str) -> list[str]:
    return [
        "--data-root",
        str(tmp_path),
        "--catalog",
        str(catalog_fixture(catalog_name)),
        *command,
    ]


def test_cli_inspect_lists_slots(tmp_path, capsys) -> None:
    """Inspect should print one line per slot and a summary."""
    _seed_inventory(tmp_path)

    exit_code = main(_args(tmp_path, "valid_catalog", "inspect", "inventory"))
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert lines == [
        "0\tbase:stick\t1",
        "1\tbase:diamond\t2",
        "2\t-",
        "records=3\tmissing=0",
    ]


def test_cli_inspect_shows_missing_content(tmp_path, capsys) -> None:
    """Missing types should be listed with the unresolved id."""
    _seed_inventory(tmp_path)

    exit_code = main(_args(tmp_path, "without_diamond", "inspect", "inventory"))
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert lines[1].startswith("1\tstowage:missing_content\tbase:diamond\t")


def test_cli_resave_reports_unchanged(tmp_path, capsys) -> None:
    """Resave with a missing type should keep the file identical."""
    _seed_inventory(tmp_path)

    exit_code = main(_args(tmp_path, "without_diamond", "resave", "inventory"))
    output = capsys.readouterr().out

    assert exit_code == 0 and "unchanged=true" in output and "missing=1" in output


def test_cli_types_lists_registry(tmp_path, capsys) -> None:
    """Types should list every registered id."""
    exit_code = main(_args(tmp_path, "valid_catalog", "types"))
    output = capsys.readouterr().out.split()

    assert exit_code == 0 and "base:oak_log" in output and "stowage:crafting_pattern" in output


def test_cli_missing_save_returns_error(tmp_path, capsys) -> None:
    """Store errors should map to exit code 1 with a message."""
    exit_code = main(_args(tmp_path, "valid_catalog", "inspect", "absent"))

    assert exit_code == 1 and "error:" in capsys.readouterr().err


def test_cli_saves_lists_names(tmp_path, capsys) -> None:
    """Saves should list stored names."""
    _seed_inventory(tmp_path)

    exit_code = main(_args(tmp_path, "valid_catalog", "saves"))

    assert exit_code == 0 and capsys.readouterr().out.strip() == "inventory"


def test_cli_non_utf8_save_returns_error(tmp_path, capsys) -> None:
    """Undecodable save files should map to exit code 1, not a traceback."""
    saves_dir = tmp_path / "saves"
    saves_dir.mkdir()
    (saves_dir / "garbage.json").write_bytes(b"\xff\xfe[")

    exit_code = main(_args(tmp_path, "valid_catalog", "inspect", "garbage"))

    assert exit_code == 1 and "not UTF-8" in capsys.readouterr().err


def test_cli_invalid_log_level_returns_error(tmp_path, capsys, monkeypatch) -> None:
    """Invalid environment config should map to exit code 1 with a message."""
    monkeypatch.setenv("STOWAGE_LOG_LEVEL", "loud")

    exit_code = main(_args(tmp_path, "valid_catalog", "types"))

    assert exit_code == 1 and "STOWAGE_LOG_LEVEL" in capsys.readouterr().err
