"""Tests for the ``fstype`` and ``resolve`` commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cafeatures.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


class TestFstypeCommand:
    def test_msdos_by_name(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fstype", "msdos", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["fs_type"] == "msdos"
        assert data["magic"] == "0x4d44"
        assert data["tokens"] == "fat"
        assert data["time_granularity_ns"] == 2_000_000_000

    def test_by_number(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fstype", "0xEF53", "--format", "json"])
        data = json.loads(result.output)
        assert data["fs_type"] == "ext2"
        assert "WITH_FLAG_DIRSYNC" in data["features"]

    def test_unknown_number_falls_back(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fstype", "0x6969", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["fs_type"] == "unknown"
        assert data["tokens"] == "unix"

    def test_text_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fstype", "btrfs"])
        assert result.exit_code == 0
        assert "btrfs" in result.output
        assert "WITH_FLAG_NOCOW" in result.output
        assert "Time granularity" in result.output

    def test_unknown_name(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fstype", "reiserfs"])
        assert result.exit_code == 2
        assert "Unknown filesystem type" in result.output

    def test_unknown_name_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fstype", "reiserfs", "--format", "json"])
        assert result.exit_code == 2
        assert "Unknown filesystem type" in json.loads(result.output)["error"]

    def test_ext4_alias(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fstype", "ext4", "--format", "json"])
        data = json.loads(result.output)
        assert data["fs_type"] == "ext2"
        assert data["magic"] == "0xef53"


class TestResolveCommand:
    def test_json(self, runner: CliRunner, selection_file: Path) -> None:
        result = runner.invoke(cli, ["resolve", str(selection_file), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["tokens"] == (
            "32bit-uids nsec-time permissions symlinks device-nodes fifos sockets"
        )

    def test_fs_type_option_overrides(
        self, runner: CliRunner, empty_selection_file: Path
    ) -> None:
        result = runner.invoke(
            cli,
            ["resolve", str(empty_selection_file), "--fs-type", "msdos", "--format", "json"],
        )
        data = json.loads(result.output)
        assert data["tokens"] == "fat"
        assert "RESPECT_FLAG_NODUMP" in data["features"]

    def test_text(self, runner: CliRunner, empty_selection_file: Path) -> None:
        result = runner.invoke(cli, ["resolve", str(empty_selection_file)])
        assert result.exit_code == 0
        assert "RESPECT_FLAG_NODUMP" in result.output

    def test_invalid_config(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("with: [nonsense]\n")
        result = runner.invoke(cli, ["resolve", str(path)])
        assert result.exit_code == 2
        assert "Error" in result.output

    def test_missing_config(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["resolve", "/nonexistent/features.yaml"])
        assert result.exit_code == 2

    def test_invalid_config_json(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "keys.yaml"
        path.write_text("1: a\ncolour: blue\n")
        result = runner.invoke(cli, ["resolve", str(path), "--format", "json"])
        assert result.exit_code == 2
        assert "Unknown selection keys" in json.loads(result.output)["error"]

    def test_unknown_fs_type_option_json(
        self, runner: CliRunner, empty_selection_file: Path
    ) -> None:
        result = runner.invoke(
            cli,
            ["resolve", str(empty_selection_file), "--fs-type", "reiserfs", "--format", "json"],
        )
        assert result.exit_code == 2
        assert "reiserfs" in json.loads(result.output)["error"]
