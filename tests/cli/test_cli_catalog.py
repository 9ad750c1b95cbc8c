"""Tests for ``blocksync catalog`` and ``blocksync blocks`` CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from blocksync.cli import main


class TestCatalogCommand:
    def test_offline_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["catalog", "--offline"])

        assert result.exit_code == 0, result.output
        assert "fallback" in result.output

    def test_offline_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["catalog", "--offline", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["origin"] == "fallback"
        assert len(data["descriptors"]) == 12


class TestBlocksCommand:
    def test_empty_directory(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["blocks", "--blocks-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "No blocks found" in result.output

    def test_json(self, tmp_path: Path, make_block) -> None:
        (tmp_path / "a.yaml").write_text(make_block("A", "anthropic.a:0", capabilities=False))
        (tmp_path / "b.yaml").write_text(make_block("B", "anthropic.b:0"))

        runner = CliRunner()
        result = runner.invoke(main, ["blocks", "--blocks-dir", str(tmp_path), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [(d["name"], d["capability"]) for d in data] == [("A", False), ("B", True)]
        assert data[0]["models"] == ["anthropic.a:0"]

    def test_table(self, tmp_path: Path, make_block) -> None:
        (tmp_path / "a.yaml").write_text(make_block("A", "anthropic.a:0"))

        runner = CliRunner()
        result = runner.invoke(main, ["blocks", "--blocks-dir", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Existing Blocks" in result.output

    def test_broken_block(self, tmp_path: Path) -> None:
        (tmp_path / "bad.yaml").write_text("name: only\n")

        runner = CliRunner()
        result = runner.invoke(main, ["blocks", "--blocks-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error loading blocks" in result.output


class TestVersionOption:
    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
