"""Tests for SyncRunner."""

from __future__ import annotations

from pathlib import Path

import pytest

from blocksync.config import SyncSettings
from blocksync.reconcile.models import ReconcileMode
from blocksync.runner import SyncRunner
from blocksync.runtime.errors import BlockLoadError, CommitError
from blocksync.runtime.git import GitCommitter
from blocksync.runtime.models import CommandResult


def _settings(tmp_path: Path, **kwargs) -> SyncSettings:
    return SyncSettings(blocks_dir=tmp_path / "blocks" / "public", **kwargs)


class TestSyncRunner:
    def test_catalog_failure_still_completes(self, tmp_path: Path, fake_runner, committer) -> None:
        fake_runner.script("aws", "bedrock", result=CommandResult(exit_code=255))
        runner = SyncRunner(_settings(tmp_path), runner=fake_runner, committer=committer)

        report = runner.run()

        assert report.mode == ReconcileMode.CREATE
        assert len(report.written) == 12
        assert report.version == "1.0.1"
        assert len(committer.commits) == 1

    def test_second_run_noop(self, tmp_path: Path, fake_runner, committer) -> None:
        SyncRunner(_settings(tmp_path), runner=fake_runner, committer=committer).run(offline=True)
        report = SyncRunner(_settings(tmp_path), runner=fake_runner, committer=committer).run(
            offline=True
        )
        assert report.mode == ReconcileMode.NOOP
        assert report.written == []
        assert len(committer.commits) == 1

    def test_live_catalog(self, tmp_path: Path, fake_runner, committer, make_listing) -> None:
        fake_runner.script(
            "aws",
            "bedrock",
            result=CommandResult(
                exit_code=0,
                stdout=make_listing(
                    "anthropic.claude-3-haiku-20240307-v1:0:200k", "amazon.titan-text-express-v1"
                ),
            ),
        )
        settings = _settings(tmp_path)
        report = SyncRunner(settings, runner=fake_runner, committer=committer).run()

        (path,) = report.written
        assert path == settings.blocks_dir / "anthropic-claude-3-haiku-20240307-v1-0-200k.yaml"
        assert "contextLength: 200000" in path.read_text()

    def test_version_manifest_recorded(self, tmp_path: Path, fake_runner, committer) -> None:
        manifest = tmp_path / "VERSION"
        manifest.write_text("2.3.4\n")
        settings = _settings(tmp_path, version_file=manifest)

        report = SyncRunner(settings, runner=fake_runner, committer=committer).run(offline=True)

        assert report.version == "2.3.5"
        assert manifest.read_text() == "2.3.5\n"

    def test_version_not_recorded_on_commit_failure(
        self, tmp_path: Path, fake_runner, failing_committer
    ) -> None:
        manifest = tmp_path / "VERSION"
        settings = _settings(tmp_path, version_file=manifest)
        with pytest.raises(CommitError):
            SyncRunner(settings, runner=fake_runner, committer=failing_committer).run(offline=True)
        assert not manifest.exists()

    def test_explicit_version(self, tmp_path: Path, fake_runner, committer) -> None:
        runner = SyncRunner(_settings(tmp_path), runner=fake_runner, committer=committer)
        assert runner.run(offline=True, version="3.0.0").version == "3.0.0"

    def test_broken_block_is_fatal(self, tmp_path: Path, fake_runner, committer) -> None:
        settings = _settings(tmp_path)
        settings.blocks_dir.mkdir(parents=True)
        (settings.blocks_dir / "broken.yaml").write_text("name: only\n")
        with pytest.raises(BlockLoadError):
            SyncRunner(settings, runner=fake_runner, committer=committer).plan(offline=True)

    def test_default_committer_is_git(self, tmp_path: Path, fake_runner) -> None:
        runner = SyncRunner(_settings(tmp_path), runner=fake_runner)
        assert isinstance(runner.reconciler._committer, GitCommitter)

    def test_commit_disabled(self, tmp_path: Path, fake_runner, committer) -> None:
        runner = SyncRunner(_settings(tmp_path, commit=False), runner=fake_runner, committer=committer)
        report = runner.run(offline=True)
        assert len(report.written) == 12
        assert not report.committed
        assert committer.commits == []

    def test_git_invoked_with_written_paths(self, tmp_path: Path, fake_runner) -> None:
        runner = SyncRunner(_settings(tmp_path), runner=fake_runner, repo_dir=tmp_path)
        report = runner.run(offline=True)

        add, commit = fake_runner.requests
        assert add.command[:3] == ["git", "add", "--"]
        assert add.command[3:] == [str(p) for p in report.written]
        assert commit.command[:2] == ["git", "commit"]
        assert commit.cwd == str(tmp_path)
