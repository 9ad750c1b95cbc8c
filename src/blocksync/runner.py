"""SyncRunner — wire the catalog, the block store and the reconciler together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from blocksync.blocks.store import BlockStore
from blocksync.catalog.source import CatalogSource
from blocksync.config import SettingsLoader, SyncSettings
from blocksync.reconcile.reconciler import Reconciler
from blocksync.reconcile.versioning import VersionResolver
from blocksync.runtime.git import GitCommitter
from blocksync.runtime.process import CommandRunner
from blocksync.runtime.writer import BlockWriter

if TYPE_CHECKING:
    from blocksync.catalog.models import CatalogResult
    from blocksync.reconcile.models import ReconcilePlan, ReconcileReport
    from blocksync.reconcile.reconciler import Committer

logger = logging.getLogger(__name__)


class SyncRunner:
    """Execute one sync run end-to-end.

    Collaborators default to the real ones (AWS CLI, filesystem, git) and can
    be swapped out for tests.
    """

    def __init__(
        self,
        settings: SyncSettings,
        *,
        runner: CommandRunner | None = None,
        writer: BlockWriter | None = None,
        committer: Committer | None = None,
        repo_dir: Path | None = None,
    ) -> None:
        self.settings = settings
        self._runner = runner or CommandRunner()
        self.store = BlockStore(settings.blocks_dir)
        self.catalog_source = CatalogSource(settings, self._runner)
        self.versions = VersionResolver(settings.version_file)

        if committer is None and settings.commit:
            committer = GitCommitter(self._runner, repo_dir)
        self.reconciler = Reconciler(
            self.store,
            writer or BlockWriter(),
            committer if settings.commit else None,
            settings,
        )

    @classmethod
    def from_config(cls, path: str | Path | None = None, **overrides: object) -> SyncRunner:
        """Load settings (optionally from a YAML file) and return a ready runner."""
        loader = SettingsLoader(Path(path) if path is not None else None)
        return cls(loader.load(**overrides))

    def plan(
        self,
        *,
        offline: bool = False,
        version: str | None = None,
        catalog: CatalogResult | None = None,
    ) -> ReconcilePlan:
        """Fetch the catalog, load the blocks and compute the plan.

        Raises:
            BlockLoadError: An existing block is unreadable.
            ConfigError: The version override or manifest is not valid semver.
        """
        if catalog is None:
            catalog = self.catalog_source.fetch(offline=offline)
        self.store.load()
        new_version = self.versions.resolve(self.store, override=version)
        return self.reconciler.plan(catalog, new_version)

    def apply(self, plan: ReconcilePlan) -> ReconcileReport:
        """Apply *plan* and record the version once something was written.

        Raises:
            CommitError: The commit failed.
            ConfigError: The version manifest cannot be written.
        """
        report = self.reconciler.apply(plan)
        if report.changed:
            self.versions.record(report.version)
        logger.info(
            "%s run finished: %d written, %d failed, %d skipped",
            report.mode.value,
            len(report.written),
            len(report.failed),
            len(report.skipped),
        )
        return report

    def run(self, *, offline: bool = False, version: str | None = None) -> ReconcileReport:
        """Plan and apply in one step."""
        return self.apply(self.plan(offline=offline, version=version))
