"""Reconciler — bring the block directory in line with the catalog.

A run is a single linear pass::

    plan = reconciler.plan(catalog, version)   # nothing is written yet
    report = reconciler.apply(plan)             # writes, then one commit

``plan()`` decides between two mutually exclusive modes.  When the catalog
has models without a block, the run *creates* those blocks.  Only when
nothing is missing does it *backfill* the capability marker into existing
blocks that lack it.  If there is nothing to backfill either, the run is a
no-op.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from blocksync.blocks.patch import add_capability
from blocksync.blocks.render import render_block
from blocksync.reconcile.models import (
    PlannedWrite,
    ReconcileMode,
    ReconcilePlan,
    ReconcileReport,
    SkippedCandidate,
    WriteFailure,
)
from blocksync.runtime.errors import BlockPatchError, BlockWriteError
from blocksync.utils.telemetry import (
    ATTR_BLOCKS_EXISTING,
    ATTR_COMMITTED,
    ATTR_FAILED,
    ATTR_MISSING,
    ATTR_MODE,
    ATTR_SKIPPED,
    ATTR_VERSION,
    ATTR_WRITTEN,
    get_tracer,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from blocksync.blocks.store import BlockStore
    from blocksync.catalog.models import CatalogResult, ModelDescriptor
    from blocksync.config import SyncSettings
    from blocksync.runtime.writer import BlockWriter

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

CREATE_MESSAGE = """\
Add missing AWS Bedrock model blocks

- Add missing Anthropic Claude models with tool_use capability
- Add missing GPT-OSS models with tool_use capability
- Bump version to {version}"""

BACKFILL_MESSAGE = """\
Add tool_use capability to existing models

- Update all Anthropic Claude models to include tool_use capability
- Update all GPT-OSS models to include tool_use capability
- Bump version to {version}"""


class Committer(Protocol):
    """Anything that can commit an explicit list of files in one commit."""

    def commit(self, paths: Sequence[Path], message: str) -> None: ...


class Reconciler:
    """Compute and apply the minimal set of block writes for one run.

    *committer* may be ``None`` to leave the written files uncommitted.
    """

    def __init__(
        self,
        store: BlockStore,
        writer: BlockWriter,
        committer: Committer | None,
        settings: SyncSettings,
    ) -> None:
        self._store = store
        self._writer = writer
        self._committer = committer
        self._settings = settings

    def plan(self, catalog: CatalogResult, version: str) -> ReconcilePlan:
        """Decide what this run writes.  No file is written here.

        The store must already be loaded.
        """
        with _tracer.start_as_current_span("blocksync.reconcile.plan") as span:
            existing_names = self._store.short_names
            # Read from block contents: the filename and the embedded id can diverge.
            existing_ids = self._store.provider_ids
            span.set_attribute(ATTR_BLOCKS_EXISTING, len(existing_names))

            missing: list[ModelDescriptor] = []
            skipped: list[SkippedCandidate] = []
            claimed: dict[str, Path | None] = dict(existing_ids)

            for descriptor in catalog.descriptors:
                if descriptor.short_name in existing_names:
                    continue
                if any(m.short_name == descriptor.short_name for m in missing):
                    continue
                model_id = descriptor.provider_model_id
                if model_id in claimed:
                    where = claimed[model_id]
                    logger.info(
                        "Skipping %s - model ID %s already exists in %s",
                        descriptor.short_name,
                        model_id,
                        where if where is not None else "another candidate",
                    )
                    skipped.append(
                        SkippedCandidate(
                            descriptor=descriptor,
                            existing_path=where,
                            reason="already present under a different name",
                        )
                    )
                    continue
                claimed[model_id] = None
                missing.append(descriptor)

            if missing:
                plan = self._plan_create(missing, skipped, version)
            else:
                plan = self._plan_backfill(skipped, version)

            span.set_attribute(ATTR_MODE, plan.mode.value)
            span.set_attribute(ATTR_VERSION, version)
            span.set_attribute(ATTR_MISSING, len(missing))
            span.set_attribute(ATTR_SKIPPED, len(skipped))
            return plan

    def apply(self, plan: ReconcilePlan) -> ReconcileReport:
        """Write every planned file, then commit what was written.

        A failed write is logged and counted; the batch continues.

        Raises:
            CommitError: The commit step failed.  Files already written stay
                on disk.
        """
        with _tracer.start_as_current_span("blocksync.reconcile.apply") as span:
            report = ReconcileReport(
                mode=plan.mode,
                version=plan.version,
                skipped=plan.skipped,
                failed=list(plan.rejected),
            )

            for item in plan.writes:
                try:
                    self._writer.write(item.path, item.content)
                except BlockWriteError as exc:
                    logger.error("Failed to write %s: %s", item.path, exc.detail)
                    report.failed.append(WriteFailure(path=item.path, error=exc.detail))
                    continue
                logger.info("Wrote %s", item.path)
                report.written.append(item.path)

            span.set_attribute(ATTR_WRITTEN, len(report.written))
            span.set_attribute(ATTR_FAILED, len(report.failed))

            if report.written and self._committer is not None:
                template = CREATE_MESSAGE if plan.mode == ReconcileMode.CREATE else BACKFILL_MESSAGE
                self._committer.commit(report.written, template.format(version=plan.version))
                report.committed = True
            elif not report.written and plan.writes:
                logger.warning("No files were written, nothing to commit")

            span.set_attribute(ATTR_COMMITTED, report.committed)
            return report

    def run(self, catalog: CatalogResult, version: str) -> ReconcileReport:
        """Plan and apply in one step."""
        return self.apply(self.plan(catalog, version))

    def _plan_create(
        self,
        missing: list[ModelDescriptor],
        skipped: list[SkippedCandidate],
        version: str,
    ) -> ReconcilePlan:
        logger.info(
            "Missing %d models: %s",
            len(missing),
            " ".join(d.short_name for d in missing),
        )
        writes = [
            PlannedWrite(
                path=self._store.path_for(d.short_name),
                content=render_block(d, version, self._settings),
                descriptor=d,
            )
            for d in missing
        ]
        return ReconcilePlan(
            mode=ReconcileMode.CREATE,
            version=version,
            writes=writes,
            skipped=skipped,
            missing=missing,
        )

    def _plan_backfill(self, skipped: list[SkippedCandidate], version: str) -> ReconcilePlan:
        capability = self._settings.capability
        logger.info("No missing models found, checking for missing %s capabilities", capability)

        lacking = self._store.lacking(capability)
        if not lacking:
            logger.info("All existing models already have proper capabilities")
            return ReconcilePlan(mode=ReconcileMode.NOOP, version=version, skipped=skipped)

        logger.info("Adding %s capability to %d existing models", capability, len(lacking))
        writes: list[PlannedWrite] = []
        rejected: list[WriteFailure] = []
        for block in lacking:
            try:
                raw = block.path.read_text(encoding="utf-8")
                content = add_capability(raw, capability, version)
            except (OSError, BlockPatchError) as exc:
                logger.error("Cannot add %s to %s: %s", capability, block.path, exc)
                rejected.append(WriteFailure(path=block.path, error=str(exc)))
                continue
            writes.append(PlannedWrite(path=block.path, content=content))

        return ReconcilePlan(
            mode=ReconcileMode.BACKFILL,
            version=version,
            writes=writes,
            skipped=skipped,
            rejected=rejected,
        )
