"""Reconciliation — compare the catalog with the blocks and fix up the difference."""

from blocksync.reconcile.models import (
    PlannedWrite,
    ReconcileMode,
    ReconcilePlan,
    ReconcileReport,
    SkippedCandidate,
    WriteFailure,
)
from blocksync.reconcile.reconciler import Reconciler
from blocksync.reconcile.versioning import VersionResolver

__all__ = [
    "PlannedWrite",
    "ReconcileMode",
    "ReconcilePlan",
    "ReconcileReport",
    "Reconciler",
    "SkippedCandidate",
    "VersionResolver",
    "WriteFailure",
]
