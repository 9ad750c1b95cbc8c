"""Data models for reconciliation plans and their outcome."""

from __future__ import annotations

from enum import Enum
from pathlib import Path  # noqa: TC003

from pydantic import BaseModel, Field

from blocksync.catalog.models import ModelDescriptor  # noqa: TC001


class ReconcileMode(str, Enum):
    """What a run does; the modes are mutually exclusive."""

    CREATE = "create"
    BACKFILL = "backfill"
    NOOP = "noop"


class PlannedWrite(BaseModel):
    """One file the run will write, with its full new content."""

    path: Path
    content: str
    descriptor: ModelDescriptor | None = None


class SkippedCandidate(BaseModel):
    """A catalog candidate whose provider id is already registered elsewhere."""

    descriptor: ModelDescriptor
    existing_path: Path | None = None
    reason: str = ""


class WriteFailure(BaseModel):
    path: Path
    error: str


class ReconcilePlan(BaseModel):
    """Everything a run intends to do, computed before any file is touched."""

    mode: ReconcileMode
    version: str
    writes: list[PlannedWrite] = Field(default_factory=list)
    skipped: list[SkippedCandidate] = Field(default_factory=list)
    missing: list[ModelDescriptor] = Field(default_factory=list)
    rejected: list[WriteFailure] = Field(default_factory=list)


class ReconcileReport(BaseModel):
    """Outcome of applying a :class:`ReconcilePlan`."""

    mode: ReconcileMode
    version: str
    written: list[Path] = Field(default_factory=list)
    failed: list[WriteFailure] = Field(default_factory=list)
    skipped: list[SkippedCandidate] = Field(default_factory=list)
    committed: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.written)
