"""Runtime layer — host commands, file writes and version control."""

from blocksync.runtime.git import GitCommitter
from blocksync.runtime.models import CommandRequest, CommandResult
from blocksync.runtime.process import CommandRunner
from blocksync.runtime.writer import BlockWriter

__all__ = [
    "BlockWriter",
    "CommandRequest",
    "CommandResult",
    "CommandRunner",
    "GitCommitter",
]
