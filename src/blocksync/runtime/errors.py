"""Shared error types for blocksync."""


class BlockSyncError(Exception):
    """Base error for all blocksync failures."""


class ConfigError(BlockSyncError):
    """The settings file could not be read or validated."""


class CommandError(BlockSyncError):
    """An external command could not be started."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Command error" + (f": {detail}" if detail else ""))


class CommandTimeoutError(CommandError):
    """An external command exceeded its timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Execution timed out after {timeout}s")


class BlockLoadError(BlockSyncError):
    """An existing block file failed to parse or validate."""

    def __init__(self, path: object, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot load block {path}: {detail}")


class BlockPatchError(BlockSyncError):
    """A capability backfill edit did not produce a valid block."""


class BlockWriteError(BlockSyncError):
    """A block file could not be written."""

    def __init__(self, path: object, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot write {path}: {detail}")


class CommitError(BlockSyncError):
    """The version-control commit failed."""

    def __init__(self, returncode: int, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        msg = f"git exited with status {returncode}"
        if stderr:
            msg += f": {stderr.strip()}"
        super().__init__(msg)
