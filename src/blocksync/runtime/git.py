"""GitCommitter — commit an explicit file list with one message."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from blocksync.runtime.errors import CommandError, CommitError
from blocksync.runtime.models import CommandRequest

if TYPE_CHECKING:
    from collections.abc import Sequence

    from blocksync.runtime.process import CommandRunner

logger = logging.getLogger(__name__)


class GitCommitter:
    """Stage and commit exactly the given paths.

    ``git commit -- <paths>`` restricts the commit to those paths, so
    anything else already staged in the index is left out.
    """

    def __init__(self, runner: CommandRunner, repo_dir: Path | None = None) -> None:
        self._runner = runner
        self._repo_dir = repo_dir or Path.cwd()

    def commit(self, paths: Sequence[Path], message: str) -> None:
        """Commit *paths* together.

        Raises:
            CommitError: ``git add`` or ``git commit`` exited non-zero.
        """
        if not paths:
            return

        names = [str(p) for p in paths]
        self._git(["add", "--", *names])
        self._git(["commit", "-m", message, "--", *names])
        logger.info("Committed %d file(s)", len(names))

    def _git(self, args: list[str]) -> None:
        request = CommandRequest(command=["git", *args], cwd=str(self._repo_dir))
        try:
            result = self._runner.run(request)
        except CommandError as exc:
            # 127: the shell convention for "command not found"
            raise CommitError(127, exc.detail) from exc
        if not result.ok:
            raise CommitError(result.exit_code, result.stderr)
