"""CommandRunner — blocking execution of host commands.

Used for the two child processes a sync run depends on: the Bedrock
catalog listing (``aws bedrock list-foundation-models``) and ``git``.
Calls block until the child exits; there is no retry.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

from blocksync.runtime.errors import CommandError, CommandTimeoutError
from blocksync.runtime.models import CommandRequest, CommandResult

logger = logging.getLogger(__name__)


class CommandRunner:
    """Run a :class:`CommandRequest` and capture its output."""

    def __init__(self, env: dict[str, str] | None = None) -> None:
        self._env = env or {}

    @staticmethod
    def available(executable: str) -> bool:
        """Return ``True`` when *executable* resolves on ``PATH``."""
        return shutil.which(executable) is not None

    def run(self, request: CommandRequest) -> CommandResult:
        """Run the command and wait for it to exit.

        Raises:
            CommandTimeoutError: The command ran past ``request.timeout``.
            CommandError: The command could not be started.
        """
        logger.debug("Running %s", request.command)

        extra = {**self._env, **request.env}
        env = {**os.environ, **extra} if extra else None

        try:
            proc = subprocess.run(
                request.command,
                input=request.stdin,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=request.timeout,
                cwd=request.cwd,
                env=env,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandTimeoutError(request.timeout or 0.0) from exc
        except OSError as exc:
            raise CommandError(str(exc)) from exc

        return CommandResult(
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
