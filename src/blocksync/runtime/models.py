"""Data models for host command execution."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CommandRequest(BaseModel):
    """One host command (``aws``, ``git``) and how to run it."""

    command: list[str] = Field(..., description="Executable followed by its arguments.")
    stdin: str | None = Field(default=None, description="Text fed to the process.")
    timeout: float | None = Field(default=None, description="Seconds before the process is killed.")
    cwd: str | None = Field(default=None, description="Directory the command runs in.")
    env: dict[str, str] = Field(default_factory=dict, description="Variables added to the inherited environment.")


class CommandResult(BaseModel):
    """Exit status and captured output of a finished command."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0
