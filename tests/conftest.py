"""Shared fixtures: a scripted command runner, a recording committer and block text."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from blocksync.runtime.models import CommandRequest, CommandResult


class FakeRunner:
    """CommandRunner stand-in: returns scripted results keyed by the first two argv items."""

    def __init__(self, *, installed: bool = True) -> None:
        self.installed = installed
        self.requests: list[CommandRequest] = []
        self.results: dict[tuple[str, ...], CommandResult | Exception] = {}

    def script(self, *argv: str, result: CommandResult | Exception) -> None:
        self.results[argv] = result

    def available(self, executable: str) -> bool:
        return self.installed

    def run(self, request: CommandRequest) -> CommandResult:
        self.requests.append(request)
        key = tuple(request.command[:2])
        outcome = self.results.get(key, CommandResult(exit_code=0))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingCommitter:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.commits: list[tuple[list[Path], str]] = []

    def commit(self, paths: Any, message: str) -> None:
        if self.error is not None:
            raise self.error
        self.commits.append((list(paths), message))


def listing_json(*model_ids: str) -> str:
    return json.dumps({"modelSummaries": [{"modelId": m} for m in model_ids]})


def block_text(
    name: str,
    model: str,
    *,
    version: str = "1.0.3",
    capabilities: bool = True,
    context_length: int | None = None,
) -> str:
    text = (
        f"name: {name}\n"
        f"version: {version}\n"
        "schema: v1\n"
        "\n"
        "models:\n"
        f"  - name: {name}\n"
        "    provider: bedrock\n"
        f"    model: {model}\n"
        "    env:\n"
        "      region: ${{ inputs.BEDROCK_AWS_REGION }}\n"
        "      profile: ${{ inputs.BEDROCK_AWS_PROFILE }}\n"
        "    roles:\n"
        "      - chat\n"
        "      - apply\n"
        "      - edit\n"
    )
    if capabilities:
        text += "    capabilities:\n      - tool_use\n"
    if context_length is not None:
        text += f"    defaultCompletionOptions:\n      contextLength: {context_length}\n"
    return text


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def committer() -> RecordingCommitter:
    return RecordingCommitter()


@pytest.fixture()
def make_block():
    return block_text


@pytest.fixture()
def make_listing():
    return listing_json


@pytest.fixture()
def failing_committer() -> RecordingCommitter:
    from blocksync.runtime.errors import CommitError

    return RecordingCommitter(error=CommitError(128, "fatal: not a git repository"))
