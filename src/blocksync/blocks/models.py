"""Pydantic models for the block YAML schema.

Field aliases follow the on-disk camelCase keys (``defaultCompletionOptions``,
``contextLength``).  Unknown keys are allowed so hand-edited blocks still load.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompletionOptions(BaseModel):
    """``defaultCompletionOptions`` of a model entry."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    context_length: int | None = Field(default=None, alias="contextLength")


class BlockModel(BaseModel):
    """One entry of a block's ``models`` list."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    provider: str
    model: str
    env: dict[str, str] = Field(default_factory=dict)
    roles: list[str] = Field(default_factory=list)
    capabilities: list[str] | None = None
    default_completion_options: CompletionOptions | None = Field(
        default=None, alias="defaultCompletionOptions"
    )

    def has_capability(self, capability: str) -> bool:
        return capability in (self.capabilities or [])


class BlockDocument(BaseModel):
    """Top-level block file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    version: str
    schema_: str = Field(alias="schema")
    models: list[BlockModel] = Field(min_length=1)

    @field_validator("version", "schema_", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        # YAML reads `version: 1.0` as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Block(BaseModel):
    """A loaded block file: where it lives and what it says."""

    path: Path
    document: BlockDocument

    @property
    def short_name(self) -> str:
        return self.path.stem

    @property
    def provider_ids(self) -> list[str]:
        return [m.model for m in self.document.models]

    def lacks(self, capability: str) -> bool:
        """``True`` when any model entry is missing *capability*."""
        return any(not m.has_capability(capability) for m in self.document.models)
