"""Data models for the model catalog."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ModelDescriptor(BaseModel):
    """One model that should exist as a block."""

    short_name: str = Field(..., description="File-stem key of the block.")
    provider_model_id: str = Field(..., description="Opaque Bedrock model identifier.")
    display_name: str = Field(..., description="Human-readable model name.")
    supports_tools: bool = Field(default=True, description="Whether the block gets the tool capability.")
    context_length: int | None = Field(default=None, description="Explicit context window in tokens.")


class CatalogOrigin(str, Enum):
    """Where the catalog of a run came from."""

    LIVE = "live"
    FALLBACK = "fallback"


class CatalogResult(BaseModel):
    """Ordered candidates plus how they were obtained."""

    origin: CatalogOrigin
    descriptors: list[ModelDescriptor] = Field(default_factory=list)
    reason: str = ""

    @property
    def degraded(self) -> bool:
        return self.origin == CatalogOrigin.FALLBACK
