"""Static catalog used when the live Bedrock listing is unavailable.

Keyed by short name; each entry carries the curated display name and the
provider model id the block should point at.
"""

from __future__ import annotations

from blocksync.catalog.models import ModelDescriptor
from blocksync.catalog.naming import context_length_hint

# ---------------------------------------------------------------------------
# Known model families
# ---------------------------------------------------------------------------

KNOWN_MODELS: dict[str, tuple[str, str]] = {
    # Anthropic
    "anthropic-claude-3-haiku": ("Claude 3 Haiku", "anthropic.claude-3-haiku-20240307-v1:0"),
    "anthropic-claude-3-opus": ("Claude 3 Opus", "anthropic.claude-3-opus-20240229-v1:0"),
    "anthropic-claude-3-sonnet": ("Claude 3 Sonnet", "anthropic.claude-3-sonnet-20240229-v1:0"),
    "anthropic-claude-3-5-haiku": ("Claude 3.5 Haiku", "anthropic.claude-3-5-haiku-20241022-v1:0"),
    "anthropic-claude-3-5-sonnet-v1": ("Claude 3.5 Sonnet v1", "anthropic.claude-3-5-sonnet-20240620-v1:0"),
    "anthropic-claude-3-5-sonnet-v2": ("Claude 3.5 Sonnet v2", "anthropic.claude-3-5-sonnet-20241022-v2:0"),
    "anthropic-claude-3-7-sonnet": ("Claude 3.7 Sonnet", "anthropic.claude-3-7-sonnet-20250219-v1:0"),
    "anthropic-claude-opus-4": ("Claude Opus 4", "anthropic.claude-opus-4-20250514-v1:0"),
    "anthropic-claude-opus-4-1": ("Claude Opus 4.1", "anthropic.claude-opus-4-1-20250805-v1:0"),
    "anthropic-claude-sonnet-4": ("Claude Sonnet 4", "anthropic.claude-sonnet-4-20250514-v1:0"),
    # OpenAI
    "openai-gpt-oss-120b": ("GPT-OSS 120B", "openai.gpt-oss-120b-1:0"),
    "openai-gpt-oss-20b": ("GPT-OSS 20B", "openai.gpt-oss-20b-1:0"),
}


def lookup(name: str) -> ModelDescriptor | None:
    """Descriptor for a known short name, or ``None`` if it is not in the table."""
    entry = KNOWN_MODELS.get(name)
    if entry is None:
        return None
    display, provider_model_id = entry
    return ModelDescriptor(
        short_name=name,
        provider_model_id=provider_model_id,
        display_name=display,
        supports_tools=True,
        context_length=context_length_hint(name, short=True),
    )


def fallback_descriptors() -> list[ModelDescriptor]:
    """All known models, in table order."""
    descriptors: list[ModelDescriptor] = []
    for name in KNOWN_MODELS:
        descriptor = lookup(name)
        assert descriptor is not None
        descriptors.append(descriptor)
    return descriptors
