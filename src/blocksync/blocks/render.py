"""Render a :class:`ModelDescriptor` into block YAML text.

Rendering is deterministic: the same descriptor, version and settings always
produce the same bytes.  Uses :class:`string.Template` (``$name`` syntax) like
the rest of the templating in the package; ``$$`` yields a literal ``$`` for
the ``${{ inputs.X }}`` placeholders resolved by the block consumer.
"""

from __future__ import annotations

import json
from string import Template
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from blocksync.catalog.models import ModelDescriptor
    from blocksync.config import SyncSettings

_BLOCK_TEMPLATE = Template(
    """\
name: $name
version: $version
schema: $schema

models:
  - name: $name
    provider: $provider
    model: $model
    env:
$env
    roles:
$roles
"""
)

_CAPABILITIES_TEMPLATE = Template(
    """\
    capabilities:
      - $capability
"""
)

_COMPLETION_OPTIONS_TEMPLATE = Template(
    """\
    defaultCompletionOptions:
      contextLength: $context_length
"""
)

_INPUT_PLACEHOLDER = Template("$${{ inputs.$input }}")


def yaml_scalar(value: str) -> str:
    """Return *value* as a plain YAML scalar, double-quoted when plain would misparse."""
    try:
        if yaml.safe_load(f"k: {value}") == {"k": value}:
            return value
    except yaml.YAMLError:
        pass
    return json.dumps(value)


def render_block(descriptor: ModelDescriptor, version: str, settings: SyncSettings) -> str:
    """Full text of a new block for *descriptor*."""
    env = "\n".join(
        f"      {key}: {_INPUT_PLACEHOLDER.substitute(input=name)}"
        for key, name in settings.env.items()
    )
    roles = "\n".join(f"      - {role}" for role in settings.roles)

    text = _BLOCK_TEMPLATE.substitute(
        name=yaml_scalar(descriptor.display_name),
        version=version,
        schema=settings.schema_version,
        provider=settings.provider,
        model=yaml_scalar(descriptor.provider_model_id),
        env=env,
        roles=roles,
    )
    if descriptor.supports_tools:
        text += _CAPABILITIES_TEMPLATE.substitute(capability=settings.capability)
    if descriptor.context_length is not None:
        text += _COMPLETION_OPTIONS_TEMPLATE.substitute(
            context_length=descriptor.context_length
        )
    return text
