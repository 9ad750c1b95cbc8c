"""Derive block names and hints from Bedrock model identifiers.

Pure string functions, no I/O::

    >>> short_name("anthropic.claude-3-haiku-20240307-v1:0")
    'anthropic-claude-3-haiku-20240307-v1-0'
    >>> display_name("anthropic-claude-3-haiku-20240307-v1-0")
    'Claude 3 Haiku 20240307 V1 0'
    >>> context_length_hint("anthropic.claude-3-haiku-20240307-v1:0:200k")
    200000
"""

from __future__ import annotations

import re
from collections.abc import Iterable

DEFAULT_VENDORS = ("anthropic", "openai")

# Only an explicit trailing "<N>k" segment counts. Provider ids carry it after
# a colon (":200k"); short names have the colon replaced by a dash ("-200k").
_ID_CONTEXT_SUFFIX_RE = re.compile(r":(\d+)k$")
_NAME_CONTEXT_SUFFIX_RE = re.compile(r"[:\-](\d+)k$")


def short_name(provider_model_id: str) -> str:
    """Return the file-stem key for *provider_model_id*."""
    return provider_model_id.replace(".", "-").replace(":", "-")


def display_name(name: str, vendors: Iterable[str] = DEFAULT_VENDORS) -> str:
    """Human-readable name for a short name.

    The vendor prefix is dropped, dashes become spaces and the first
    character of every word is upper-cased; the rest of each word is kept
    as-is (``200k`` stays ``200k``).
    """
    for vendor in vendors:
        prefix = f"{vendor}-"
        if name.startswith(prefix):
            name = name[len(prefix):]
            break
    words = [w for w in name.split("-") if w]
    return " ".join(w[0].upper() + w[1:] for w in words)


def context_length_hint(identifier: str, *, short: bool = False) -> int | None:
    """Context length in tokens encoded in *identifier*, or ``None``.

    A provider model id only counts a colon suffix (``...:200k``).  With
    *short* the identifier is a short name, where ``...-200k`` counts too.
    """
    pattern = _NAME_CONTEXT_SUFFIX_RE if short else _ID_CONTEXT_SUFFIX_RE
    match = pattern.search(identifier)
    if match is None:
        return None
    return int(match.group(1)) * 1000


def vendor_of(prefix: str) -> str:
    """Vendor namespace of an allow-list prefix (``openai.gpt-oss`` -> ``openai``)."""
    return prefix.split(".", 1)[0]


def matches_vendor(provider_model_id: str, prefixes: Iterable[str]) -> bool:
    """Return ``True`` when the id starts with one of the allow-listed prefixes."""
    return any(provider_model_id.startswith(p) for p in prefixes)
