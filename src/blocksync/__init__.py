"""blocksync — keep AWS Bedrock model blocks in sync with the live catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from blocksync.config import SyncSettings as SyncSettings
    from blocksync.runner import SyncRunner as SyncRunner

_LAZY_EXPORTS = {
    "SyncRunner": "blocksync.runner",
    "SyncSettings": "blocksync.config",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'blocksync' has no attribute {name!r}")
