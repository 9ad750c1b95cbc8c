"""Block files — schema, loading, rendering and in-place edits."""

from blocksync.blocks.models import Block, BlockDocument, BlockModel, CompletionOptions
from blocksync.blocks.patch import add_capability
from blocksync.blocks.render import render_block
from blocksync.blocks.store import BlockStore, parse_block

__all__ = [
    "Block",
    "BlockDocument",
    "BlockModel",
    "BlockStore",
    "CompletionOptions",
    "add_capability",
    "parse_block",
    "render_block",
]
