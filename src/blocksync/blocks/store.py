"""BlockStore — the collection of blocks already on disk.

Typical usage::

    store = BlockStore(Path("blocks/public"))
    store.load()
    if "anthropic-claude-3-haiku" not in store.short_names:
        ...
"""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003
from typing import Any

import semver
import yaml
from blocksync.blocks.models import Block, BlockDocument
from blocksync.runtime.errors import BlockLoadError

logger = logging.getLogger(__name__)

BLOCK_SUFFIXES = (".yaml", ".yml")


def parse_block(raw: str) -> BlockDocument:
    """Parse raw YAML text into a validated :class:`BlockDocument`.

    Raises:
        ValueError: If the text is not a mapping or fails validation.
        yaml.YAMLError: If the text is not valid YAML.
    """
    data: Any = yaml.safe_load(raw)
    if not isinstance(data, dict):
        msg = "block YAML must be a mapping"
        raise ValueError(msg)
    return BlockDocument.model_validate(data)


class BlockStore:
    """Load and index the block files of one directory.

    Only the directory itself is scanned (no recursion).  A missing
    directory is an empty collection.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self._blocks: dict[str, Block] = {}

    def load(self) -> list[Block]:
        """Read every block file, replacing whatever was loaded before.

        Raises:
            BlockLoadError: If any block fails to read, parse or validate, or
                two files share a stem (``x.yaml`` and ``x.yml``).
        """
        blocks: dict[str, Block] = {}
        if self.directory.is_dir():
            for path in sorted(self.directory.iterdir()):
                if path.suffix in BLOCK_SUFFIXES and path.is_file():
                    block = self._load_file(path)
                    other = blocks.get(block.short_name)
                    if other is not None:
                        raise BlockLoadError(path, f"same block name as {other.path.name}")
                    blocks[block.short_name] = block

        self._blocks = blocks
        logger.debug("Loaded %d block(s) from %s", len(blocks), self.directory)
        return list(blocks.values())

    @property
    def blocks(self) -> list[Block]:
        return list(self._blocks.values())

    @property
    def short_names(self) -> set[str]:
        return set(self._blocks)

    @property
    def provider_ids(self) -> dict[str, Path]:
        """Provider model ids embedded in block contents, mapped to their file."""
        ids: dict[str, Path] = {}
        for block in self._blocks.values():
            for model_id in block.provider_ids:
                ids.setdefault(model_id, block.path)
        return ids

    @property
    def versions(self) -> list[semver.Version]:
        """Parsed top-level versions; unparseable ones are logged and left out."""
        found: list[semver.Version] = []
        for block in self._blocks.values():
            try:
                found.append(semver.Version.parse(block.document.version))
            except ValueError:
                logger.warning(
                    "Ignoring non-semver version %r in %s",
                    block.document.version,
                    block.path,
                )
        return found

    def lacking(self, capability: str) -> list[Block]:
        """Blocks where at least one model entry lacks *capability*."""
        return [b for b in self._blocks.values() if b.lacks(capability)]

    def path_for(self, short_name: str) -> Path:
        """Where the block for *short_name* lives (or would be created)."""
        existing = self._blocks.get(short_name)
        if existing is not None:
            return existing.path
        return self.directory / f"{short_name}.yaml"

    def _load_file(self, path: Path) -> Block:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise BlockLoadError(path, str(exc)) from exc

        try:
            document = parse_block(raw)
        except yaml.YAMLError as exc:
            raise BlockLoadError(path, f"YAML parse error: {exc}") from exc
        except ValueError as exc:
            # pydantic.ValidationError is a ValueError subclass
            raise BlockLoadError(path, str(exc)) from exc

        return Block(path=path, document=document)
