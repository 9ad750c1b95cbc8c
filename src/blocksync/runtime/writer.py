"""BlockWriter — write rendered block text to disk."""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003

from blocksync.runtime.errors import BlockWriteError

logger = logging.getLogger(__name__)


class BlockWriter:
    """Write exact block content to a path.

    The file ends up containing exactly the given text; parent directories
    are created as needed.
    """

    def write(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise BlockWriteError(path, str(exc)) from exc
        logger.debug("Wrote %s (%d bytes)", path, len(content))
