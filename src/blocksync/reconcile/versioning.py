"""VersionResolver — the shared patch version written by a sync run.

Resolution order for the *current* version:

1. an explicit override (used as the new version as-is, no bump);
2. the version manifest file, when one is configured and exists;
3. the highest semver found across the existing blocks;
4. ``1.0.0``.

The new version is the current one with its patch level bumped.
"""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

import semver

from blocksync.runtime.errors import ConfigError

if TYPE_CHECKING:
    from blocksync.blocks.store import BlockStore

logger = logging.getLogger(__name__)

INITIAL_VERSION = semver.Version(1, 0, 0)


class VersionResolver:
    """Work out the version a run stamps on the blocks it touches."""

    def __init__(self, version_file: Path | None = None) -> None:
        self.version_file = version_file

    def current(self, store: BlockStore) -> semver.Version:
        """The version the collection is at before this run."""
        from_file = self._read_manifest()
        if from_file is not None:
            return from_file

        versions = store.versions
        if versions:
            return max(versions)
        return INITIAL_VERSION

    def resolve(self, store: BlockStore, override: str | None = None) -> str:
        """Return the new version string for this run.

        Raises:
            ConfigError: If *override* or the manifest is not valid semver.
        """
        if override is not None:
            return str(_parse(override, "version override"))

        current = self.current(store)
        new = current.bump_patch()
        logger.info("Current version: %s, new version: %s", current, new)
        return str(new)

    def record(self, version: str) -> None:
        """Persist *version* to the manifest file, if one is configured.

        Raises:
            ConfigError: If the manifest cannot be written.
        """
        if self.version_file is None:
            return
        try:
            self.version_file.parent.mkdir(parents=True, exist_ok=True)
            self.version_file.write_text(f"{version}\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot write {self.version_file}: {exc}") from exc
        logger.debug("Recorded version %s in %s", version, self.version_file)

    def _read_manifest(self) -> semver.Version | None:
        if self.version_file is None or not self.version_file.is_file():
            return None
        try:
            raw = self.version_file.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read {self.version_file}: {exc}") from exc
        return _parse(raw, str(self.version_file))


def _parse(value: str, origin: str) -> semver.Version:
    try:
        return semver.Version.parse(value.strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid semver {value!r} in {origin}") from exc
