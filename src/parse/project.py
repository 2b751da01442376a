"""In-memory collection of parsed source files."""

from __future__ import annotations

import logging
from pathlib import Path

from parse.treesitter_tree import SourceTree

logger = logging.getLogger(__name__)


def normalize_path(file_path: str | Path) -> str:
    """Absolute POSIX form of ``file_path`` used as the cache key."""
    return Path(file_path).expanduser().resolve(strict=False).as_posix()


class SourceProject:
    """Parsed source files keyed by absolute path.

    Files reached through relative imports are loaded lazily on first use,
    so alias resolution can look into the rest of the workspace.
    """

    def __init__(self) -> None:
        self._files: dict[str, SourceTree] = {}

    def __contains__(self, file_path: object) -> bool:
        if not isinstance(file_path, (str, Path)):
            return False
        return normalize_path(file_path) in self._files

    def _parse(self, key: str) -> SourceTree | None:
        try:
            source_bytes = Path(key).read_bytes()
        except OSError as exc:
            logger.debug("Cannot read %s: %s", key, exc)
            return None
        return SourceTree(key, source_bytes, project=self)

    def add_source_file(self, file_path: str | Path) -> SourceTree | None:
        """Parse ``file_path`` (replacing any cached tree) and return it."""
        key = normalize_path(file_path)
        tree = self._parse(key) if Path(key).is_file() else None
        if tree is None:
            self._files.pop(key, None)
            return None
        self._files[key] = tree
        return tree

    def add_source_text(self, file_path: str | Path, source: str) -> SourceTree:
        """Register in-memory source under ``file_path`` without touching disk."""
        key = normalize_path(file_path)
        tree = SourceTree(key, source.encode("utf8"), project=self)
        self._files[key] = tree
        return tree

    def get_source_file(self, file_path: str | Path) -> SourceTree | None:
        """Return the cached tree for ``file_path``, loading it if needed."""
        key = normalize_path(file_path)
        tree = self._files.get(key)
        if tree is not None:
            return tree
        if not Path(key).is_file():
            return None
        return self.add_source_file(key)

    def refresh_from_file_system(self, file_path: str | Path) -> SourceTree | None:
        """Re-read ``file_path`` when its contents changed on disk."""
        key = normalize_path(file_path)
        cached = self._files.get(key)
        if not Path(key).is_file():
            if cached is not None:
                logger.info("Source file removed from disk: %s", key)
                del self._files[key]
            return None
        if cached is not None and Path(key).read_bytes() == cached.source_bytes:
            return cached
        return self.add_source_file(key)


__all__ = ["SourceProject", "normalize_path"]
