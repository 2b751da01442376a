"""Source file discovery for batch extraction."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from rules.config import DEFAULT_EXTENSIONS

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

# Package install trees are never part of the workspace.
SKIPPED_DIRECTORIES = frozenset({"node_modules", ".git"})


def _walk(root: Path, prune: Callable[[Path], bool]) -> Iterator[Path]:
    """Yield regular files below ``root`` without following symlinked dirs."""
    for current, dirnames, filenames in os.walk(root):
        current_path = Path(current)
        dirnames[:] = sorted(
            name
            for name in dirnames
            if name not in SKIPPED_DIRECTORIES
            and not (current_path / name).is_symlink()
            and not prune(current_path / name)
        )
        for name in filenames:
            path = current_path / name
            if not path.is_symlink():
                yield path


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Every non-symlinked .gitignore below root, root first."""
    found = [path for path in _walk(root, lambda _: False) if path.name == ".gitignore"]
    return sorted(found, key=lambda p: (len(p.relative_to(root).parts), p.as_posix()))


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if nested_gitignore:
        sources = _iter_gitignore_files(root)
    else:
        root_gitignore = root / ".gitignore"
        sources = [root_gitignore] if root_gitignore.is_file() else []

    if not sources:
        return None
    if len(sources) == 1:
        return cast("Callable[[str], bool]", parse_gitignore(sources[0]))

    matchers = [parse_gitignore(source) for source in sources]

    def matches(path_str: str) -> bool:
        # A nested matcher raises ValueError for paths outside its base dir.
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


@dataclass(frozen=True)
class _ScanFilter:
    root: Path
    output_parts: tuple[str, ...]
    extensions: tuple[str, ...]
    ignored: Callable[[str], bool] | None
    include_patterns: tuple[str, ...]
    exclude_patterns: tuple[str, ...]

    def is_output_dir(self, directory: Path) -> bool:
        if not self.output_parts:
            return False
        return directory.relative_to(self.root).parts == self.output_parts

    def accepts(self, path: Path) -> bool:
        if not any(path.name.endswith(suffix) for suffix in self.extensions):
            return False
        relative = PurePosixPath(path.relative_to(self.root).as_posix())
        if self.ignored is not None and self.ignored(str(path)):
            return False
        if self.include_patterns and not any(
            fnmatch(str(relative), pattern) for pattern in self.include_patterns
        ):
            return False
        return not any(
            fnmatch(str(relative), pattern) for pattern in self.exclude_patterns
        )


def find_source_files(
    directory: Path,
    *,
    output_dir: str = ".symbolgraph",
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all TypeScript source files in a workspace.

    ``node_modules``, ``.git``, the output directory and symlinked entries are
    never visited. Files ignored by ``.gitignore`` are dropped.

    Args:
        directory: Workspace root to search
        output_dir: Directory, relative to the root, to skip
        extensions: File suffixes treated as sources
        include_patterns: Optional fnmatch patterns; when given, a file must
            match at least one
        exclude_patterns: Optional fnmatch patterns; matching files are dropped
        nested_gitignore: Honor every .gitignore below the root, not just the
            root one

    Yields:
        Source paths sorted by their root-relative POSIX path.
    """
    scan_filter = _ScanFilter(
        root=directory,
        output_parts=PurePosixPath(output_dir).parts if output_dir else (),
        extensions=tuple(extensions),
        ignored=_build_gitignore_matcher(directory, nested_gitignore=nested_gitignore),
        include_patterns=tuple(include_patterns or ()),
        exclude_patterns=tuple(exclude_patterns or ()),
    )

    matched = [
        path
        for path in _walk(directory, scan_filter.is_output_dir)
        if scan_filter.accepts(path)
    ]
    yield from sorted(matched, key=lambda p: p.relative_to(directory).as_posix())


__all__ = ["SKIPPED_DIRECTORIES", "find_source_files"]
