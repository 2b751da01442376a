"""Shared utilities for symbolgraph-core."""

from __future__ import annotations

import posixpath
from pathlib import Path, PurePath


def _to_posix(path: str | PurePath) -> str:
    path_str = path.as_posix() if isinstance(path, PurePath) else str(path)
    return path_str.replace("\\", "/")


def module_path(
    workspace_root: str | Path,
    file_path: str | Path,
    *,
    strip_extension: bool = True,
) -> str:
    """Convert a file path to a dotted module path relative to a workspace.

    Args:
        workspace_root: Directory all module paths are relative to
        file_path: Source file path (either separator style is accepted)
        strip_extension: Drop the final file extension before converting

    Returns:
        Module path (e.g., "src.foo"), or "" when the file is the root itself.

    Examples:
        >>> module_path("/ws", "/ws/src/foo.ts")
        'src.foo'
        >>> module_path("/ws", "/ws/foo.ts")
        'foo'
        >>> module_path("C:\\\\ws", "C:\\\\ws\\\\src\\\\foo.ts")
        'src.foo'
    """
    root_str = _to_posix(workspace_root)
    file_str = _to_posix(file_path)

    without_ext = posixpath.splitext(file_str)[0] if strip_extension else file_str

    relative = posixpath.relpath(without_ext or ".", root_str or ".")
    if relative == ".":
        return ""

    return ".".join(part for part in relative.split("/") if part)


def compose_name(*parts: str) -> str:
    """Join the non-empty parts of a qualified name with dots.

    >>> compose_name("src.foo", "", "bar")
    'src.foo.bar'
    """
    return ".".join(part for part in parts if part)


def is_within_workspace(path: str | Path, workspace_root: str | Path) -> bool:
    """Return True when ``path`` equals or lives below ``workspace_root``.

    The comparison works on whole path components, so ``/ws`` does not
    contain ``/wsx/a``.
    """
    root_parts = [part for part in _to_posix(workspace_root).split("/") if part]
    path_parts = [part for part in _to_posix(path).split("/") if part]
    return path_parts[: len(root_parts)] == root_parts
