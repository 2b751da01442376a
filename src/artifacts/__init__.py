"""Artifact generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import SymbolGraphConfig


def generate_batch(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: SymbolGraphConfig | None = None,
) -> dict[str, Any]:
    """Generate the batch artifact via lazy import to avoid package import cycles."""
    from artifacts.write import generate_batch as _generate_batch

    return _generate_batch(root=root, out_dir=out_dir, config=config)


__all__ = ["generate_batch"]
