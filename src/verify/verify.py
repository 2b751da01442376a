"""Determinism verification for symbolgraph-core outputs."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from artifacts.write import generate_batch, write_file_output


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _list_relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def verify_file_output(
    *,
    root: Path,
    file_path: Path,
    output: Path,
    original_file_path: str | None = None,
) -> DeterminismResult:
    """Verify that a single-file extraction output is reproducible.

    Re-extracts ``file_path`` into a temporary file and compares it
    byte-for-byte against ``output``.

    Raises:
        FileNotFoundError: If output does not exist.
    """
    if not output.is_file():
        msg = f"Output file does not exist: {output}"
        raise FileNotFoundError(msg)
    with tempfile.TemporaryDirectory() as temp_dir:
        regenerated = Path(temp_dir) / output.name
        write_file_output(
            root=root,
            file_path=file_path,
            output=regenerated,
            original_file_path=original_file_path,
        )
        same = filecmp.cmp(output, regenerated, shallow=False)

    return DeterminismResult(ok=same, mismatches=() if same else (str(output),))


def verify_determinism(*, root: Path, artifacts_dir: Path) -> DeterminismResult:
    """Verify that batch artifacts are deterministic.

    Regenerates the batch artifacts into a temporary directory and compares
    them byte-for-byte against the existing artifacts directory. File set
    comparisons are performed on relative paths to avoid root-dependent
    mismatches.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        generate_batch(root=root, out_dir=temp_path)

        original_files = _list_relative_files(artifacts_dir)
        regenerated_files = _list_relative_files(temp_path)

        missing = sorted(str(path) for path in original_files - regenerated_files)
        extra = sorted(str(path) for path in regenerated_files - original_files)

        mismatches = sorted(
            str(path)
            for path in original_files & regenerated_files
            if not filecmp.cmp(artifacts_dir / path, temp_path / path, shallow=False)
        )

    ok = not missing and not extra and not mismatches
    return DeterminismResult(
        ok=ok,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
    )
