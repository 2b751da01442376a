from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from artifacts.write import generate_batch, write_file_output
from verify.verify import DeterminismResult, verify_determinism, verify_file_output

if TYPE_CHECKING:
    from pathlib import Path


def _write_minimal_workspace(root: Path) -> None:
    (root / "src").mkdir(parents=True, exist_ok=True)
    (root / "src" / "module.ts").write_text(
        "export function run() {\n  return helper();\n}\n\n"
        "function helper() {\n  return 1;\n}\n",
        encoding="utf-8",
    )


def test_verify_determinism_requires_artifacts_dir(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    root.mkdir()
    _write_minimal_workspace(root)

    missing_dir = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="Artifacts directory does not exist"):
        verify_determinism(root=root, artifacts_dir=missing_dir)


def test_verify_determinism_accepts_fresh_batch(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    root.mkdir()
    _write_minimal_workspace(root)
    artifacts_dir = tmp_path / "artifacts"
    generate_batch(root=root, out_dir=artifacts_dir)

    assert verify_determinism(root=root, artifacts_dir=artifacts_dir) == (
        DeterminismResult(ok=True)
    )


def test_verify_determinism_relative_paths_and_sorted_mismatches(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = tmp_path / "ws"
    root.mkdir()
    _write_minimal_workspace(root)

    artifacts_dir = tmp_path / "artifacts"
    artifacts_dir.mkdir()

    for rel_path, content in (
        ("b.txt", "b-original"),
        ("a.txt", "a-original"),
        ("gone.txt", "gone"),
    ):
        (artifacts_dir / rel_path).write_text(content, encoding="utf-8")

    def _fake_generate_batch(*, root: Path, out_dir: Path) -> dict[str, object]:
        (out_dir / "a.txt").write_text("a-original", encoding="utf-8")
        (out_dir / "b.txt").write_text("b-regenerated", encoding="utf-8")
        (out_dir / "new.txt").write_text("new", encoding="utf-8")
        return {"artifacts": [str(out_dir / "a.txt"), str(out_dir / "b.txt")]}

    monkeypatch.setattr("verify.verify.generate_batch", _fake_generate_batch)

    result = verify_determinism(root=root, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(
        ok=False,
        mismatches=("b.txt",),
        missing=("gone.txt",),
        extra=("new.txt",),
    )


def test_verify_file_output_detects_changes(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    root.mkdir()
    _write_minimal_workspace(root)
    source = root / "src" / "module.ts"
    output = tmp_path / "module.json"
    write_file_output(root=root, file_path=source, output=output)

    assert verify_file_output(root=root, file_path=source, output=output).ok

    source.write_text("export function run() {\n  return 2;\n}\n", encoding="utf-8")
    result = verify_file_output(root=root, file_path=source, output=output)

    assert result == DeterminismResult(ok=False, mismatches=(str(output),))


def test_verify_file_output_requires_output(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    root.mkdir()
    _write_minimal_workspace(root)

    with pytest.raises(FileNotFoundError, match="Output file does not exist"):
        verify_file_output(
            root=root,
            file_path=root / "src" / "module.ts",
            output=tmp_path / "missing.json",
        )
