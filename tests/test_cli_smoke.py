from __future__ import annotations

import shutil
from pathlib import Path

import orjson
import pytest

from cli import main
from contract.artifacts import SYMBOLS_JSONL
from rules.config import ConfigError, resolve_output_dir


def _copy_workspace_fixture(root: Path) -> None:
    fixture_workspace = Path(__file__).parent / "fixtures" / "mini_workspace"
    shutil.copytree(fixture_workspace, root)


def test_cli_extract_writes_output_field(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    _copy_workspace_fixture(root)
    output = tmp_path / "out" / "main.json"

    exit_code = main(
        ["extract", str(root), str(root / "src" / "main.ts"), str(output), "src/main.ts"]
    )

    assert exit_code == 0
    payload = orjson.loads(output.read_bytes())
    assert list(payload) == ["output"]
    names = [record["symbolName"] for record in payload["output"]]
    assert names == [
        "src.main.Greeter.greet",
        "src.main.Greeter.format",
        "src.main.Greeter",
        "src.main.run",
        "src.main.createCookie",
        "src.main.revisit",
        "src.main.Handler",
        "src.main.Options",
    ]
    run = payload["output"][3]
    assert run["symbolKind"] == 11
    assert run["extraSymbolHint"] == "typescript.function"
    assert run["originalFilePath"] == "src/main.ts"
    assert run["dependencies"] == [
        {
            "codeSymbolName": "src.main.run",
            "codeSymbolKind": 11,
            "edges": [
                {
                    "codeSymbolName": "src.util.helper",
                    "filePath": str((root / "src" / "util.ts").resolve()),
                }
            ],
        }
    ] * 2


def test_cli_batch_default_output_dir_from_fixture(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    _copy_workspace_fixture(root)

    assert not (root / ".symbolgraph").exists(), "output dir must not pre-exist"
    exit_code = main(["batch", str(root)])

    artifact = root / ".symbolgraph" / SYMBOLS_JSONL
    assert exit_code == 0
    lines = [orjson.loads(line) for line in artifact.read_bytes().splitlines()]
    assert [line["filePath"] for line in lines] == [
        "src/index.ts",
        "src/main.ts",
        "src/ui/button.tsx",
        "src/util.ts",
    ]


def test_cli_batch_out_dir_flag_and_rerun(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    _copy_workspace_fixture(root)
    out_dir = tmp_path / "custom-artifacts"

    assert main(["batch", str(root), "--out-dir", str(out_dir)]) == 0
    first = (out_dir / SYMBOLS_JSONL).read_bytes()
    assert main(["batch", str(root), "--out-dir", str(out_dir)]) == 0

    assert (out_dir / SYMBOLS_JSONL).read_bytes() == first


def test_cli_invalid_config_exits_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = tmp_path / "ws"
    _copy_workspace_fixture(root)
    (root / "symbolgraph.toml").write_text("bogus_key = true\n", encoding="utf-8")

    exit_code = main(["batch", str(root)])

    assert exit_code == 2
    assert "Invalid config" in capsys.readouterr().err


def test_cli_validate_reports_path_and_message(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text('{"output": [{"symbolName": "x"}]}', encoding="utf-8")

    exit_code = main(["validate", str(broken)])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert f"{broken.resolve()}:" in captured.err
    assert "Schema validation failed" in captured.err


def test_cli_validate_accepts_extract_output(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    _copy_workspace_fixture(root)
    output = tmp_path / "util.json"
    main(["extract", str(root), str(root / "src" / "util.ts"), str(output)])

    assert main(["validate", str(output)]) == 0


def test_cli_verify_single_file(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    _copy_workspace_fixture(root)
    source = root / "src" / "util.ts"
    output = tmp_path / "util.json"
    assert main(["extract", str(root), str(source), str(output)]) == 0

    assert main(["verify", str(root), str(source), str(output)]) == 0

    output.write_bytes(output.read_bytes().replace(b"helper", b"helpr"))
    assert main(["verify", str(root), str(source), str(output)]) == 1


def test_cli_verify_missing_artifacts_dir_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = tmp_path / "ws"
    _copy_workspace_fixture(root)

    artifacts_dir = tmp_path / "missing-artifacts"
    exit_code = main(["verify", str(root), "--artifacts-dir", str(artifacts_dir)])

    assert exit_code == 2
    assert "Artifacts directory does not exist" in capsys.readouterr().err


def test_resolve_output_dir_rejects_escape(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    root.mkdir()
    with pytest.raises(ConfigError, match="escapes the workspace root"):
        resolve_output_dir(root, "../outside")
