"""Validation helpers for extraction outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from contract.artifacts import ARTIFACT_SPECS, OUTPUT_FIELD
from contract.models import BatchFileOutput, FileOutput

if TYPE_CHECKING:
    from pathlib import Path

    from contract.models import SymbolRecord


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_output(path: Path) -> ValidationResult:
    """Validate a single-file extract (JSON) or a batch artifact (JSONL)."""
    result = ValidationResult()
    if not path.is_file():
        result.errors.append(
            ValidationMessage(
                artifact="output",
                path=path,
                message="Output file does not exist.",
            )
        )
        return result

    if path.suffix == ".jsonl":
        _validate_jsonl("symbols", path, result)
    else:
        _validate_extract_json("output", path, result)
    return result


def validate_artifacts(artifacts_dir: Path) -> ValidationResult:
    """Validate every contract artifact of a batch output directory."""
    result = ValidationResult()

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    for artifact_name, spec in ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue
        if spec.format == "jsonl":
            _validate_jsonl(artifact_name, path, result)
        else:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message=f"Unsupported artifact format: {spec.format}.",
                )
            )

    return result


def _validate_extract_json(
    artifact_name: str, path: Path, result: ValidationResult
) -> None:
    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return

    if not isinstance(raw, dict) or OUTPUT_FIELD not in raw:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Expected JSON object with an '{OUTPUT_FIELD}' field.",
            )
        )
        return

    try:
        file_output = FileOutput.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return

    _check_records(artifact_name, path, None, file_output.output, result)


def _validate_jsonl(artifact_name: str, path: Path, result: ValidationResult) -> None:
    try:
        handle = path.open("rb")
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return

    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Invalid JSON: {exc}.",
                    )
                )
                continue

            try:
                file_output = BatchFileOutput.model_validate(data)
            except ValidationError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
                continue

            _check_records(artifact_name, path, line_number, file_output.output, result)


def _check_records(
    artifact_name: str,
    path: Path,
    line: int | None,
    records: list[SymbolRecord],
    result: ValidationResult,
) -> None:
    seen: set[str] = set()
    for record in records:
        if record.end_line < record.start_line:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line,
                    message=(
                        f"{record.qualified_name}: symbolEndLine "
                        f"{record.end_line} precedes symbolStartLine "
                        f"{record.start_line}."
                    ),
                )
            )
        for edge in record.dependencies:
            if edge.source_name != record.qualified_name:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line,
                        message=(
                            f"{record.qualified_name}: dependency source "
                            f"{edge.source_name} does not name its symbol."
                        ),
                    )
                )
        if record.qualified_name in seen:
            result.warnings.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line,
                    message=f"Duplicate symbol name {record.qualified_name}.",
                )
            )
        seen.add(record.qualified_name)


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
    "validate_output",
]
