"""Stable output contract surface for symbolgraph-core.

Treat these exports as the authoritative boundary for consumers of the
extracted symbol inventories.
"""

from contract.artifacts import (
    ARTIFACT_SPECS,
    OUTPUT_FIELD,
    SYMBOLS_JSONL,
    ArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {"BatchFileOutput", "FileOutput", "SymbolRecord"}:
        from contract.models import BatchFileOutput, FileOutput, SymbolRecord

        return {
            "BatchFileOutput": BatchFileOutput,
            "FileOutput": FileOutput,
            "SymbolRecord": SymbolRecord,
        }[name]

    if name in {
        "ValidationMessage",
        "ValidationResult",
        "validate_artifacts",
        "validate_output",
    }:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
            validate_output,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
            "validate_output": validate_output,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SPECS",
    "OUTPUT_FIELD",
    "SYMBOLS_JSONL",
    "ArtifactSpec",
    "BatchFileOutput",
    "FileOutput",
    "SymbolRecord",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
    "validate_output",
]
