"""Dependency edge models raised from symbol bodies."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

UNKNOWN_FILE_PATH = "<unknown>"


class GeneralKind(str, Enum):
    """Coarse symbol kind shared with downstream graph consumers."""

    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    METHOD = "method"
    TYPE_PARAMETER = "type_parameter"


# Numeric codes of the LSP SymbolKind table, used on the wire only.
GENERAL_KIND_CODES: dict[GeneralKind, int] = {
    GeneralKind.CLASS: 4,
    GeneralKind.METHOD: 5,
    GeneralKind.INTERFACE: 10,
    GeneralKind.FUNCTION: 11,
    GeneralKind.TYPE_PARAMETER: 25,
}

_KINDS_BY_CODE = {code: kind for kind, code in GENERAL_KIND_CODES.items()}


def general_kind_from_wire(value: object) -> object:
    """Map a numeric wire code back to a GeneralKind, passing others through."""
    if isinstance(value, int) and not isinstance(value, bool):
        kind = _KINDS_BY_CODE.get(value)
        if kind is None:
            msg = f"Unsupported symbol kind code: {value}"
            raise ValueError(msg)
        return kind
    return value


class EdgeTarget(BaseModel):
    """A workspace-internal symbol referenced from a symbol body."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    qualified_name: str = Field(alias="codeSymbolName")
    file_path: str = Field(alias="filePath")


class DependencyEdge(BaseModel):
    """Directed reference from an enclosing symbol to workspace targets."""

    model_config = ConfigDict(populate_by_name=True)

    source_name: str = Field(alias="codeSymbolName")
    source_kind: GeneralKind = Field(
        default=GeneralKind.FUNCTION, alias="codeSymbolKind"
    )
    targets: list[EdgeTarget] = Field(default_factory=list, alias="edges")

    @field_validator("source_kind", mode="before")
    @classmethod
    def _kind_from_code(cls, v: object) -> object:
        return general_kind_from_wire(v)

    @field_serializer("source_kind")
    def _kind_to_code(self, kind: GeneralKind) -> int:
        return GENERAL_KIND_CODES[kind]


__all__ = [
    "GENERAL_KIND_CODES",
    "UNKNOWN_FILE_PATH",
    "DependencyEdge",
    "EdgeTarget",
    "GeneralKind",
    "general_kind_from_wire",
]
