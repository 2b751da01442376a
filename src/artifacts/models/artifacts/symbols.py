"""Symbol models for extracted TypeScript declarations.

A ``SymbolRecord`` is one declaration found in a source file together with
its location, code snippet and the dependency edges raised from its body.
Attribute names are Python-style; the JSON names used by downstream graph
consumers are kept as aliases.
"""

from __future__ import annotations

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
)

from artifacts.models.artifacts.dependencies import (
    GENERAL_KIND_CODES,
    DependencyEdge,
    GeneralKind,
    general_kind_from_wire,
)

LANGUAGE_ID = "typescript"


class SymbolHint(str, Enum):
    """Fine-grained kind of an extracted symbol."""

    FUNCTION = "typescript.function"
    CLASS = "typescript.class"
    INTERFACE = "typescript.interface"
    CLASS_METHOD = "typescript.classMethod"
    CLASS_ARROW_FUNCTION = "typescript.classArrowFunction"
    ARROW_FUNCTION = "typescript.arrowFunction"
    TYPE_ALIAS = "typescript.typeAlias"


_HINT_TITLES: dict[SymbolHint, str] = {
    SymbolHint.FUNCTION: "Function",
    SymbolHint.CLASS: "Class",
    SymbolHint.INTERFACE: "Interface",
    SymbolHint.CLASS_METHOD: "Class Method",
    SymbolHint.CLASS_ARROW_FUNCTION: "Class Arrow Function",
    SymbolHint.ARROW_FUNCTION: "Arrow Function",
    SymbolHint.TYPE_ALIAS: "Type Alias",
}


def title_for_hint(hint: SymbolHint | str | None) -> str:
    """Human title for a symbol hint, "Unknown" for anything unrecognised."""
    if hint is None:
        return "Unknown"
    try:
        return _HINT_TITLES[SymbolHint(hint)]
    except ValueError:
        return "Unknown"


class CodeSnippet(BaseModel):
    """Source text attached to a symbol."""

    model_config = ConfigDict(populate_by_name=True)

    language_id: str = Field(default=LANGUAGE_ID, alias="languageId")
    code: str = ""


class SymbolRecord(BaseModel):
    """A symbol extracted from a TypeScript source file."""

    model_config = ConfigDict(populate_by_name=True)

    qualified_name: str = Field(alias="symbolName")
    kind: GeneralKind = Field(alias="symbolKind")
    start_line: int = Field(alias="symbolStartLine", ge=1)
    end_line: int = Field(alias="symbolEndLine", ge=1)
    snippet: CodeSnippet = Field(default_factory=CodeSnippet, alias="codeSnippet")
    extra_hint: SymbolHint | None = Field(alias="extraSymbolHint")
    dependencies: list[DependencyEdge] = Field(default_factory=list)
    file_path: str = Field(alias="fsFilePath")
    original_file_path: str = Field(alias="originalFilePath")
    working_directory: str = Field(alias="workingDirectory")
    display_name: str = Field(alias="displayName")
    local_name: str = Field(alias="originalName")

    @computed_field(alias="originalSymbolName")  # type: ignore[prop-decorator]
    @property
    def original_symbol_name(self) -> str:
        return self.local_name

    @field_validator("kind", mode="before")
    @classmethod
    def _kind_from_code(cls, v: object) -> object:
        return general_kind_from_wire(v)

    @field_serializer("kind")
    def _kind_to_code(self, kind: GeneralKind) -> int:
        return GENERAL_KIND_CODES[kind]

    def to_wire(self) -> dict[str, object]:
        """Dump using the JSON field names."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "LANGUAGE_ID",
    "CodeSnippet",
    "SymbolHint",
    "SymbolRecord",
    "title_for_hint",
]
