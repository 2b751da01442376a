"""Per-file extraction output models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from artifacts.models.artifacts.symbols import SymbolRecord


class FileOutput(BaseModel):
    """Complete symbol inventory of one file, as written by ``extract``."""

    output: list[SymbolRecord] = Field(default_factory=list)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class BatchFileOutput(BaseModel):
    """One line of the batch ``symbols.jsonl`` artifact."""

    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(alias="filePath")
    output: list[SymbolRecord] = Field(default_factory=list)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


__all__ = ["BatchFileOutput", "FileOutput"]
