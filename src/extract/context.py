"""Read-only context shared by every extraction step of one file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from utils import module_path

if TYPE_CHECKING:
    from parse.treesitter_tree import SourceTree


@dataclass(frozen=True)
class ExtractionContext:
    """Everything the extraction passes need to know about the current file.

    Attributes:
        tree: Parsed source file with its resolution queries
        workspace_root: Absolute POSIX path module paths are relative to
        original_file_path: Caller-supplied display path, copied to records
        module_name: Dotted module path of ``tree.file_path``
    """

    tree: SourceTree
    workspace_root: str
    original_file_path: str
    module_name: str

    @classmethod
    def create(
        cls,
        tree: SourceTree,
        workspace_root: str,
        original_file_path: str | None = None,
    ) -> ExtractionContext:
        return cls(
            tree=tree,
            workspace_root=workspace_root,
            original_file_path=original_file_path or tree.file_path,
            module_name=module_path(workspace_root, tree.file_path),
        )

    @property
    def file_path(self) -> str:
        return self.tree.file_path


__all__ = ["ExtractionContext"]
