"""Workspace-membership classification of fully-qualified names.

Names produced by the resolver for workspace symbols look like
``"/ws/src/util".helper`` or ``"/ws/src/util".Helper.run``. Anything else
(bare names, package modules, unshaped quoted names) is external and never
turned into a dependency edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from utils import compose_name, is_within_workspace, module_path

ExternalReason = Literal["external", "malformed", "outside_workspace"]


@dataclass(frozen=True)
class InternalReference:
    """A symbol declared in a workspace file."""

    path: str
    chain: tuple[str, ...]


@dataclass(frozen=True)
class ExternalReference:
    """A name that does not denote a workspace symbol."""

    name: str
    reason: ExternalReason = "external"


WorkspaceReference = InternalReference | ExternalReference


def _normalize_root(workspace_root: str) -> str:
    root = workspace_root.replace("\\", "/")
    return root.rstrip("/") if len(root) > 1 else root


def classify_reference(
    fully_qualified_name: str, workspace_root: str
) -> WorkspaceReference:
    """Split a fully-qualified name into its module path and name chain.

    Only ``"<path>".Name`` and ``"<path>".Enclosing.Name`` shapes whose path
    lies inside ``workspace_root`` are internal.
    """
    root = _normalize_root(workspace_root)
    if not fully_qualified_name.startswith(f'"{root}'):
        return ExternalReference(fully_qualified_name)

    closing = fully_qualified_name.find('"', 1)
    if closing < 0:
        return ExternalReference(fully_qualified_name, "malformed")

    path = fully_qualified_name[1:closing]
    remainder = fully_qualified_name[closing + 1 :]
    if not remainder.startswith("."):
        return ExternalReference(fully_qualified_name, "malformed")

    chain = tuple(remainder[1:].split("."))
    if len(chain) not in (1, 2) or not all(chain):
        return ExternalReference(fully_qualified_name, "malformed")

    if not is_within_workspace(path, root):
        return ExternalReference(fully_qualified_name, "outside_workspace")

    return InternalReference(path=path, chain=chain)


def qualified_name_for(reference: InternalReference, workspace_root: str) -> str:
    """Rewrite an internal reference as ``<modulePath>[.<Enclosing>].<Name>``."""
    module_name = module_path(
        _normalize_root(workspace_root), reference.path, strip_extension=False
    )
    return compose_name(module_name, *reference.chain)


__all__ = [
    "ExternalReference",
    "InternalReference",
    "WorkspaceReference",
    "classify_reference",
    "qualified_name_for",
]
