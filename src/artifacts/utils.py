"""Serialization helpers shared by the artifact writers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from pydantic import BaseModel

_JSON_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2


def _to_wire(model: BaseModel) -> object:
    """Wire form of an output model: original JSON names, LSP kind codes."""
    to_wire = getattr(model, "to_wire", None)
    if to_wire is not None:
        return to_wire()
    return model.model_dump(mode="json", by_alias=True)


def _write_jsonl(path: Path, models: Iterable[BaseModel]) -> None:
    lines = [orjson.dumps(_to_wire(model), option=orjson.OPT_SORT_KEYS) for model in models]
    path.write_bytes(b"".join(line + b"\n" for line in lines))


def _write_json(path: Path, model: BaseModel) -> None:
    path.write_bytes(orjson.dumps(_to_wire(model), option=_JSON_OPTIONS))


def _get_output_dir_name(out_dir: Path, root: Path) -> str:
    """``out_dir`` relative to ``root`` as a POSIX path, or "" when outside it."""
    if not out_dir.is_relative_to(root):
        return ""
    relative = out_dir.relative_to(root).as_posix()
    return "" if relative == "." else relative
