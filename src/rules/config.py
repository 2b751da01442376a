from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILENAME = "symbolgraph.toml"

DEFAULT_EXTENSIONS = (".ts", ".tsx")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class SymbolGraphConfig(BaseModel):
    """Configuration for symbolgraph-core extraction runs."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".symbolgraph",
        description="Output directory for batch artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all source files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="File suffixes treated as TypeScript sources",
    )
    disambiguate_duplicates: bool = Field(
        default=True,
        description="Suffix repeated qualified names within a file with @L<line>",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Root logging level used by the CLI",
    )

    @field_validator("extensions", mode="before")
    @classmethod
    def validate_extensions(cls, v: Any) -> Any:
        """Require a non-empty list of dotted suffixes."""
        if not isinstance(v, list) or not v:
            msg = "extensions must be a non-empty list of file suffixes"
            raise ValueError(msg)
        for suffix in v:
            if not isinstance(suffix, str) or not suffix.startswith("."):
                msg = f"Invalid extension {suffix!r}: suffixes must start with '.'"
                raise ValueError(msg)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the workspace root.

    The config output_dir must be a non-empty relative path that remains
    within the workspace root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the workspace root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the workspace root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the workspace root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> SymbolGraphConfig:
    """Load configuration from symbolgraph.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return SymbolGraphConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SymbolGraphConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
