"""Configuration rules for symbolgraph-core."""

from rules.config import (
    CONFIG_FILENAME,
    ConfigError,
    SymbolGraphConfig,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "SymbolGraphConfig",
    "load_config",
    "resolve_output_dir",
]
