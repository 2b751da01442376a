from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import ConfigError, load_config


def _write_config(root: Path, toml_content: str) -> None:
    (root / "symbolgraph.toml").write_text(toml_content, encoding="utf-8")


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "exclude = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_extensions_must_be_dotted(tmp_path: Path) -> None:
    _write_config(tmp_path, 'extensions = ["ts"]')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_log_level_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, 'log_level = "LOUD"')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
exclude = ["**/*.spec.ts"]
extensions = [".ts"]
disambiguate_duplicates = false
log_level = "debug"
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.exclude == ["**/*.spec.ts"]
    assert config.extensions == [".ts"]
    assert config.disambiguate_duplicates is False
    assert config.log_level == "DEBUG"


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.output_dir == ".symbolgraph"
    assert config.include == []
    assert config.exclude == []
    assert config.extensions == [".ts", ".tsx"]
    assert config.disambiguate_duplicates is True
    assert config.log_level == "WARNING"


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path).output_dir == ".symbolgraph"
