"""Tests for ngfilesort.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from ngfilesort.config import ConfigError, SortConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, SortConfig)
    assert config.root == tmp_path.resolve()
    assert config.order_patterns == []
    assert config.exclude_paths == []
    assert config.extensions == [".js"]


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".ngfilesort.yml"
    config_file.write_text(
        """
order_patterns:
  - "*.module.js"
  - "*.config.js"
exclude_paths: ["vendor/", "*.min.js"]
extensions: [js, ".JSX"]
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.order_patterns == ["*.module.js", "*.config.js"]
    assert config.exclude_paths == ["vendor/", "*.min.js"]
    assert config.extensions == [".js", ".jsx"]


def test_load_config_accepts_scalar_pattern(tmp_path: Path) -> None:
    (tmp_path / ".ngfilesort.yml").write_text("order_patterns: '*.module.js'\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.order_patterns == ["*.module.js"]


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".ngfilesort.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).order_patterns == []


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".ngfilesort.yml").write_text("- one\n- two\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".ngfilesort.yml").write_text("order_patterns: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)
    assert ".ngfilesort.yml" in str(excinfo.value)
