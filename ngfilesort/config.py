"""Configuration loading for ngfilesort (.ngfilesort.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

CONFIG_FILENAME = ".ngfilesort.yml"
DEFAULT_EXTENSIONS = (".js",)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SortConfig:
    """Represents the settings defined in .ngfilesort.yml."""

    root: Path
    order_patterns: List[str] = field(default_factory=list)
    exclude_paths: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


def load_config(config_path: Path) -> SortConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SortConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    extensions = [_normalise_extension(ext) for ext in _as_str_list(data.get("extensions"))]

    return SortConfig(
        root=root,
        order_patterns=_as_str_list(data.get("order_patterns")),
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        extensions=[ext for ext in extensions if ext] or list(DEFAULT_EXTENSIONS),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(value: str) -> str:
    value = value.strip().lower()
    if value and not value.startswith("."):
        value = f".{value}"
    return value


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "SortConfig", "load_config"]
