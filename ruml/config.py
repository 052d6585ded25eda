"""Configuration loading for ruml (.ruml.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".ruml.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RumlConfig:
    """Represents the settings defined in .ruml.yml."""

    root: Path
    output_type: str = "plantuml"
    include_enums: bool = False
    visibility_markers: bool = False
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> RumlConfig:
    """Load configuration for ``config_path`` (a directory, source file or config file)."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RumlConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = RumlConfig(root=root)
    output_type = _as_str(data.get("output_type"))
    if output_type:
        config.output_type = output_type
    include_enums = _as_bool(data.get("include_enums"))
    if include_enums is not None:
        config.include_enums = include_enums
    visibility_markers = _as_bool(data.get("visibility_markers"))
    if visibility_markers is not None:
        config.visibility_markers = visibility_markers
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "RumlConfig", "load_config"]
