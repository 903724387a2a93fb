"""Configuration loading for jsonshape (.jsonshape.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import JsonShapeError
from .models import Policy
from .stores.options import OUTPUT_FORMATS, DisplayOptions

CONFIG_FILENAME = ".jsonshape.yml"


class ConfigError(JsonShapeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Default output format and declaration name."""

    format: str = "structure"
    interface_name: str = "IResponse"


@dataclass
class StorageConfig:
    """Location of the persisted history/options store."""

    path: Optional[Path] = None
    history_enabled: bool = True


@dataclass
class JsonShapeConfig:
    """Represents the settings defined in .jsonshape.yml."""

    root: Path
    policy: Policy = field(default_factory=Policy)
    output: OutputConfig = field(default_factory=OutputConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    def display_options(self) -> DisplayOptions:
        return DisplayOptions(policy=self.policy, output_format=self.output.format)


def load_config(config_path: Path) -> JsonShapeConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return JsonShapeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    policy_data = _as_dict(data.get("policy"))
    depth = policy_data.get("max_depth")
    if depth is not None and (_as_int(depth) is None or _as_int(depth) < 0):
        raise ConfigError(f"policy.max_depth must be a non-negative integer, got {depth!r}")
    policy = Policy.from_mapping(policy_data)

    output_data = _as_dict(data.get("output"))
    output = OutputConfig()
    if output_data:
        output_format = _as_str(output_data.get("format")) or output.format
        if output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {output_format!r}"
            )
        output.format = output_format
        output.interface_name = _as_str(output_data.get("interface_name")) or output.interface_name

    storage = StorageConfig()
    storage_data = _as_dict(data.get("storage"))
    storage_path = _as_str(storage_data.get("path")) if storage_data else None
    if storage_path:
        candidate = Path(storage_path).expanduser()
        storage.path = candidate if candidate.is_absolute() else (root / candidate)

    history_data = _as_dict(data.get("history"))
    if history_data:
        enabled = _as_bool(history_data.get("enabled"))
        if enabled is not None:
            storage.history_enabled = enabled

    return JsonShapeConfig(root=root, policy=policy, output=output, storage=storage)


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


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


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


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "JsonShapeConfig",
    "OutputConfig",
    "StorageConfig",
    "load_config",
]
