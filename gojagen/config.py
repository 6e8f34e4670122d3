"""Configuration loading for gojagen (.gojagen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".gojagen.yml"
DEFAULT_PREFIX = "goja_go_"
DEFAULT_BRIDGE_IMPORT = "github.com/dop251/goja"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BridgeConfig:
    """Scripting runtime the generated package binds to."""

    import_path: str = DEFAULT_BRIDGE_IMPORT


@dataclass
class GojagenConfig:
    """Represents the settings defined in .gojagen.yml."""

    root: Path
    prefix: str = DEFAULT_PREFIX
    template: Optional[Path] = None
    output: Optional[Path] = None
    bridge: BridgeConfig = field(default_factory=BridgeConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> GojagenConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GojagenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = GojagenConfig(root=root)

    prefix = _as_str(data.get("prefix"))
    if prefix is not None:
        config.prefix = prefix

    template = _as_str(data.get("template"))
    if template:
        config.template = root / template

    output = _as_str(data.get("output"))
    if output:
        config.output = root / output

    bridge_data = _as_dict(data.get("bridge"))
    import_path = _as_str(bridge_data.get("import_path"))
    if import_path:
        config.bridge.import_path = import_path

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    raise ConfigError("exclude_paths must be a string or a list of strings")


__all__ = [
    "BridgeConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_BRIDGE_IMPORT",
    "DEFAULT_PREFIX",
    "GojagenConfig",
    "load_config",
]
