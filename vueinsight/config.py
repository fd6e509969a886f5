"""Configuration loading for vueinsight (.vueinsight.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".vueinsight.yml"

_DEFAULT_EXTENSIONS = [".vue"]
_DEFAULT_CONCURRENCY = 8
_REPORT_FORMATS = {"json", "markdown"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ReportConfig:
    """Report rendering preferences."""

    format: str = "json"


@dataclass
class InsightConfig:
    """Represents the settings defined in .vueinsight.yml."""

    root: Path
    extensions: List[str] = field(default_factory=lambda: list(_DEFAULT_EXTENSIONS))
    exclude_paths: List[str] = field(default_factory=list)
    aliases: Dict[str, str] = field(default_factory=dict)
    concurrency: int = _DEFAULT_CONCURRENCY
    cache: bool = True
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(config_path: Path) -> InsightConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return InsightConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = InsightConfig(root=root)

    extensions = [_normalise_extension(ext) for ext in _as_str_list(data.get("extensions"))]
    if extensions:
        config.extensions = extensions

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    aliases = _as_dict(data.get("aliases"))
    config.aliases = {
        str(key): str(value)
        for key, value in aliases.items()
        if isinstance(value, str) and value.strip()
    }

    concurrency = _as_int(data.get("concurrency"))
    if concurrency is not None and concurrency > 0:
        config.concurrency = concurrency

    cache = _as_bool(data.get("cache"))
    if cache is not None:
        config.cache = cache

    report_data = _as_dict(data.get("report"))
    report_format = _as_str(report_data.get("format")) if report_data else None
    if report_format and report_format.lower() in _REPORT_FORMATS:
        config.report.format = report_format.lower()

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
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
    return value if value.startswith(".") else f".{value}"


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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
