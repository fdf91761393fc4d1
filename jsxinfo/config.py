"""Configuration loading for jsx-info (.jsx-info.yml, .jsx-info.json, package.json)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAMES = (".jsx-info.yml", ".jsx-info.yaml", ".jsx-info.json")
PACKAGE_JSON_KEY = "jsx-info"


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be parsed."""


@dataclass
class JsxInfoConfig:
    """Settings read from a jsx-info configuration file."""

    source: Optional[Path] = None
    components: List[str] = field(default_factory=list)
    directory: Optional[str] = None
    files: List[str] = field(default_factory=list)
    ignore: List[str] = field(default_factory=list)
    plugins: List[str] = field(default_factory=list)
    prop: Optional[str] = None
    report: List[str] = field(default_factory=list)
    sort: Optional[str] = None
    gitignore: Optional[bool] = None


def load_config(search_dir: Path) -> JsxInfoConfig:
    """Load the first configuration found in ``search_dir``.

    Returns defaults when no configuration exists.
    """
    search_dir = search_dir.expanduser().resolve()
    for name in CONFIG_FILENAMES:
        candidate = search_dir / name
        if candidate.is_file():
            return _build_config(candidate, _read_config(candidate))

    package_json = search_dir / "package.json"
    if package_json.is_file():
        data = _read_config(package_json)
        section = data.get(PACKAGE_JSON_KEY)
        if section is not None:
            return _build_config(package_json, section)

    return JsxInfoConfig()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        if path.suffix == ".json":
            loaded = json.loads(text)
        else:
            loaded = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _build_config(path: Path, data: Any) -> JsxInfoConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"jsx-info configuration in {path.name} must be a mapping")

    directory = _as_str(data.get("directory"))
    if directory:
        directory = str((path.parent / directory).resolve())

    return JsxInfoConfig(
        source=path,
        components=_as_str_list(data.get("components")),
        directory=directory,
        files=_as_str_list(data.get("files")),
        ignore=_as_str_list(data.get("ignore")),
        plugins=_as_str_list(data.get("plugins")),
        prop=_as_str(data.get("prop")),
        report=_as_str_list(data.get("report")),
        sort=_as_str(data.get("sort")),
        gitignore=_as_bool(data.get("gitignore")),
    )


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
        return value.split()
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAMES", "ConfigError", "JsxInfoConfig", "load_config"]
