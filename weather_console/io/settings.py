import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from weather_console.io.channels import CHANNEL_CATALOG, ChannelSpec

PROJECT_MARKERS: Iterable[str] = (".git", "pyproject.toml", "config")
DEFAULT_SETTINGS_PATH = Path("config/console.yml")

PathLike = Union[str, os.PathLike]


class ConsoleConfigError(RuntimeError):
    """Raised when a console configuration file is invalid."""


@dataclass
class ConsoleOptions:
    fallback: str = "--"
    record_interval_s: float = 30.0
    retention_h: float = 12.0
    refresh_interval_s: float = 300.0
    selection_timeout_s: float = 120.0

    @property
    def retention_s(self) -> float:
        return self.retention_h * 3600.0


@dataclass
class ConsoleConfig:
    """Logical channel name -> inbound entity id, plus behaviour options."""

    channels: Dict[str, str] = field(default_factory=dict)
    options: ConsoleOptions = field(default_factory=ConsoleOptions)

    def entity_for(self, name: str) -> Optional[str]:
        return self.channels.get(name)

    def spec_for(self, name: str) -> ChannelSpec:
        return CHANNEL_CATALOG[name]

    def names_for(self, entity_id: str) -> List[str]:
        return [name for name, entity in self.channels.items() if entity == entity_id]


def find_project_root(markers: Iterable[str] = PROJECT_MARKERS) -> Path:
    """Attempt to locate the repository root by walking up until a marker file/dir appears."""
    start = Path(__file__).resolve().parent
    for candidate in [start] + list(start.parents):
        for marker in markers:
            if (candidate / marker).exists():
                return candidate
    return start


def _resolve(path: PathLike, project_root: Path) -> Path:
    target = Path(path)
    if not target.is_absolute():
        target = project_root / target
    return target


def _load_yaml(target: Path) -> Dict[str, Any]:
    if not target.exists():
        raise ConsoleConfigError(f"settings file not found: {target}")
    try:
        with open(target, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConsoleConfigError(f"Failed to read settings file {target}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConsoleConfigError(f"Invalid YAML in settings file {target}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConsoleConfigError(f"Settings file {target} must contain a mapping")
    return data


def load_settings(path: Optional[PathLike] = None) -> Dict[str, Any]:
    """Load the YAML settings file, defaulting to ``config/console.yml`` under the project root."""
    project_root = find_project_root()
    target = _resolve(path or DEFAULT_SETTINGS_PATH, project_root)
    return _load_yaml(target)


def _parse_channels(raw: Any) -> Dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConsoleConfigError("channels must be a mapping of channel name to entity id")
    channels: Dict[str, str] = {}
    for name, entity in raw.items():
        if name not in CHANNEL_CATALOG:
            raise ConsoleConfigError(f"Unknown channel '{name}'")
        # blank entries leave the channel unmapped
        if entity is None or str(entity).strip() == "":
            continue
        channels[name] = str(entity).strip()
    return channels


def _parse_options(raw: Any) -> ConsoleOptions:
    if raw is None:
        return ConsoleOptions()
    if not isinstance(raw, dict):
        raise ConsoleConfigError("options must be a mapping")
    options = ConsoleOptions()
    for key, value in raw.items():
        if not hasattr(options, key) or key == "retention_s":
            raise ConsoleConfigError(f"Unknown option '{key}'")
        if key == "fallback":
            setattr(options, key, str(value))
            continue
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ConsoleConfigError(f"Option '{key}' must be numeric, got {value!r}") from exc
        if number <= 0:
            raise ConsoleConfigError(f"Option '{key}' must be positive")
        setattr(options, key, number)
    return options


def parse_console_config(data: Dict[str, Any]) -> ConsoleConfig:
    return ConsoleConfig(
        channels=_parse_channels(data.get("channels")),
        options=_parse_options(data.get("options")),
    )


def load_console_config(path: Optional[PathLike] = None) -> ConsoleConfig:
    """Load and validate the console configuration."""
    return parse_console_config(load_settings(path))
