"""Configuration for the task list."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from todo_list.exceptions import ConfigError
from todo_list.persistence import DEFAULT_STORAGE_KEY

STORAGE_BACKENDS = ("file", "memory")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(name) or default


@dataclass(frozen=True)
class AppConfig:
    """Settings resolved from arguments, then environment, then defaults.

    Attributes:
        data_dir: Directory holding the file blob store.
        storage_key: Fixed key the task collection is stored under.
        storage_backend: "file" or "memory".
        log_level: Name of the logging level.
        log_dir: Directory for log files; None disables file logging.
    """

    data_dir: Optional[Path] = None
    storage_key: Optional[str] = None
    storage_backend: str = "file"
    log_level: Optional[str] = None
    log_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        # Frozen dataclass, so fill defaults through object.__setattr__.
        data_dir = self.data_dir or _env("TODO_LIST_DATA_DIR", "~/.todo_list")
        object.__setattr__(self, "data_dir", Path(data_dir).expanduser())
        object.__setattr__(
            self, "storage_key", self.storage_key or _env("TODO_LIST_STORAGE_KEY", DEFAULT_STORAGE_KEY)
        )
        level = str(self.log_level or _env("TODO_LIST_LOG_LEVEL", "WARNING")).upper()
        object.__setattr__(self, "log_level", level)
        log_dir = self.log_dir or _env("TODO_LIST_LOG_DIR")
        object.__setattr__(self, "log_dir", Path(log_dir).expanduser() if log_dir else None)

        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                f"Must be one of: {', '.join(STORAGE_BACKENDS)}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log_level '{self.log_level}'")


class ConfigManager:
    """Config Manager

    This class handles the YAML Config.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize Config Manager."""
        self.path = Path(path)

    def load_config(self) -> dict[str, Any]:
        """Load YAML Config. An empty file yields an empty mapping."""
        try:
            with self.path.open(encoding="utf-8") as fp:
                config = yaml.safe_load(fp)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(f"Config file {self.path} must contain a mapping")
        return dict(config)


def load_config(path: str | Path | None = None, **overrides: Any) -> AppConfig:
    """Build an AppConfig from an optional YAML file plus keyword overrides.

    Overrides set to None are ignored so CLI flags that were not given
    fall through to the file and the environment.
    """
    values: dict[str, Any] = ConfigManager(path).load_config() if path else {}
    values.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    for key in ("data_dir", "log_dir"):
        if values.get(key) is not None:
            values[key] = Path(str(values[key]))
    if "storage_key" in values:
        values["storage_key"] = str(values["storage_key"])
    return AppConfig(**values)
