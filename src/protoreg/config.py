"""Configuration loading and validation."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from protoreg.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "DEFAULTS"]

DEFAULTS: dict[str, Any] = {
    "scan": {
        "root": "./proto",
        "extension": ".proto",
    },
    "registry": {
        "url": "http://localhost:8001/apis/registry/v3",
        "group_id": "default",
        "timeout": 10.0,
        "health_url": "http://localhost:8001/health/ready",
        "wait_ready": False,
        "ready_retries": 30,
        "ready_interval": 2.0,
    },
    "verify": {
        "retries": 5,
        "interval": 1.0,
        "check_version": False,
    },
    "ordering": {
        "strict_cycles": False,
    },
    "pipeline": {
        "deadline": None,
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration accessor with dot-path key support.

    Values not present in ``data`` fall back to :data:`DEFAULTS`.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = _deep_merge(DEFAULTS, data or {})

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Load a YAML configuration file and merge it over the defaults."""
        path = Path(path)
        if not path.exists():
            raise ConfigNotFoundError(config_path=str(path))

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {path}", cause=e) from e

        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {path}")

        config = cls(parsed)
        config.validate()
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-path key, creating sections as needed."""
        parts = key.split(".")
        current = self._data
        for part in parts[:-1]:
            nxt = current.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                current[part] = nxt
            current = nxt
        current[parts[-1]] = value

    def validate(self) -> None:
        """Check value types and ranges, raising ConfigError on the first problem."""
        for key in ("verify.retries", "registry.ready_retries"):
            retries = self.get(key)
            if not isinstance(retries, int) or isinstance(retries, bool) or retries < 1:
                raise ConfigError(message=f"{key} must be a positive integer, got {retries!r}")

        for key in ("verify.interval", "registry.timeout", "registry.ready_interval"):
            value = self.get(key)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                raise ConfigError(message=f"{key} must be a non-negative number, got {value!r}")

        deadline = self.get("pipeline.deadline")
        if deadline is not None and (
            not isinstance(deadline, (int, float)) or isinstance(deadline, bool) or deadline <= 0
        ):
            raise ConfigError(message=f"pipeline.deadline must be a positive number, got {deadline!r}")

        extension = self.get("scan.extension")
        if not isinstance(extension, str) or not extension.startswith("."):
            raise ConfigError(message=f"scan.extension must start with '.', got {extension!r}")
