"""Settings loader for npm-pin.

Reads optional settings from a YAML file (JSON is accepted too, being a YAML
subset). Every field has a default, so running without a settings file is
the common case. Unknown keys are rejected so typos do not pass silently.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .discovery import DEFAULT_IGNORED_DIRS, MANIFEST_NAME

CONFIG_FILE_NAME = ".npm-pin.yml"
CONFIG_PATH_ENV_VAR = "NPM_PIN_CONFIG"

_KNOWN_KEYS = {"dependency_dir", "root_manifest", "manifest_name", "ignore_dirs", "workers"}


class ConfigError(RuntimeError):
    """Raised when the settings file cannot be loaded or is invalid."""


def _require_name(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{key}' must be a non-empty string")
    if "/" in value or "\\" in value:
        raise ConfigError(f"'{key}' must be a plain file or directory name")
    return value


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved run settings."""

    dependency_dir: str = "node_modules"
    root_manifest: str = MANIFEST_NAME
    manifest_name: str = MANIFEST_NAME
    ignore_dirs: frozenset[str] = field(default_factory=lambda: DEFAULT_IGNORED_DIRS)
    workers: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a mapping, validating every provided field."""
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

        ignore_dirs = data.get("ignore_dirs", sorted(DEFAULT_IGNORED_DIRS))
        if not isinstance(ignore_dirs, list) or not all(
            isinstance(name, str) and name for name in ignore_dirs
        ):
            raise ConfigError("'ignore_dirs' must be a list of non-empty strings")

        workers = data.get("workers", 1)
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ConfigError("'workers' must be an integer >= 1")

        return cls(
            dependency_dir=_require_name(data, "dependency_dir", "node_modules"),
            root_manifest=_require_name(data, "root_manifest", MANIFEST_NAME),
            manifest_name=_require_name(data, "manifest_name", MANIFEST_NAME),
            ignore_dirs=frozenset(name.lower() for name in ignore_dirs),
            workers=workers,
        )


def _resolve_config_path(path: Path | str | None, project_root: Path | None) -> Path | None:
    """Resolve the settings file path.

    Priority:
    1. Explicit path argument
    2. NPM_PIN_CONFIG environment variable
    3. .npm-pin.yml in the project root, when it exists
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    if project_root is not None:
        candidate = Path(project_root) / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    return None


def load_settings(path: Path | str | None = None, project_root: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional settings file. If not provided, uses the NPM_PIN_CONFIG
            env var, then .npm-pin.yml in ``project_root``.
        project_root: Directory searched for the default settings file.

    Returns:
        Settings, with defaults for anything not configured.

    Raises:
        ConfigError: If an explicitly named file is missing or any file
            contains invalid data.
    """
    config_path = _resolve_config_path(path, project_root)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return Settings.from_dict(data)
