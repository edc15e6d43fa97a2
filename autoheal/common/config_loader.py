"""
================================================================================
Configuration Loader
================================================================================

Reads config/config.yaml once per process, checks the sections the harness
depends on, and lets environment variables override single keys.

Features:
    - Dotted-path lookup: get_config("resolver.timeout_ms", 3000)
    - Environment override named after the path (resolver.timeout_ms ->
      RESOLVER_TIMEOUT_MS), parsed as a YAML scalar
    - `resolver.*` and `browser.*` values checked on load and on override;
      bad values raise ConfigurationError naming the key and its source

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml
from loguru import logger


# Repository root / config / config.yaml
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"


class ConfigurationError(Exception):
    """Raised when the configuration file or an override is invalid."""
    pass


def _positive_int(value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return "must be a positive integer (milliseconds)"
    return None


def _optional_budget(value: Any) -> Optional[str]:
    if value is None or value == 0:
        return None
    return _positive_int(value)


def _non_negative_int(value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return "must be a non-negative integer"
    return None


def _flag(value: Any) -> Optional[str]:
    return None if isinstance(value, bool) else "must be true or false"


def _one_of(*allowed: str) -> Callable[[Any], Optional[str]]:
    def check(value: Any) -> Optional[str]:
        if value not in allowed:
            return f"must be one of: {', '.join(allowed)}"
        return None
    return check


# Keys the resolver and browser manager read, with the check each must pass
CHECKS: Dict[str, Callable[[Any], Optional[str]]] = {
    "resolver.timeout_ms": _positive_int,
    "resolver.slow_timeout_ms": _positive_int,
    "resolver.deadline_ms": _optional_budget,
    "browser.type": _one_of("chromium", "firefox", "webkit"),
    "browser.headless": _flag,
    "browser.slow_mo": _non_negative_int,
    "browser.viewport_width": _positive_int,
    "browser.viewport_height": _positive_int,
    "browser.video": _one_of("off", "on"),
    "browser.trace": _one_of("off", "on", "retain-on-failure"),
}

_MISSING = object()


def env_name(key: str) -> str:
    """Environment variable that overrides a dotted key."""
    return key.upper().replace(".", "_")


def _lookup(tree: Dict[str, Any], key: str) -> Any:
    node: Any = tree
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _parse_override(raw: str, default: Any) -> Any:
    """Read an environment string the way the same text would read in YAML."""
    if isinstance(default, str):
        return raw
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    if isinstance(default, bool) and not isinstance(value, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(value, (dict, list)):
        return raw
    return value


def _check(key: str, value: Any, source: str) -> None:
    check = CHECKS.get(key)
    problem = check(value) if check else None
    if problem:
        raise ConfigurationError(f"{key} {problem}; got {value!r} from {source}")


class ConfigLoader:
    """
    Validated YAML configuration with environment overrides.

    The most recently constructed loader serves `get_config`; until one is
    built, the first `get_config` call loads DEFAULT_CONFIG_PATH.

    Usage:
        >>> ConfigLoader(config_path="config/config.yaml")
        >>> get_config("browser.type", "chromium")
        'chromium'
    """

    _active: Optional["ConfigLoader"] = None

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = self._read()
        ConfigLoader._active = self

    @classmethod
    def active(cls) -> "ConfigLoader":
        if cls._active is None:
            cls()
        return cls._active

    def _read(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            logger.warning(f"Config file {self.config_path} not found; using defaults and environment")
            return {}

        try:
            data = yaml.safe_load(self.config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.config_path} must hold a mapping of sections")
        for key in CHECKS:
            value = _lookup(data, key)
            if value is not _MISSING:
                _check(key, value, str(self.config_path))

        logger.debug(f"Loaded configuration from: {self.config_path}")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value for a dotted key: environment first, then the file, then `default`.

        A null in the file counts as unset.
        """
        name = env_name(key)
        raw = os.environ.get(name)
        if raw is not None:
            value = _parse_override(raw, default)
            _check(key, value, f"${name}")
            return value

        value = _lookup(self._config, key)
        return default if value is _MISSING or value is None else value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Raw file contents of one top-level section (no overrides)."""
        return dict(self._config.get(section) or {})

    def reload(self) -> None:
        self._config = self._read()
        logger.info(f"Configuration reloaded from: {self.config_path}")

    @classmethod
    def reset(cls) -> None:
        """Forget the active loader (used by tests)."""
        cls._active = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience accessor for the active configuration.

    Example:
        timeout = get_config("resolver.timeout_ms", 3000)
    """
    return ConfigLoader.active().get(key, default)


__all__ = [
    "CHECKS",
    "ConfigLoader",
    "ConfigurationError",
    "env_name",
    "get_config",
]
