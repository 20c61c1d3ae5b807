"""
================================================================================
Global Configuration for the Web Flow Harness
================================================================================

Centralized configuration management and logging setup.

Features:
    - YAML-based configuration loading (config/config.yaml + config/{ENV}.yaml)
    - Environment variable overrides (BROWSER, HEADLESS, CI, LOG_LEVEL, ...)
    - Double-underscore overrides for any key (TIMEOUTS__PAGE_LOAD_MS=60000)
    - Centralized Loguru logging configuration

Configuration is read once per process. Session settings are derived from it
when a suite starts and are never re-read mid-session.

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False

DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
    "{extra[component]: <12} | {message}"
)

# Well-known environment variables and the config keys they override
ENV_MAPPING: Dict[str, str] = {
    "BROWSER": "browser.name",
    "HEADLESS": "browser.headless",
    "CI": "browser.ci",
    "LOG_LEVEL": "logging.level",
    "UI_BASE_URL": "ui.base_url",
    "SCREENSHOT_DIR": "artifacts.screenshot_dir",
}


def init_logger(level: str = None, format_str: str = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Should be called once at the application boundary (CLI entry point or
    root conftest). Components receive a RunLogger instead of configuring
    sinks themselves.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = str(level or get_config("logging.level", "INFO")).upper()
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.configure(extra={"component": "harness"})
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            encoding="utf-8",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def _ensure_config_loaded() -> None:
    """Ensures the configuration is loaded."""
    if not _config:
        _load_config()


def _find_config_dir() -> Optional[Path]:
    """Locate the configuration directory."""
    override = os.getenv("WEBFLOW_CONFIG_DIR")
    possible_config_dirs = [
        Path(override) if override else None,
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
    ]
    for dir_path in possible_config_dirs:
        if dir_path is not None and dir_path.is_dir():
            return dir_path
    return None


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.

    Configuration loading order:
        1. Built-in defaults
        2. Default configuration file (config/config.yaml)
        3. Environment-specific configuration (config/{ENV}.yaml)
        4. Environment variables (override YAML settings)
    """
    global _config

    _config = _get_defaults()

    config_dir = _find_config_dir()
    if not config_dir:
        logger.warning("No configuration directory found. Using defaults.")
    else:
        default_config_path = config_dir / "config.yaml"
        if default_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(default_config_path))
            logger.debug(f"Loaded configuration from {default_config_path}")

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_config_path = config_dir / f"{env}.yaml"
        if env_config_path.exists():
            _config = _deep_merge(_config, _read_yaml(env_config_path))
            logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _get_defaults() -> Dict[str, Any]:
    """Returns default configuration values."""
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
        },
        "browser": {
            "name": "chromium",
            "headless": False,
            "ci": False,
            "window_width": 1920,
            "window_height": 1080,
        },
        "timeouts": {
            "implicit_wait_ms": 10000,
            "page_load_ms": 30000,
            "script_ms": 30000,
        },
        "retry": {
            "session_attempts": 3,
            "session_delay_seconds": 2.0,
            "navigation_attempts": 3,
            "navigation_delay_seconds": 1.0,
            "click_attempts": 2,
            "click_delay_seconds": 0.1,
        },
        "popups": {
            "grace_period_seconds": 0.5,
            "settle_period_seconds": 0.5,
        },
        "artifacts": {
            "screenshot_dir": "screenshots",
        },
        "ui": {
            "base_url": "https://the-internet.herokuapp.com",
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merges two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Well-known variables come from ENV_MAPPING. Any other variable using
    double underscores maps onto a nested key:
        TIMEOUTS__PAGE_LOAD_MS=60000 overrides timeouts.page_load_ms
    """
    for env_key, config_key in ENV_MAPPING.items():
        if env_key in os.environ:
            _set_nested(_config, config_key.split("."), os.environ[env_key])

    for key, value in os.environ.items():
        if "__" in key:
            parts = [p.lower() for p in key.split("__")]
            _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    """Sets a nested dictionary value using a list of keys."""
    for key in keys[:-1]:
        existing = d.get(key)
        if not isinstance(existing, dict):
            existing = {}
            d[key] = existing
        d = existing
    d[keys[-1]] = value


def _convert_type(value: str, reference: Any) -> Any:
    """
    Convert string value to match reference type.

    Used for environment variables which are always strings.
    """
    if reference is None:
        return value

    if isinstance(reference, bool):
        return value.strip().lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            return value
    if isinstance(reference, float):
        try:
            return float(value)
        except ValueError:
            return value

    return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    String values coming from the environment are converted to the type of
    `default` when one is given.

    Args:
        key: Dot-separated key path (e.g., "browser.name", "timeouts.script_ms").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("browser.name", "chromium")
        'firefox'
        >>> get_config("browser.headless", False)
        True
    """
    _ensure_config_loaded()

    value: Any = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    if isinstance(value, str):
        return _convert_type(value, default)
    return value


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path.
        value: Value to set.
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reload_config() -> None:
    """Reloads the configuration from files and the environment."""
    global _config
    _config = {}
    _load_config()
    logger.debug("Configuration reloaded.")


__all__ = [
    "init_logger",
    "get_config",
    "set_config",
    "reload_config",
]
