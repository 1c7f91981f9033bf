"""Configuration loading for the progressing reporter.

Supports two configuration sources:
1. Environment variables - take priority
2. A JSON file (for per-project settings)

Environment Variable Format:
    PROGRESS_PRINTER_BAR_WIDTH=80
    PROGRESS_PRINTER_RULE_WIDTH=80
    PROGRESS_PRINTER_INDENT=4
    PROGRESS_PRINTER_MAX_CAUSE_DEPTH=32
    PROGRESS_PRINTER_COLOR=false

Example JSON file:
    {"bar_width": 60, "indent": 2, "color": false}
"""

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional


class ConfigError(Exception):
    """Raised when configuration loading fails."""

    pass


ENV_PREFIX = "PROGRESS_PRINTER_"

# Smallest accepted value for each integer setting
MINIMUMS = {
    "bar_width": 1,
    "rule_width": 1,
    "indent": 0,
    "max_cause_depth": 1,
}

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ReporterConfig:
    """Display settings for the progressing reporter."""

    bar_width: int = 80
    rule_width: int = 80
    indent: int = 4
    max_cause_depth: int = 32
    color: bool = True


FIELD_NAMES = [f.name for f in fields(ReporterConfig)]


def _coerce(name: str, value: Any, source: str) -> Any:
    """Convert a raw setting to its declared type and check its range."""
    if name == "color":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ConfigError(f"Invalid boolean for '{name}' in {source}: {value!r}")

    if isinstance(value, bool):
        raise ConfigError(f"Invalid integer for '{name}' in {source}: {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid integer for '{name}' in {source}: {value!r}") from e

    if number < MINIMUMS[name]:
        raise ConfigError(
            f"'{name}' must be at least {MINIMUMS[name]} (got {number} in {source})"
        )
    return number


def load_from_json(config_path: str) -> dict[str, Any]:
    """Load reporter settings from a JSON file.

    Args:
        config_path: Path to the JSON file.

    Returns:
        Dictionary of the settings present in the file.

    Raises:
        ConfigError: If the file doesn't exist, contains invalid JSON,
                    or contains unknown or invalid settings.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a JSON object: {config_path}")

    settings: dict[str, Any] = {}
    for name, value in data.items():
        if name not in FIELD_NAMES:
            raise ConfigError(f"Unknown setting '{name}' in {config_path}")
        settings[name] = _coerce(name, value, config_path)

    return settings


def load_from_env() -> dict[str, Any]:
    """Load reporter settings from PROGRESS_PRINTER_* environment variables.

    Returns:
        Dictionary of the settings that are set in the environment.

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    settings: dict[str, Any] = {}

    for name in FIELD_NAMES:
        env_key = ENV_PREFIX + name.upper()
        value = os.environ.get(env_key)
        if value is None or value == "":
            continue
        settings[name] = _coerce(name, value, env_key)

    return settings


def load_config(config_path: Optional[str] = None) -> ReporterConfig:
    """Build the reporter configuration.

    Priority order:
    1. Environment variables
    2. The JSON file, if a path is given
    3. Defaults

    Args:
        config_path: Optional path to a JSON settings file.

    Returns:
        The resolved ReporterConfig.

    Raises:
        ConfigError: If any source is invalid.
    """
    settings: dict[str, Any] = {}

    if config_path is not None:
        settings.update(load_from_json(config_path))

    settings.update(load_from_env())

    return replace(ReporterConfig(), **settings)
