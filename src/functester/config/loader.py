"""Runner configuration loading.

Loads optional settings from ~/.config/functester/config.yaml (XDG-compliant
path via platformdirs). Missing file silently applies all defaults. Invalid
YAML or schema raises ConfigError.

Precedence (low → high):
  built-in defaults < config file < env vars < CLI flags (handled in cli)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from functester.config.models import RunnerConfig
from functester.exceptions import ConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def get_config_path() -> Path:
    """Return the XDG-compliant config path.

    Linux:   ~/.config/functester/config.yaml
    macOS:   ~/Library/Application Support/functester/config.yaml
    Windows: %APPDATA%\\functester\\config.yaml
    """
    from platformdirs import user_config_dir

    return Path(user_config_dir("functester")) / "config.yaml"


def _apply_env_overrides(config: RunnerConfig) -> RunnerConfig:
    """Apply FUNCTESTER_* environment variable overrides.

    Unparseable values are ignored rather than failing the run.
    """
    updates: dict[str, Any] = {}

    if (val := os.environ.get("FUNCTESTER_VERBOSITY", "").lower()) in (
        "quiet",
        "normal",
        "verbose",
    ):
        updates["verbosity"] = val
    if val := os.environ.get("FUNCTESTER_LOG_FILE"):
        updates["log_file"] = val
    if val := os.environ.get("FUNCTESTER_STOP_ON_FAILURE"):
        if val.lower() in _TRUE_VALUES:
            updates["stop_on_failure"] = True
        elif val.lower() in _FALSE_VALUES:
            updates["stop_on_failure"] = False

    return config.model_copy(update=updates) if updates else config


def load_config(config_path: Path | None = None) -> RunnerConfig:
    """Load runner configuration.

    Missing file: silently applies all defaults.
    Invalid YAML: raises ConfigError with parse error detail.
    Invalid schema: raises ConfigError with field path context.

    Args:
        config_path: Explicit path override. None = XDG default.

    Returns:
        RunnerConfig with file values merged over defaults, env vars on top.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return _apply_env_overrides(RunnerConfig())

    try:
        data = yaml.safe_load(path.read_text()) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a YAML mapping: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config {path}: {e}") from e

    try:
        config = RunnerConfig.model_validate(data)
    except ValidationError as e:
        errors = [f"  {err['loc']}: {err['msg']}" for err in e.errors()]
        raise ConfigError(f"Invalid config {path}:\n" + "\n".join(errors)) from e

    return _apply_env_overrides(config)


__all__ = ["get_config_path", "load_config"]
