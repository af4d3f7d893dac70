"""Runtime configuration.

Settings come from an optional YAML file and are overridden by environment
variables. The API key is allowed to be absent: requests then fail with a
500 instead of the process refusing to start.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TIMEOUT = 120.0
DEFAULT_CONFIG_PATH = "configs/contractgen.yaml"

# field name -> environment variable
ENV_VARS = {
    "api_key": "ANTHROPIC_API_KEY",
    "api_url": "CONTRACTGEN_API_URL",
    "api_version": "CONTRACTGEN_API_VERSION",
    "model": "CONTRACTGEN_MODEL",
    "max_tokens": "CONTRACTGEN_MAX_TOKENS",
    "timeout": "CONTRACTGEN_TIMEOUT",
    "log_level": "CONTRACTGEN_LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    """Configuration handed to the contract service at construction time."""
    api_key: str | None = None
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        """Build settings from a plain mapping, ignoring unknown keys."""
        return cls()._with_overrides(data)

    def _with_overrides(self, data: Mapping[str, Any]) -> "Settings":
        known = {f.name for f in fields(self)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known or value is None:
                continue
            values[key] = value
        if "max_tokens" in values:
            values["max_tokens"] = int(values["max_tokens"])
        if "timeout" in values:
            values["timeout"] = float(values["timeout"])
        if "api_key" in values:
            values["api_key"] = str(values["api_key"]) or None
        return replace(self, **values)


def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(path: str | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Load settings from YAML and the environment.

    Args:
        path: YAML config path. Defaults to $CONTRACTGEN_CONFIG, then
            configs/contractgen.yaml. A missing file is skipped.
        environ: Environment mapping, os.environ when omitted.
    """
    env = os.environ if environ is None else environ
    cfg_path = path or env.get("CONTRACTGEN_CONFIG") or DEFAULT_CONFIG_PATH

    settings = Settings()
    if Path(cfg_path).is_file():
        settings = settings._with_overrides(load_cfg(cfg_path))

    overrides = {name: env[var] for name, var in ENV_VARS.items() if env.get(var)}
    return settings._with_overrides(overrides)
