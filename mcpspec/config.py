"""Generator settings.

Resolved in precedence order:
    defaults  <  YAML config file  <  environment  <  CLI flags

The YAML file may hold the keys at top level or under a ``settings:``
mapping. Keys use snake_case field names (``model``, ``temperature``,
``max_tokens``, ``output_dir``, ``http_timeout``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from mcpspec.errors import ConfigurationError
from mcpspec.llm.client import DEFAULT_MODEL

DEFAULT_OUTPUT_DIR = "mcp-servers"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 4096
DEFAULT_HTTP_TIMEOUT = 10.0

API_KEY_ENV = "ANTHROPIC_API_KEY"
MODEL_ENV = "MCPSPEC_MODEL"

TEMPERATURE_ERROR = "Temperature must be a number between 0 and 1."


@dataclass
class GeneratorSettings:
    """Everything the generate command needs besides the URL."""

    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    output_dir: str = DEFAULT_OUTPUT_DIR
    api_key: str = ""
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` on the first bad setting."""
        if not self.api_key:
            raise ConfigurationError(
                "API key is required. Provide it with --api-key or set the "
                f"{API_KEY_ENV} environment variable."
            )
        if not 0.0 <= self.temperature <= 1.0:
            raise ConfigurationError(TEMPERATURE_ERROR)
        if self.max_tokens <= 0:
            raise ConfigurationError("max_tokens must be a positive integer.")


def load_settings(config_path: str | Path | None = None, **overrides) -> GeneratorSettings:
    """Build settings from an optional YAML file, the environment, and overrides.

    Overrides whose value is ``None`` are ignored so click options can be
    passed straight through.
    """
    settings = GeneratorSettings()

    if config_path:
        _apply(settings, _read_config_file(Path(config_path)))

    env_values = {}
    if os.environ.get(MODEL_ENV):
        env_values["model"] = os.environ[MODEL_ENV]
    if os.environ.get(API_KEY_ENV):
        env_values["api_key"] = os.environ[API_KEY_ENV]
    _apply(settings, env_values)

    _apply(settings, {k: v for k, v in overrides.items() if v is not None})
    return settings


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data.get("settings", data)


def _apply(settings: GeneratorSettings, values: dict) -> None:
    known = {f.name: f for f in fields(settings)}
    for key, value in values.items():
        f = known.get(key)
        if f is None:
            continue
        try:
            if f.type == "float":
                value = float(value)
            elif f.type == "int":
                value = int(value)
            else:
                value = str(value)
        except (TypeError, ValueError) as e:
            if key == "temperature":
                raise ConfigurationError(TEMPERATURE_ERROR) from e
            raise ConfigurationError(f"Invalid value for '{key}': {value!r}") from e
        setattr(settings, key, value)
