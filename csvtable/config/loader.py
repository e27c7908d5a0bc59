from __future__ import annotations

import codecs
import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from dotenv import load_dotenv
from jsonschema.exceptions import ValidationError

"""Settings loader.

Resolution order (later wins):
1. Built-in defaults (400,000 byte cap, text/csv, utf-8-sig, INFO)
2. Optional YAML file, validated against the packaged JSON schema
3. CSVTABLE_* environment variables (a .env file is loaded first when asked)
"""

__all__ = [
    "ConfigError",
    "Settings",
    "load_config",
    "SCHEMA_PATH",
]

SCHEMA_PATH = Path(__file__).with_name("schema.json")

ENV_PREFIX = "CSVTABLE_"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    max_file_bytes: int = 400_000  # inclusive upper bound
    content_type: str = "text/csv"
    encoding: str = "utf-8-sig"  # drops a leading BOM
    log_level: str = "INFO"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the packaged JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")
    _validate_config_schema(data)
    return data


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    raw_max = os.getenv(f"{ENV_PREFIX}MAX_FILE_BYTES")
    if raw_max is not None:
        try:
            overrides["max_file_bytes"] = int(raw_max)
        except ValueError as e:
            raise ConfigError(f"{ENV_PREFIX}MAX_FILE_BYTES must be an integer: {raw_max!r}") from e
    for key in ("content_type", "encoding", "log_level"):
        value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
        if value:
            overrides[key] = value
    return overrides


def load_config(path: Path | None = None, *, load_env: bool = False, env_file: Path = Path(".env")) -> Settings:
    """Build Settings from defaults, an optional YAML file and the environment.

    Parameters:
        path: YAML file; None means defaults plus environment only
        load_env: load ``env_file`` with python-dotenv before reading the environment
        env_file: location of the .env file
    """
    if load_env and env_file.exists():
        load_dotenv(dotenv_path=env_file, override=True)

    settings = Settings()
    if path is not None:
        settings = replace(settings, **_read_yaml(path))
    overrides = _env_overrides()
    if overrides:
        settings = replace(settings, **overrides)

    if settings.max_file_bytes < 1:
        raise ConfigError(f"max_file_bytes must be positive: {settings.max_file_bytes}")
    try:
        codecs.lookup(settings.encoding)
    except LookupError as e:
        raise ConfigError(f"unknown encoding: {settings.encoding}") from e
    return settings
