#
# config/loader.py
#
"""
Loads the TOML configuration file into the attrs models, applying
environment variable overrides.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

import attrs
import structlog

from gotestadapter.config.models import AdapterConfig, DiscoveryConfig, GlobalConfig, RunnerConfig
from gotestadapter.exceptions import ConfigurationError
from gotestadapter.telemetry import StructLogger

log: StructLogger = structlog.get_logger("config.loader")

ENV_LOG_LEVEL = "GOTESTADAPTER_LOG_LEVEL"
ENV_GO_PATH = "GOTESTADAPTER_GO_PATH"


def _build_section(model: type, raw: Any, section: str) -> Any:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Section [{section}] must be a table, got {type(raw).__name__}.")

    known = {a.name for a in attrs.fields(model)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigurationError(f"Unknown key(s) in [{section}]: {sorted(unknown)}")

    try:
        return model(**raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value in [{section}]: {e}") from e


def _apply_env_overrides(data: dict[str, Any]) -> None:
    if level := os.environ.get(ENV_LOG_LEVEL):
        log.debug("Applying log level override from environment", env_var=ENV_LOG_LEVEL, value=level)
        data.setdefault("global", {})["log_level"] = level
    if go_path := os.environ.get(ENV_GO_PATH):
        log.debug("Applying go path override from environment", env_var=ENV_GO_PATH, value=go_path)
        data.setdefault("runner", {})["go_path"] = go_path


def build_config(data: dict[str, Any]) -> AdapterConfig:
    """Builds an AdapterConfig from an already parsed mapping."""
    data = {key: dict(value) if isinstance(value, dict) else value for key, value in data.items()}
    _apply_env_overrides(data)

    unknown_sections = set(data) - {"global", "discovery", "runner"}
    if unknown_sections:
        raise ConfigurationError(f"Unknown configuration section(s): {sorted(unknown_sections)}")

    return AdapterConfig(
        global_config=_build_section(GlobalConfig, data.get("global"), "global"),
        discovery=_build_section(DiscoveryConfig, data.get("discovery"), "discovery"),
        runner=_build_section(RunnerConfig, data.get("runner"), "runner"),
    )


def load_config(config_path: Path | None) -> AdapterConfig:
    """
    Loads configuration from `config_path`.

    With no path, defaults (plus environment overrides) are returned.

    Raises:
        ConfigurationError: the file is missing, unreadable or invalid.
    """
    if config_path is None:
        log.debug("No configuration file given, using defaults.")
        return build_config({})

    config_log = log.bind(path=str(config_path))
    config_log.info("Loading configuration")
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: '{config_path}'") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read configuration file '{config_path}': {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in '{config_path}': {e}") from e

    config = build_config(data)
    config_log.debug("Configuration loaded", config=config)
    return config


# 🔼⚙️
