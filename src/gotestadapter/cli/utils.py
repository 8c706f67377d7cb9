# src/gotestadapter/cli/utils.py

import logging
from pathlib import Path

import click
import structlog

from gotestadapter.config import AdapterConfig, load_config
from gotestadapter.exceptions import ConfigurationError
from gotestadapter.telemetry.logger import setup_logging as core_setup_logging

log = structlog.get_logger("cli.utils")

LOG_LEVEL_CHOICES = click.Choice(list(logging._nameToLevel.keys()), case_sensitive=False)


def logging_options(f):
    """Decorator to add logging options to any command."""
    f = click.option(
        "-l",
        "--log-level",
        type=LOG_LEVEL_CHOICES,
        default=None,
        envvar="GOTESTADAPTER_LOG_LEVEL",
        help="Log level for discovery and run diagnostics on stderr (overrides [global] log_level).",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True),
        default=None,
        envvar="GOTESTADAPTER_LOG_FILE",
        help="Also write JSON logs, including every `go test` output line at DEBUG, to this file.",
    )(f)
    f = click.option(
        "--json-logs",
        is_flag=True,
        default=None,
        envvar="GOTESTADAPTER_JSON_LOGS",
        help="Render stderr logs as JSON instead of coloured console lines.",
    )(f)
    return f


def config_option(f):
    """Decorator adding the optional configuration file path."""
    return click.option(
        "-c",
        "--config-path",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
        default=None,
        envvar="GOTESTADAPTER_CONF",
        help="Path to the gotestadapter configuration file (env var GOTESTADAPTER_CONF).",
        show_envvar=True,
    )(f)


def setup_logging_from_context(
    ctx: click.Context,
    local_log_level: str | None = None,
    local_log_file: str | None = None,
    local_json_logs: bool | None = None,
    default_log_level: str = "INFO",
) -> None:
    """
    Setup logging using context values, allowing local overrides.
    """
    log_level_str = local_log_level or ctx.obj.get("LOG_LEVEL") or default_log_level
    log_file_path = local_log_file or ctx.obj.get("LOG_FILE")
    use_json_logs = local_json_logs if local_json_logs is not None else ctx.obj.get("JSON_LOGS", False)

    numeric_level = logging.getLevelName(log_level_str.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
        log_level_str = "INFO"

    core_setup_logging(
        level=numeric_level,
        json_logs=use_json_logs,
        log_file=log_file_path,
    )

    log.debug(
        "CLI logging initialized via utils",
        level=log_level_str,
        file=log_file_path or "console",
        json=use_json_logs,
    )


def load_config_or_exit(ctx: click.Context, config_path: Path | None) -> AdapterConfig:
    """Loads the configuration, exiting with code 1 on a configuration problem."""
    try:
        return load_config(config_path)
    except ConfigurationError as e:
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: Configuration problem in '{config_path}':\n{e}", err=True)
        ctx.exit(1)


def workspace_option(f):
    """Decorator adding the workspace root option (defaults to the current directory)."""
    return click.option(
        "-w",
        "--workspace",
        type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
        default=Path("."),
        show_default=True,
        help="Root directory to search for *_test.go files.",
    )(f)


def apply_config_log_level(ctx: click.Context, config: AdapterConfig) -> None:
    """Re-initialises logging with the configured level unless the CLI set one."""
    if ctx.obj.get("LOG_LEVEL"):
        return
    setup_logging_from_context(ctx, default_log_level=config.global_config.log_level)

# ⚙️🛠️
