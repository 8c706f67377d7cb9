# src/gotestadapter/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

from gotestadapter.cli.utils import config_option, load_config_or_exit
from gotestadapter.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")


@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@config_option
@click.pass_context
def show_config(ctx: click.Context, config_path: Path | None):
    """Load, validate, and display the configuration."""
    log.info("Executing 'config show' command", config_path=str(config_path))

    config = load_config_or_exit(ctx, config_path)
    # Echo rather than print to the rich console so CliRunner captures it.
    click.echo(pretty_repr(config, expand_all=True))

# 🔼⚙️
