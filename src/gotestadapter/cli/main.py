# src/gotestadapter/cli/main.py

"""
Entry point of the `gotestadapter` command.

The group only sets up logging; `discover`, `run` and `config` do the work.
Logs go to stderr at WARNING unless asked otherwise, so the tree, the JSON
dump and the run report on stdout stay machine-readable.
"""

from importlib.metadata import PackageNotFoundError, version

import click
import structlog

from gotestadapter.cli.config_cmds import config_cli
from gotestadapter.cli.discover_cmds import discover_cli
from gotestadapter.cli.run_cmds import run_cli
from gotestadapter.cli.utils import logging_options, setup_logging_from_context
from gotestadapter.telemetry import StructLogger

try:
    __version__ = version("gotestadapter")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

log: StructLogger = structlog.get_logger("cli.main")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", package_name="gotestadapter")
@logging_options
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    gotestadapter: discover and run Go tests.

    Walks a workspace for *_test.go files and builds a tree of directory,
    file and test nodes. A Test...Suite function groups the tests of its file.
    `run` executes the selected node ids with `go test -v -run ^(Name)$`,
    one process per test, and exits 1 if any test failed or errored.

    Settings come from CLI options, then GOTESTADAPTER_* variables, then the
    TOML file given with -c, then defaults.
    """
    ctx.ensure_object(dict)

    ctx.obj["LOG_LEVEL"] = log_level
    ctx.obj["LOG_FILE"] = log_file
    ctx.obj["JSON_LOGS"] = json_logs if json_logs is not None else False

    setup_logging_from_context(ctx, default_log_level="WARNING")
    log.debug(
        "gotestadapter CLI ready",
        subcommand=ctx.invoked_subcommand,
        log_level=log_level,
        log_file=log_file,
        json_logs=json_logs,
    )


cli.add_command(config_cli)
cli.add_command(discover_cli)
cli.add_command(run_cli)

if __name__ == "__main__":
    cli()

# 🧪⚙️
