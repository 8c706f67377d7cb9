# src/gotestadapter/cli/run_cmds.py

import asyncio
import signal
from collections.abc import Mapping
from pathlib import Path

import click
import structlog

from gotestadapter.cli.utils import (
    apply_config_log_level,
    config_option,
    load_config_or_exit,
    workspace_option,
)
from gotestadapter.events import RunEvent, RunFinished, SuiteEvent, SuiteState, TestEvent, TestState
from gotestadapter.exceptions import DiscoveryError
from gotestadapter.runtime.adapter import GoTestAdapter
from gotestadapter.telemetry import StructLogger
from gotestadapter.tree import TreeNode

log: StructLogger = structlog.get_logger("cli.run")

STATE_STYLES = {
    TestState.PASSED: ("✔", "green"),
    TestState.FAILED: ("✘", "red"),
    TestState.ERRORED: ("!", "red"),
    TestState.SKIPPED: ("-", "yellow"),
}


class EventPrinter:
    """Echoes run events as they arrive."""

    def __init__(self, nodes_by_id: Mapping[str, TreeNode]):
        self.nodes_by_id = nodes_by_id

    def _label(self, node_id: str) -> str:
        node = self.nodes_by_id.get(node_id)
        return node.label if node is not None else node_id

    def __call__(self, event: RunEvent) -> None:
        if isinstance(event, SuiteEvent) and event.state is SuiteState.RUNNING:
            click.echo(click.style(f"▸ {self._label(event.suite)}", bold=True))
        elif isinstance(event, TestEvent) and event.state in STATE_STYLES:
            symbol, color = STATE_STYLES[event.state]
            click.echo(f"  {click.style(symbol, fg=color)} {self._label(event.test)} ({event.state.value})")
            if event.message and event.state is not TestState.PASSED:
                for line in event.message.splitlines():
                    click.echo(f"      {line}")
        elif isinstance(event, RunFinished) and event.cancelled:
            click.echo(click.style("Run cancelled.", fg="yellow"))


async def _run_with_adapter(adapter: GoTestAdapter, test_ids: list[str]) -> int:
    await adapter.load()
    adapter.test_states.subscribe(EventPrinter(adapter.nodes_by_id))

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, adapter.cancel)
    except (NotImplementedError, RuntimeError):
        log.debug("Signal handlers not supported on this platform")

    try:
        summary = await adapter.run(test_ids)
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass

    click.echo(
        f"{summary.count(TestState.PASSED)} passed, "
        f"{summary.count(TestState.FAILED)} failed, "
        f"{summary.count(TestState.ERRORED)} errored, "
        f"{summary.count(TestState.SKIPPED)} skipped."
    )
    if summary.cancelled:
        return 130
    return 0 if summary.succeeded else 1


@click.command(name="run")
@workspace_option
@config_option
@click.argument("test_ids", nargs=-1)
@click.pass_context
def run_cli(ctx: click.Context, workspace: Path, config_path: Path | None, test_ids: tuple[str, ...]):
    """Run suites or tests by id (default: everything under `root`)."""
    config = load_config_or_exit(ctx, config_path)
    if config_path is not None:
        apply_config_log_level(ctx, config)

    ids = list(test_ids) or ["root"]
    log.info("Executing 'run' command", workspace=str(workspace), tests=ids)

    adapter = GoTestAdapter(workspace, config)
    try:
        exit_code = asyncio.run(_run_with_adapter(adapter, ids))
    except DiscoveryError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    finally:
        adapter.dispose()

    ctx.exit(exit_code)

# 🔼⚙️
