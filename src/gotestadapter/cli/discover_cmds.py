# src/gotestadapter/cli/discover_cmds.py

import asyncio
import json
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from gotestadapter.cli.utils import (
    apply_config_log_level,
    config_option,
    load_config_or_exit,
    workspace_option,
)
from gotestadapter.exceptions import DiscoveryError
from gotestadapter.runtime.adapter import GoTestAdapter
from gotestadapter.telemetry import StructLogger
from gotestadapter.tree import SuiteNode, TestNode, TreeNode

log: StructLogger = structlog.get_logger("cli.discover")


def build_rich_tree(node: SuiteNode, show_ids: bool = False) -> Tree:
    """Renders a suite and its descendants as a rich Tree."""
    rich_tree = Tree(_node_label(node, show_ids))
    _add_children(rich_tree, node, show_ids)
    return rich_tree


def _add_children(branch: Tree, suite: SuiteNode, show_ids: bool) -> None:
    for child in suite.children:
        sub_branch = branch.add(_node_label(child, show_ids))
        if isinstance(child, SuiteNode):
            _add_children(sub_branch, child, show_ids)


def _node_label(node: TreeNode, show_ids: bool) -> Text:
    if isinstance(node, TestNode):
        label = Text(node.label, style="green")
    else:
        label = Text(node.label, style="bold")
    if show_ids:
        label.append(f"  [{node.id}]", style="dim")
    return label


@click.command(name="discover")
@workspace_option
@config_option
@click.option("--ids", "show_ids", is_flag=True, help="Show the id of every node.")
@click.option("--json", "as_json", is_flag=True, help="Print the tree as JSON.")
@click.pass_context
def discover_cli(
    ctx: click.Context,
    workspace: Path,
    config_path: Path | None,
    show_ids: bool,
    as_json: bool,
):
    """Discover the Go tests of a workspace and print the suite tree."""
    config = load_config_or_exit(ctx, config_path)
    if config_path is not None:
        apply_config_log_level(ctx, config)

    adapter = GoTestAdapter(workspace, config)
    try:
        tree = asyncio.run(adapter.load())
    except DiscoveryError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    finally:
        adapter.dispose()

    log.debug("Discovery finished", nodes=len(tree))
    if as_json:
        click.echo(json.dumps(tree.root.to_dict(), indent=2))
        return

    Console().print(build_rich_tree(tree.root, show_ids))
    click.echo(f"{len(tree.tests())} test(s) found.")

# 🔼⚙️
