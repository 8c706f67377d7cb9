# src/gotestadapter/runtime/engine.py

"""
Replays a suite/test tree as a run: resolves the requested ids and walks
each node depth-first, emitting lifecycle events onto a queue.
"""

import asyncio
from collections.abc import Sequence

import structlog
from attrs import define, field

from gotestadapter.events import (
    RunEvent,
    RunFinished,
    RunStarted,
    SuiteEvent,
    SuiteState,
    TestEvent,
    TestState,
)
from gotestadapter.exceptions import RunCancelledError
from gotestadapter.runtime.cancellation import CancellationToken
from gotestadapter.telemetry import StructLogger
from gotestadapter.testing.protocols import TestRunner, TestRunResult
from gotestadapter.tree import SuiteNode, TestNode, TestTree, TreeNode

log: StructLogger = structlog.get_logger("runtime.engine")

CANCELLED_MESSAGE = "Run cancelled"


@define(slots=True)
class RunSummary:
    """Final outcome of every test that ran, in run order."""
    outcomes: dict[str, TestState] = field(factory=dict)
    cancelled: bool = field(default=False)

    def count(self, state: TestState) -> int:
        return sum(1 for outcome in self.outcomes.values() if outcome is state)

    @property
    def succeeded(self) -> bool:
        return not self.cancelled and not (
            self.count(TestState.FAILED) or self.count(TestState.ERRORED)
        )


class RunEngine:
    """Runs nodes of a TestTree one at a time through a TestRunner."""

    def __init__(self, runner: TestRunner, event_queue: "asyncio.Queue[RunEvent | None]"):
        self.runner = runner
        self.event_queue = event_queue
        self._summary = RunSummary()

    def _emit(self, event: RunEvent) -> None:
        self.event_queue.put_nowait(event)

    async def run(
        self,
        tree: TestTree,
        requested_ids: Sequence[str],
        token: CancellationToken | None = None,
    ) -> RunSummary:
        """
        Runs the requested nodes in the given order.

        Always brackets the run with exactly one RunStarted and one
        RunFinished, including when the run is cancelled or fails.
        Ids missing from `tree` are skipped.
        """
        token = token or CancellationToken()
        self._summary = RunSummary()
        run_log = log.bind(requested=list(requested_ids))
        run_log.info("Test run starting", emoji_key="run")
        self._emit(RunStarted(tests=requested_ids))

        try:
            for node_id in requested_ids:
                node = tree.get(node_id)
                if node is None:
                    run_log.debug("Requested id not in tree, skipping", node_id=node_id)
                    continue
                await self.run_node(node, token)
        except (RunCancelledError, asyncio.CancelledError) as e:
            self._summary.cancelled = True
            run_log.warning("Test run cancelled")
            if isinstance(e, asyncio.CancelledError):
                raise
        finally:
            self._emit(RunFinished(cancelled=self._summary.cancelled))
            run_log.info(
                "Test run finished",
                tests=len(self._summary.outcomes),
                failed=self._summary.count(TestState.FAILED),
                errored=self._summary.count(TestState.ERRORED),
                cancelled=self._summary.cancelled,
            )

        return self._summary

    async def run_node(self, node: TreeNode, token: CancellationToken) -> None:
        token.raise_if_cancelled()

        if isinstance(node, SuiteNode):
            self._emit(SuiteEvent(suite=node.id, state=SuiteState.RUNNING))
            try:
                for child in node.children:
                    await self.run_node(child, token)
            finally:
                # every entered suite is closed, innermost first, even on cancellation
                self._emit(SuiteEvent(suite=node.id, state=SuiteState.COMPLETED))

        elif isinstance(node, TestNode):
            await self._run_test(node, token)

        else:
            raise TypeError(f"Unexpected tree node type: {type(node).__name__}")

    async def _run_test(self, test: TestNode, token: CancellationToken) -> None:
        self._emit(TestEvent(test=test.id, state=TestState.RUNNING))

        try:
            result = await self.runner.execute(test, token)
        except (RunCancelledError, asyncio.CancelledError):
            self._emit(TestEvent(test=test.id, state=TestState.SKIPPED, message=CANCELLED_MESSAGE))
            raise
        except Exception as e:
            # one broken test must not stop its siblings
            log.exception("Test runner raised unexpectedly", test_id=test.id)
            result = TestRunResult(outcome=TestState.ERRORED, message=f"{type(e).__name__}: {e}")

        self._summary.outcomes[test.id] = result.outcome
        self._emit(TestEvent(test=test.id, state=result.outcome, message=result.message))

# 🔼⚙️
