# src/gotestadapter/runtime/adapter.py

"""
Facade used by the host: loads the test tree and runs selections of it,
relaying lifecycle events to subscribers.
"""

import asyncio
from collections.abc import Mapping, Sequence
from pathlib import Path

import structlog

from gotestadapter.config import AdapterConfig
from gotestadapter.discovery import SuiteBuilder, SymbolExtractor, get_symbol_extractor
from gotestadapter.events import (
    EventEmitter,
    LoadEvent,
    LoadFinished,
    LoadStarted,
    RunEvent,
)
from gotestadapter.exceptions import DiscoveryError
from gotestadapter.fake import FAKE_TEST_SUITE
from gotestadapter.runtime.cancellation import CancellationToken
from gotestadapter.runtime.engine import RunEngine, RunSummary
from gotestadapter.telemetry import StructLogger
from gotestadapter.testing import GoTestProcessRunner, TestRunner
from gotestadapter.tree import TestTree, TreeNode, empty_tree

log: StructLogger = structlog.get_logger("runtime.adapter")


class GoTestAdapter:
    """
    Discovers and runs the Go tests of one workspace.

    The current TestTree is replaced wholesale by `load()`. A run keeps the
    tree it started with, so a reload during a run cannot change what the
    run resolves. Runs are serialised.
    """

    def __init__(
        self,
        workspace: Path | None,
        config: AdapterConfig | None = None,
        extractor: SymbolExtractor | None = None,
        runner: TestRunner | None = None,
    ):
        self.workspace = Path(workspace) if workspace is not None else None
        self.config = config or AdapterConfig()
        self.extractor = extractor or get_symbol_extractor(self.config.discovery)
        self.runner = runner or GoTestProcessRunner(self.config.runner, self.workspace)

        self._tests_emitter: EventEmitter[LoadEvent] = EventEmitter("tests")
        self._test_states_emitter: EventEmitter[RunEvent] = EventEmitter("test_states")
        self._tree: TestTree = empty_tree()
        self._run_lock = asyncio.Lock()
        self._active_token: CancellationToken | None = None
        self._disposed = False

        log.info("Initializing Go test adapter", workspace=str(self.workspace))

    @property
    def tests(self) -> EventEmitter[LoadEvent]:
        return self._tests_emitter

    @property
    def test_states(self) -> EventEmitter[RunEvent]:
        return self._test_states_emitter

    @property
    def tree(self) -> TestTree:
        return self._tree

    @property
    def nodes_by_id(self) -> Mapping[str, TreeNode]:
        return self._tree.nodes_by_id

    @property
    def is_running(self) -> bool:
        return self._active_token is not None

    async def load(self) -> TestTree:
        """
        Runs a discovery pass and publishes the resulting tree.

        Raises:
            DiscoveryError: The previous tree stays in effect.
        """
        log.info("Loading tests", emoji_key="load")
        self._tests_emitter.fire(LoadStarted())

        if self.workspace is None:
            log.info("No workspace folder, publishing the built-in suite")
            tree = TestTree(FAKE_TEST_SUITE)
        else:
            try:
                builder = SuiteBuilder(self.extractor, self.config.discovery)
                tree = TestTree(await builder.discover(self.workspace))
            except DiscoveryError as e:
                log.error("Test discovery failed", error=str(e))
                self._tests_emitter.fire(LoadFinished(errored=str(e)))
                raise

        self._tree = tree
        log.info("Tests loaded", nodes=len(tree), tests=len(tree.tests()))
        self._tests_emitter.fire(LoadFinished(suite=tree.root))
        return tree

    async def run(self, test_ids: Sequence[str]) -> RunSummary:
        """
        Runs the given suite and test ids against the current tree.

        Every event is delivered to `test_states` subscribers before this
        returns.
        """
        async with self._run_lock:
            tree = self._tree
            token = CancellationToken()
            self._active_token = token
            queue: asyncio.Queue[RunEvent | None] = asyncio.Queue()
            forwarder = asyncio.create_task(self._forward_events(queue))

            log.info("Running tests", tests=list(test_ids))
            try:
                return await RunEngine(self.runner, queue).run(tree, list(test_ids), token)
            finally:
                queue.put_nowait(None)
                await forwarder
                self._active_token = None

    async def _forward_events(self, queue: "asyncio.Queue[RunEvent | None]") -> None:
        while (event := await queue.get()) is not None:
            self._test_states_emitter.fire(event)

    def cancel(self) -> bool:
        """
        Cancels the active run, killing its in-flight test process.

        Returns:
            True if a run was active.
        """
        if self._active_token is None:
            log.debug("Cancel requested but no run is active")
            return False
        log.warning("Cancelling active test run")
        self._active_token.cancel()
        return True

    def dispose(self) -> None:
        if self._disposed:
            return
        self.cancel()
        self._tests_emitter.dispose()
        self._test_states_emitter.dispose()
        self._disposed = True
        log.debug("Adapter disposed")
