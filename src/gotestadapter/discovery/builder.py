#
# src/gotestadapter/discovery/builder.py
#
"""
Walks a workspace and builds the immutable suite/test tree.

Tree shape:

    Root                              id: root
      pkg                             id: root/pkg
        foo_test.go | TestMySuite     id: /abs/pkg/foo_test.go
          TestA                       id: /abs/pkg/foo_test.go::TestMySuite::TestA
"""
import asyncio
import os
from enum import Enum, auto
from pathlib import Path

import structlog

from gotestadapter.config.models import DiscoveryConfig
from gotestadapter.discovery.protocols import Symbol, SymbolExtractor, SymbolKind
from gotestadapter.exceptions import DiscoveryError, SymbolExtractionError
from gotestadapter.telemetry import StructLogger
from gotestadapter.tree import SuiteNode, TestNode, TreeNode

log: StructLogger = structlog.get_logger("discovery.builder")

ROOT_ID = "root"
ROOT_LABEL = "Root"
# Neither separator can occur in a directory name or a Go identifier.
DIRECTORY_SEPARATOR = "/"
TEST_SEPARATOR = "::"


class NodeKind(Enum):
    DIRECTORY = auto()
    FILE = auto()
    TEST = auto()


def assign_id(parent_id: str, kind: NodeKind, name: str) -> str:
    """
    Derives the id of a node from its parent's id.

    Args:
        parent_id: Id of the enclosing suite. Ignored for files.
        kind: What the node represents.
        name: Directory name, absolute file path, or `<group>::<symbol>` for tests.
    """
    if kind is NodeKind.DIRECTORY:
        return f"{parent_id}{DIRECTORY_SEPARATOR}{name}"
    if kind is NodeKind.FILE:
        return name
    if kind is NodeKind.TEST:
        return f"{parent_id}{TEST_SEPARATOR}{name}"
    raise ValueError(f"Unknown node kind: {kind!r}")


def make_test_id(file_suite_id: str, group: str, symbol_name: str) -> str:
    return assign_id(file_suite_id, NodeKind.TEST, f"{group}{TEST_SEPARATOR}{symbol_name}")


class SuiteBuilder:
    """Builds a SuiteNode tree from the `_test.go` files under a directory."""

    def __init__(self, extractor: SymbolExtractor, config: DiscoveryConfig | None = None):
        self.extractor = extractor
        self.config = config or DiscoveryConfig()

    async def discover(self, root_path: Path) -> SuiteNode:
        """
        Runs one discovery pass.

        Raises:
            DiscoveryError: Any directory, file or extractor failure. No
                partial tree is returned.
        """
        root_path = Path(root_path).absolute()
        log.info("Starting discovery", path=str(root_path), emoji_key="discover")
        root = await self._walk(root_path, ROOT_ID, ROOT_LABEL)
        log.info("Discovery complete", path=str(root_path), suites=len(root.children))
        return root

    async def _walk(self, directory: Path, suite_id: str, label: str) -> SuiteNode:
        entries = await self._list_directory(directory)
        children: list[TreeNode] = []

        for name, is_dir, is_file in entries:
            entry_path = directory / name
            if is_dir:
                child = await self._walk(entry_path, assign_id(suite_id, NodeKind.DIRECTORY, name), name)
                if child.children:
                    children.append(child)
                else:
                    log.debug("Pruning directory without tests", path=str(entry_path))
            elif is_file and name.endswith(self.config.test_file_suffix):
                file_suite = await self.build_file_suite(entry_path)
                if file_suite.children or not self.config.prune_empty_files:
                    children.append(file_suite)

        return SuiteNode(id=suite_id, label=label, children=children)

    async def _list_directory(self, directory: Path) -> list[tuple[str, bool, bool]]:
        follow = self.config.follow_symlinks

        def scan() -> list[tuple[str, bool, bool]]:
            with os.scandir(directory) as it:
                return [
                    (entry.name, entry.is_dir(follow_symlinks=follow), entry.is_file())
                    for entry in it
                ]

        try:
            return await asyncio.to_thread(scan)
        except OSError as e:
            log.error("Failed to list directory", path=str(directory), error=str(e))
            raise DiscoveryError("Could not list directory", path=str(directory), details=e) from e

    async def build_file_suite(self, path: Path) -> SuiteNode:
        """Extracts the tests of one file and wraps them in a file-level suite."""
        try:
            symbols = await self.extractor.extract_symbols(path)
        except DiscoveryError:
            raise
        except Exception as e:
            log.error("Symbol extraction failed", path=str(path), error=str(e))
            raise SymbolExtractionError("Symbol extraction failed", path=str(path), details=e) from e

        prefix = self.config.test_function_prefix
        suffix = self.config.suite_function_suffix
        candidates = [s for s in symbols if s.kind is SymbolKind.FUNCTION and s.name.startswith(prefix)]

        wrappers = [s for s in candidates if s.name.endswith(suffix)]
        wrapper_name = wrappers[0].name if wrappers else None
        group = wrapper_name or path.name

        file_suite_id = assign_id("", NodeKind.FILE, str(path))
        tests = sorted((s for s in candidates if not s.name.endswith(suffix)), key=_test_order)

        children = [
            TestNode(
                id=make_test_id(file_suite_id, group, symbol.name),
                label=symbol.name,
                file=path,
                description=wrapper_name,
            )
            for symbol in _unique(tests, path)
        ]
        log.debug("Built file suite", path=str(path), group=group, tests=len(children))
        return SuiteNode(id=file_suite_id, label=group, children=children)


def _test_order(symbol: Symbol) -> tuple[str, str]:
    """Case-insensitive name order; on a case-only tie lowercase sorts first."""
    return symbol.name.casefold(), symbol.name.swapcase()


def _unique(symbols: list[Symbol], path: Path) -> list[Symbol]:
    seen: set[str] = set()
    result = []
    for symbol in symbols:
        if symbol.name in seen:
            log.warning("Duplicate test function ignored", path=str(path), name=symbol.name)
            continue
        seen.add(symbol.name)
        result.append(symbol)
    return result

# 🔼⚙️
