#
# src/gotestadapter/tree.py
#
"""
Immutable suite/test tree and the id index snapshot built from it.
"""
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import TypeAlias

from attrs import define, field

from gotestadapter.exceptions import DiscoveryError


def _to_tuple(children) -> tuple:
    return tuple(children)


@define(frozen=True, slots=True)
class TestNode:
    """A single runnable Go test function."""
    __test__ = False  # not a pytest class

    id: str
    label: str
    file: Path | None = field(default=None)
    description: str | None = field(default=None)

    def to_dict(self) -> dict:
        data: dict = {"type": "test", "id": self.id, "label": self.label}
        if self.file is not None:
            data["file"] = str(self.file)
        if self.description is not None:
            data["description"] = self.description
        return data


@define(frozen=True, slots=True)
class SuiteNode:
    """
    Groups suites and tests under a label.

    Children keep discovery order and are stored as a tuple so the node
    cannot change once the builder returns it.
    """
    id: str
    label: str
    children: tuple["TreeNode", ...] = field(factory=tuple, converter=_to_tuple)

    def to_dict(self) -> dict:
        return {
            "type": "suite",
            "id": self.id,
            "label": self.label,
            "children": [child.to_dict() for child in self.children],
        }


TreeNode: TypeAlias = SuiteNode | TestNode


def iter_nodes(node: TreeNode) -> Iterator[TreeNode]:
    """Yields `node` and its descendants depth-first, parents before children."""
    yield node
    if isinstance(node, SuiteNode):
        for child in node.children:
            yield from iter_nodes(child)


def _build_index(root: SuiteNode) -> Mapping[str, TreeNode]:
    index: dict[str, TreeNode] = {}
    for node in iter_nodes(root):
        if node.id in index:
            raise DiscoveryError(f"Duplicate node id '{node.id}'")
        index[node.id] = node
    return MappingProxyType(index)


@define(frozen=True, slots=True, eq=False)
class TestTree:
    """
    One discovery pass: the root suite plus a read-only id -> node index.

    Replaced wholesale on every load, never patched.
    """
    __test__ = False

    root: SuiteNode
    nodes_by_id: Mapping[str, TreeNode] = field(init=False)

    def __attrs_post_init__(self) -> None:
        object.__setattr__(self, "nodes_by_id", _build_index(self.root))

    def get(self, node_id: str) -> TreeNode | None:
        return self.nodes_by_id.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes_by_id

    def __len__(self) -> int:
        return len(self.nodes_by_id)

    def tests(self) -> list[TestNode]:
        """All test nodes in traversal order."""
        return [node for node in iter_nodes(self.root) if isinstance(node, TestNode)]


def empty_tree() -> TestTree:
    return TestTree(SuiteNode(id="root", label="Root"))


__all__ = ["SuiteNode", "TestNode", "TestTree", "TreeNode", "empty_tree", "iter_nodes"]
