#
# src/gotestadapter/__init__.py
#
"""
gotestadapter: discovers Go tests in a workspace and runs them through `go test`.
"""
from gotestadapter.runtime.adapter import GoTestAdapter
from gotestadapter.tree import SuiteNode, TestNode, TestTree

__all__ = [
    "GoTestAdapter",
    "SuiteNode",
    "TestNode",
    "TestTree",
]

# 🔼⚙️
