#
# src/gotestadapter/testing/__init__.py
#
"""
Test execution sub-package for gotestadapter.
"""
from .output import GoTestReport, parse_test_output
from .protocols import TestRunner, TestRunResult
from .subprocess_runner import GoTestProcessRunner

__all__ = [
    "GoTestProcessRunner",
    "GoTestReport",
    "TestRunResult",
    "TestRunner",
    "parse_test_output",
]

# 🔼⚙️
