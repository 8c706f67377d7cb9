#
# src/gotestadapter/runtime/__init__.py
#
"""
Run orchestration: the engine, cancellation and the host-facing adapter.
"""
from .cancellation import CancellationToken
from .engine import RunEngine, RunSummary

__all__ = ["CancellationToken", "RunEngine", "RunSummary"]
