#
# src/gotestadapter/telemetry/__init__.py
#
"""
Logging setup for gotestadapter.
"""
from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]
