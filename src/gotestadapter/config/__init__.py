#
# config/__init__.py
#
"""
Configuration handling sub-package for gotestadapter.

Exports the loading function and core configuration model.
"""

from .loader import build_config, load_config
from .models import (
    AdapterConfig,
    DiscoveryConfig,
    GlobalConfig,
    RunnerConfig,
)

__all__ = [
    "AdapterConfig",
    "DiscoveryConfig",
    "GlobalConfig",
    "RunnerConfig",
    "build_config",
    "load_config",
]

# 🔼⚙️
