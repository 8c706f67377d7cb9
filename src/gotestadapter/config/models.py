#
# config/models.py
#
"""
Attrs-based data models for gotestadapter configuration structure.
"""

import logging
from pathlib import Path
from typing import Any

from attrs import define, field


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_non_empty(inst: Any, attr: Any, value: str) -> None:
    """Validator ensures a naming convention string is not empty."""
    if not isinstance(value, str) or not value:
        raise ValueError(f"Field '{attr.name}' must be a non-empty string, got {value!r}")


def _validate_non_negative(inst: Any, attr: Any, value: float) -> None:
    """Validator ensures a number is zero or positive."""
    if isinstance(value, bool) or not isinstance(value, int | float) or value < 0:
        raise ValueError(f"Field '{attr.name}' must be a non-negative number, got {value}")


@define(frozen=True, slots=True)
class DiscoveryConfig:
    """How test files and test functions are recognised."""
    test_file_suffix: str = field(default="_test.go", validator=_validate_non_empty)
    test_function_prefix: str = field(default="Test", validator=_validate_non_empty)
    suite_function_suffix: str = field(default="Suite", validator=_validate_non_empty)
    symbol_extractor: str = field(default="regex")
    go_outline_path: str = field(default="go-outline")
    # When False, a test file with no tests still yields an empty file suite.
    prune_empty_files: bool = field(default=False)
    follow_symlinks: bool = field(default=False)


@define(frozen=True, slots=True)
class RunnerConfig:
    """Settings for the external `go test` invocation."""
    go_path: Path = field(default=Path("/usr/local/bin/go"), converter=Path)
    timeout_seconds: float = field(default=600, validator=_validate_non_negative)
    legacy_always_pass: bool = field(default=False)

    @property
    def timeout(self) -> float | None:
        """Timeout in seconds, or None when disabled."""
        return self.timeout_seconds or None


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for gotestadapter."""
    log_level: str = field(default="INFO", validator=_validate_log_level)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


@define(frozen=True, slots=True)
class AdapterConfig:
    """Root configuration object for the adapter."""
    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})
    discovery: DiscoveryConfig = field(factory=DiscoveryConfig)
    runner: RunnerConfig = field(factory=RunnerConfig)


# 🔼⚙️
