#
# src/gotestadapter/discovery/factory.py
#
"""
Factory for creating SymbolExtractor instances.
"""
import structlog

from gotestadapter.config.models import DiscoveryConfig
from gotestadapter.discovery.extractors import GoOutlineSymbolExtractor, RegexSymbolExtractor
from gotestadapter.discovery.protocols import SymbolExtractor
from gotestadapter.exceptions import ConfigurationError

log = structlog.get_logger("discovery.factory")

EXTRACTOR_NAMES = ("regex", "go-outline")


def get_symbol_extractor(config: DiscoveryConfig) -> SymbolExtractor:
    """
    Factory function to get the SymbolExtractor named by the configuration.
    """
    name = config.symbol_extractor.lower()

    if name == "regex":
        extractor: SymbolExtractor = RegexSymbolExtractor()
    elif name == "go-outline":
        extractor = GoOutlineSymbolExtractor(tool_path=config.go_outline_path)
    else:
        log.error("Unsupported symbol extractor specified", extractor=config.symbol_extractor)
        raise ConfigurationError(
            f"Unsupported symbol extractor: '{config.symbol_extractor}'. "
            f"Available extractors: {list(EXTRACTOR_NAMES)}"
        )

    log.debug("Instantiated symbol extractor", extractor=name)
    return extractor

# 🔼⚙️
