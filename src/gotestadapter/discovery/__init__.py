#
# src/gotestadapter/discovery/__init__.py
#
"""
Test discovery sub-package: symbol extraction and suite tree building.
"""
from .builder import NodeKind, SuiteBuilder, assign_id, make_test_id
from .extractors import GoOutlineSymbolExtractor, RegexSymbolExtractor
from .factory import get_symbol_extractor
from .protocols import Symbol, SymbolExtractor, SymbolKind

__all__ = [
    "GoOutlineSymbolExtractor",
    "NodeKind",
    "RegexSymbolExtractor",
    "SuiteBuilder",
    "Symbol",
    "SymbolExtractor",
    "SymbolKind",
    "assign_id",
    "get_symbol_extractor",
    "make_test_id",
]

# 🔼⚙️
