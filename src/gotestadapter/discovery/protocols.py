#
# src/gotestadapter/discovery/protocols.py
#
"""
Defines the symbol extraction protocol and the symbols it produces.
"""
from enum import Enum, auto
from pathlib import Path
from typing import Protocol, runtime_checkable

from attrs import define


class SymbolKind(Enum):
    """Kinds of top-level declarations an extractor can report."""

    PACKAGE = auto()
    IMPORT = auto()
    FUNCTION = auto()
    METHOD = auto()
    TYPE = auto()
    VARIABLE = auto()
    CONSTANT = auto()


@define(frozen=True, slots=True)
class Symbol:
    """A named declaration found in a source file."""
    name: str
    kind: SymbolKind


@runtime_checkable
class SymbolExtractor(Protocol):
    """
    Protocol for a source parser that lists the declarations of one file.
    """
    async def extract_symbols(self, path: Path) -> list[Symbol]:
        """
        Returns the file's declarations in source order.

        Args:
            path: Absolute path of the source file.

        Raises:
            SymbolExtractionError: The file could not be read or parsed.
        """
        ...

# 🔼⚙️
