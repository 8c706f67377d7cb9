#
# src/gotestadapter/discovery/extractors.py
#
"""
Symbol extractors for Go source files.
"""
import asyncio
import json
import re
from pathlib import Path
from typing import Any

import structlog

from gotestadapter.discovery.protocols import Symbol, SymbolExtractor, SymbolKind
from gotestadapter.exceptions import SymbolExtractionError
from gotestadapter.telemetry import StructLogger

log: StructLogger = structlog.get_logger("discovery.extractors")

# Comments and string literals, blanked out before declarations are matched.
_NOISE_RE = re.compile(
    r"//[^\n]*"
    r"|/\*.*?\*/"
    r"|`[^`]*`"
    r'|"(?:\\.|[^"\\\n])*"'
    r"|'(?:\\.|[^'\\\n])*'",
    re.DOTALL,
)
_FUNC_RE = re.compile(r"^func\s+([A-Za-z_]\w*)\s*[\[(]", re.MULTILINE)
_METHOD_RE = re.compile(r"^func\s*\([^)]*\)\s*([A-Za-z_]\w*)\s*[\[(]", re.MULTILINE)
_TYPE_RE = re.compile(r"^type\s+([A-Za-z_]\w*)\b", re.MULTILINE)


def _blank(match: re.Match) -> str:
    # keep line structure so `^` anchors still line up with declarations
    return "\n" * match.group(0).count("\n") or " "


def strip_comments_and_strings(source: str) -> str:
    return _NOISE_RE.sub(_blank, source)


def parse_go_source(source: str) -> list[Symbol]:
    """Returns the top-level functions, methods and types of `source` in source order."""
    code = strip_comments_and_strings(source)
    found: list[tuple[int, Symbol]] = []
    for regex, kind in (
        (_FUNC_RE, SymbolKind.FUNCTION),
        (_METHOD_RE, SymbolKind.METHOD),
        (_TYPE_RE, SymbolKind.TYPE),
    ):
        for match in regex.finditer(code):
            found.append((match.start(), Symbol(name=match.group(1), kind=kind)))
    found.sort(key=lambda item: item[0])
    return [symbol for _, symbol in found]


class RegexSymbolExtractor(SymbolExtractor):
    """
    Finds top-level declarations with regular expressions.

    Needs no Go tooling. Only declarations that start at column 0 are seen,
    which is how gofmt lays out every top-level func and type.
    """
    async def extract_symbols(self, path: Path) -> list[Symbol]:
        try:
            source = await asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace")
        except OSError as e:
            log.error("Failed to read source file", path=str(path), error=str(e))
            raise SymbolExtractionError("Could not read source file", path=str(path), details=e) from e

        symbols = parse_go_source(source)
        log.debug("Extracted symbols", path=str(path), count=len(symbols))
        return symbols


_OUTLINE_KINDS = {
    "package": SymbolKind.PACKAGE,
    "import": SymbolKind.IMPORT,
    "function": SymbolKind.FUNCTION,
    "type": SymbolKind.TYPE,
    "variable": SymbolKind.VARIABLE,
    "constant": SymbolKind.CONSTANT,
}


class GoOutlineSymbolExtractor(SymbolExtractor):
    """
    Runs the `go-outline` tool and converts its JSON declarations.
    """
    def __init__(self, tool_path: str = "go-outline"):
        self.tool_path = tool_path

    async def extract_symbols(self, path: Path) -> list[Symbol]:
        command = [self.tool_path, "-f", str(path)]
        outline_log = log.bind(command=" ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout_bytes, stderr_bytes = await process.communicate()
        except OSError as e:
            outline_log.error("go-outline could not be started", error=str(e))
            raise SymbolExtractionError(
                f"Could not run '{self.tool_path}'. Is it installed and in the system's PATH?",
                path=str(path),
                details=e,
            ) from e

        if process.returncode != 0:
            stderr = stderr_bytes.decode("utf-8", errors="replace").strip()
            outline_log.error("go-outline failed", exit_code=process.returncode, stderr=stderr)
            raise SymbolExtractionError(
                f"go-outline exited with code {process.returncode}: {stderr}", path=str(path)
            )

        try:
            decls = json.loads(stdout_bytes)
        except json.JSONDecodeError as e:
            raise SymbolExtractionError("go-outline produced invalid JSON", path=str(path), details=e) from e

        symbols = self._convert(decls)
        outline_log.debug("Extracted symbols", path=str(path), count=len(symbols))
        return symbols

    def _convert(self, decls: list[dict[str, Any]]) -> list[Symbol]:
        symbols: list[Symbol] = []
        for decl in decls:
            kind = _OUTLINE_KINDS.get(decl.get("type", ""))
            if kind is None:
                continue
            if kind is SymbolKind.PACKAGE:
                # top-level declarations are the package's children
                symbols.extend(self._convert(decl.get("children") or []))
                continue
            if kind is SymbolKind.FUNCTION and decl.get("receiverType"):
                kind = SymbolKind.METHOD
            symbols.append(Symbol(name=decl.get("label", ""), kind=kind))
        return symbols

# 🔼⚙️
