# tests/unit/test_extractors.py

"""Tests for the Go symbol extractors and their factory."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gotestadapter.config import DiscoveryConfig
from gotestadapter.discovery import (
    GoOutlineSymbolExtractor,
    RegexSymbolExtractor,
    Symbol,
    SymbolKind,
    get_symbol_extractor,
)
from gotestadapter.discovery.extractors import parse_go_source
from gotestadapter.exceptions import ConfigurationError, SymbolExtractionError

GO_SOURCE = '''package example

import (
    "testing"
)

// func TestInComment(t *testing.T) {}

/*
func TestInBlockComment(t *testing.T) {}
*/

var template = `
func TestInRawString(t *testing.T) {}
`

type fixture struct{}

func (f *fixture) TestMethod(t *testing.T) {}

func TestFirst(t *testing.T) {
    s := "func TestInString(t *testing.T) {"
    _ = s
}

func Map[T any](xs []T) []T { return xs }

func TestSecond(t *testing.T) {}
'''


class TestParseGoSource:
    def test_reports_declarations_in_source_order(self):
        symbols = parse_go_source(GO_SOURCE)

        assert symbols == [
            Symbol("fixture", SymbolKind.TYPE),
            Symbol("TestMethod", SymbolKind.METHOD),
            Symbol("TestFirst", SymbolKind.FUNCTION),
            Symbol("Map", SymbolKind.FUNCTION),
            Symbol("TestSecond", SymbolKind.FUNCTION),
        ]

    def test_ignores_indented_and_commented_functions(self):
        source = "package x\n\n  func TestIndented() {}\n// func TestCommented() {}\n"

        assert parse_go_source(source) == []


@pytest.mark.asyncio
class TestRegexSymbolExtractor:
    async def test_reads_file(self, tmp_path: Path):
        path = tmp_path / "example_test.go"
        path.write_text(GO_SOURCE, encoding="utf-8")

        symbols = await RegexSymbolExtractor().extract_symbols(path)

        assert [s.name for s in symbols if s.kind is SymbolKind.FUNCTION] == ["TestFirst", "Map", "TestSecond"]

    async def test_unreadable_file_raises(self, tmp_path: Path):
        with pytest.raises(SymbolExtractionError, match="Could not read source file"):
            await RegexSymbolExtractor().extract_symbols(tmp_path / "missing_test.go")


def _mock_process(stdout: bytes, stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.returncode = returncode
    return process


@pytest.mark.asyncio
class TestGoOutlineSymbolExtractor:
    async def test_converts_outline_json(self):
        outline = [
            {
                "label": "example",
                "type": "package",
                "children": [
                    {"label": "\"testing\"", "type": "import"},
                    {"label": "TestFirst", "type": "function", "receiverType": ""},
                    {"label": "Run", "type": "function", "receiverType": "*fixture"},
                    {"label": "fixture", "type": "type"},
                    {"label": "unknown", "type": "label"},
                ],
            }
        ]
        process = _mock_process(json.dumps(outline).encode())

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as mock_exec:
            symbols = await GoOutlineSymbolExtractor("go-outline").extract_symbols(Path("/w/a_test.go"))

        assert mock_exec.call_args.args == ("go-outline", "-f", "/w/a_test.go")
        assert symbols == [
            Symbol("\"testing\"", SymbolKind.IMPORT),
            Symbol("TestFirst", SymbolKind.FUNCTION),
            Symbol("Run", SymbolKind.METHOD),
            Symbol("fixture", SymbolKind.TYPE),
        ]

    async def test_missing_tool_raises(self):
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("nope"))):
            with pytest.raises(SymbolExtractionError, match="Could not run 'go-outline'"):
                await GoOutlineSymbolExtractor().extract_symbols(Path("/w/a_test.go"))

    async def test_nonzero_exit_raises(self):
        process = _mock_process(b"", b"parse error", returncode=1)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(SymbolExtractionError, match="parse error"):
                await GoOutlineSymbolExtractor().extract_symbols(Path("/w/a_test.go"))

    async def test_invalid_json_raises(self):
        process = _mock_process(b"not json")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(SymbolExtractionError, match="invalid JSON"):
                await GoOutlineSymbolExtractor().extract_symbols(Path("/w/a_test.go"))


class TestGetSymbolExtractor:
    def test_default_is_regex(self):
        assert isinstance(get_symbol_extractor(DiscoveryConfig()), RegexSymbolExtractor)

    def test_go_outline_uses_configured_path(self):
        extractor = get_symbol_extractor(
            DiscoveryConfig(symbol_extractor="go-outline", go_outline_path="/opt/bin/go-outline")
        )
        assert isinstance(extractor, GoOutlineSymbolExtractor)
        assert extractor.tool_path == "/opt/bin/go-outline"

    def test_unknown_extractor_raises(self):
        with pytest.raises(ConfigurationError, match="Unsupported symbol extractor"):
            get_symbol_extractor(DiscoveryConfig(symbol_extractor="gopls"))
