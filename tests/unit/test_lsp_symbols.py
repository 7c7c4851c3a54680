"""Tests for LSP document symbols."""

from __future__ import annotations


class TestScanDocumentSymbols:
    """_scan_document_symbols finds definitions with correct positions."""

    def test_terminal_is_constant(self) -> None:
        from lsprotocol.types import SymbolKind

        from larklint.lsp.server import _scan_document_symbols

        symbols = _scan_document_symbols('NUMBER: /[0-9]+/\n')
        assert len(symbols) == 1
        assert symbols[0].name == "NUMBER"
        assert symbols[0].kind == SymbolKind.Constant

    def test_rule_is_function(self) -> None:
        from lsprotocol.types import SymbolKind

        from larklint.lsp.server import _scan_document_symbols

        symbols = _scan_document_symbols("start: expr\n?expr: NUMBER\n")
        assert [s.name for s in symbols] == ["start", "expr"]
        assert all(s.kind == SymbolKind.Function for s in symbols)

    def test_selection_range_highlights_name(self) -> None:
        from larklint.lsp.server import _scan_document_symbols

        symbols = _scan_document_symbols("start: a\n  ?expr.2: NUMBER\n")
        sym = symbols[1]
        assert sym.range.start.line == 1
        assert sym.range.start.character == 0
        assert sym.range.end.character == len("  ?expr.2: NUMBER")
        assert sym.selection_range.start.character == 3
        assert sym.selection_range.end.character == 7

    def test_imports_listed_flat(self) -> None:
        from larklint.lsp.server import _scan_document_symbols

        text = "%import common (DIGIT, LETTER)\n%ignore WS\n// comment: here\n"
        symbols = _scan_document_symbols(text)
        assert [s.name for s in symbols] == ["DIGIT", "LETTER"]
        assert all(not s.children for s in symbols)

    def test_body_lines_are_not_symbols(self) -> None:
        from larklint.lsp.server import _scan_document_symbols

        symbols = _scan_document_symbols("sum: a\n    | sum a\n")
        assert [s.name for s in symbols] == ["sum"]


class TestClientPositionEncoding:
    def test_range_counted_in_utf16_units(self) -> None:
        from pygls.workspace import TextDocument

        from larklint.lsp.server import _scan_document_symbols

        text = 'TERM: "\U0001F600"\n'
        document = TextDocument("file:///g.lark", source=text)
        (symbol,) = _scan_document_symbols(text, document.position_codec)
        assert symbol.range.end.character == 10
        assert symbol.selection_range.end.character == 4
