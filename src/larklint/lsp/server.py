"""
larklint Language Server implementation using pygls.

Validates Lark grammars as they are opened and edited, publishes the
resulting diagnostics and provides a flat document outline.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import List, Optional

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    InitializeParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    SymbolKind,
)
from lsprotocol.types import Diagnostic as LspDiagnostic
from lsprotocol.types import DiagnosticSeverity as LspSeverity
from pygls.lsp.server import LanguageServer
from pygls.uris import to_fs_path
from pygls.workspace import TextDocument

from larklint._version import get_version
from larklint.core import ir
from larklint.core.analysis import document_outline, publish_diagnostics
from larklint.core.config import LintConfig, resolve_config
from larklint.core.errors import LarkLintError
from larklint.core.source import LinesTextSource, split_lines

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

_SEVERITIES = {
    ir.Severity.ERROR: LspSeverity.Error,
    ir.Severity.WARNING: LspSeverity.Warning,
}

_SYMBOL_KINDS = {
    ir.SymbolKind.TERMINAL: SymbolKind.Constant,
    ir.SymbolKind.RULE: SymbolKind.Function,
}


class LarkLanguageServer(LanguageServer):
    """Language server holding per-workspace configuration."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.workspace_root: Optional[Path] = None
        self.lint_config: LintConfig = LintConfig()


class DocumentTextSource:
    """TextSource over a pygls TextDocument."""

    def __init__(self, document: TextDocument):
        self.lines = split_lines(document.source)

    def line_count(self) -> int:
        return len(self.lines)

    def line_text(self, index: int) -> str:
        return self.lines[index]


class PublishingSink:
    """
    DiagnosticSink that pushes results to the client.

    Given the document the diagnostics were computed from, columns are
    converted to the client's position encoding (UTF-16 by default).
    """

    def __init__(self, ls: LanguageServer, document: Optional[TextDocument] = None):
        self._ls = ls
        self._document = document

    def set(self, document_id: str, diagnostics: Sequence[ir.Diagnostic]) -> None:
        lines = split_lines(self._document.source) if self._document else []
        self._ls.text_document_publish_diagnostics(
            PublishDiagnosticsParams(
                uri=document_id,
                diagnostics=[
                    _make_diagnostic(d, self._client_range(d.range, lines)) for d in diagnostics
                ],
            )
        )

    def _client_range(self, range_: ir.TextRange, lines: List[str]) -> Range:
        if self._document is None:
            return _to_lsp_range(range_)
        return self._document.position_codec.range_to_client_units(lines, _to_lsp_range(range_))

    def delete(self, document_id: str) -> None:
        self._ls.text_document_publish_diagnostics(
            PublishDiagnosticsParams(uri=document_id, diagnostics=[])
        )


# Create server instance
server = LarkLanguageServer("larklint-lsp", f"v{get_version()}")


@server.feature(INITIALIZE)
def initialize(ls: LarkLanguageServer, params: InitializeParams):
    """Initialize the language server."""
    if params.root_uri:
        root = to_fs_path(params.root_uri)
        if root:
            ls.workspace_root = Path(root)
            logger.info(f"Workspace root: {ls.workspace_root}")
            _load_config(ls)


def _load_config(ls: LarkLanguageServer) -> None:
    """Load workspace configuration, keeping defaults if it is unusable."""
    if not ls.workspace_root:
        return
    try:
        ls.lint_config = resolve_config(ls.workspace_root)
    except LarkLintError as e:
        logger.error(f"Failed to load config: {e}")
        ls.lint_config = LintConfig(root=ls.workspace_root)


def _is_lark_document(ls: LarkLanguageServer, document: TextDocument) -> bool:
    if document.language_id and document.language_id in ls.lint_config.language_ids:
        return True
    return document.uri.endswith(".lark")


def _validate(ls: LarkLanguageServer, uri: str) -> None:
    document = ls.workspace.get_text_document(uri)
    if not _is_lark_document(ls, document):
        return
    diagnostics = publish_diagnostics(
        uri, DocumentTextSource(document), PublishingSink(ls, document), ls.lint_config
    )
    logger.info(f"Validated {uri}: {len(diagnostics)} diagnostics")


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LarkLanguageServer, params: DidOpenTextDocumentParams):
    """Handle document open."""
    logger.info(f"Opened: {params.text_document.uri}")
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LarkLanguageServer, params: DidChangeTextDocumentParams):
    """Handle document change."""
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_SAVE)
def did_save(ls: LarkLanguageServer, params: DidSaveTextDocumentParams):
    """Handle document save."""
    logger.info(f"Saved: {params.text_document.uri}")
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LarkLanguageServer, params: DidCloseTextDocumentParams):
    """Handle document close."""
    logger.info(f"Closed: {params.text_document.uri}")
    PublishingSink(ls).delete(params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbol(ls: LarkLanguageServer, params: DocumentSymbolParams) -> List[DocumentSymbol]:
    """Provide document symbols for outline view."""
    document = ls.workspace.get_text_document(params.text_document.uri)
    return _scan_document_symbols(document.source, document.position_codec)


# Helper functions


def _to_lsp_range(range_: ir.TextRange) -> Range:
    return Range(
        start=Position(line=range_.line, character=range_.start),
        end=Position(line=range_.line, character=range_.end),
    )


def _make_diagnostic(diagnostic: ir.Diagnostic, range_: Optional[Range] = None) -> LspDiagnostic:
    """Convert a core diagnostic into an LSP diagnostic."""
    return LspDiagnostic(
        range=range_ or _to_lsp_range(diagnostic.range),
        message=diagnostic.message,
        severity=_SEVERITIES[diagnostic.severity],
        code=diagnostic.code.value,
        source=diagnostic.source,
    )


def _scan_document_symbols(text: str, position_codec=None) -> List[DocumentSymbol]:
    """Build flat outline symbols from grammar text."""
    lines = split_lines(text)

    def to_client(range_: ir.TextRange) -> Range:
        if position_codec is None:
            return _to_lsp_range(range_)
        return position_codec.range_to_client_units(lines, _to_lsp_range(range_))

    symbols: List[DocumentSymbol] = []
    for entry in document_outline(LinesTextSource(lines)):
        symbols.append(
            DocumentSymbol(
                name=entry.name,
                kind=_SYMBOL_KINDS[entry.kind],
                range=to_client(entry.range),
                selection_range=to_client(entry.selection_range),
                detail=entry.kind.value,
            )
        )
    return symbols


def start_server():
    """Start the larklint LSP server."""
    logger.info("Starting larklint Language Server...")
    server.start_io()


if __name__ == "__main__":
    start_server()
