"""Core larklint functionality: line classification, symbol tables, reference scanning."""

from . import ir
from .analysis import document_outline, publish_diagnostics, validate
from .classifier import (
    DefinitionMatch,
    DirectiveMatch,
    InvalidHead,
    SkippedLine,
    classify_line,
)
from .config import LintConfig, find_config, load_config, resolve_config
from .errors import ConfigError, ErrorContext, LarkLintError, SourceError
from .fileset import discover_grammar_files, read_grammar
from .scanner import scan
from .source import DiagnosticSink, LinesTextSource, MemoryDiagnosticSink, TextSource
from .symbols import START_SYMBOL, SymbolTable, build_symbol_table

__all__ = [
    "ir",
    "LarkLintError",
    "ConfigError",
    "SourceError",
    "ErrorContext",
    "classify_line",
    "DefinitionMatch",
    "DirectiveMatch",
    "InvalidHead",
    "SkippedLine",
    "build_symbol_table",
    "SymbolTable",
    "START_SYMBOL",
    "scan",
    "validate",
    "publish_diagnostics",
    "document_outline",
    "TextSource",
    "DiagnosticSink",
    "LinesTextSource",
    "MemoryDiagnosticSink",
    "LintConfig",
    "load_config",
    "find_config",
    "resolve_config",
    "discover_grammar_files",
    "read_grammar",
]
