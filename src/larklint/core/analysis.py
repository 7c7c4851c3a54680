"""
Validation passes over a single grammar document.

A pass builds the symbol table, scans references against it and returns
the complete diagnostic set. Passes share no state, so running one twice
over unchanged text gives the same result.
"""

from __future__ import annotations

import logging

from .classifier import DefinitionMatch, DirectiveMatch, classify_line, symbol_kind
from .config import LintConfig
from .ir import Diagnostic, OutlineSymbol
from .scanner import scan
from .source import DiagnosticSink, TextSource, iter_lines
from .symbols import build_symbol_table

logger = logging.getLogger(__name__)


def validate(source: TextSource, config: LintConfig | None = None) -> list[Diagnostic]:
    """
    Run one validation pass over a document.

    Args:
        source: Document text
        config: Optional configuration; disabled diagnostic codes are dropped

    Returns:
        Every diagnostic found, in line order of discovery per check
    """
    table = build_symbol_table(source)
    diagnostics = scan(source, table)
    if config is not None:
        diagnostics = config.filter(diagnostics)
    return diagnostics


def publish_diagnostics(
    document_id: str,
    source: TextSource,
    sink: DiagnosticSink,
    config: LintConfig | None = None,
) -> list[Diagnostic]:
    """Validate a document and replace its diagnostics in the sink in one go."""
    diagnostics = validate(source, config)
    sink.set(document_id, diagnostics)
    logger.debug(f"Published {len(diagnostics)} diagnostics for {document_id}")
    return diagnostics


def document_outline(source: TextSource) -> list[OutlineSymbol]:
    """Flat outline with one entry per defined or imported name."""
    symbols: list[OutlineSymbol] = []
    for i, text in iter_lines(source):
        match = classify_line(text)
        if isinstance(match, DefinitionMatch):
            symbols.append(
                OutlineSymbol(
                    name=match.name,
                    kind=match.kind,
                    line=i,
                    line_length=len(text),
                    name_start=match.name_start,
                )
            )
        elif isinstance(match, DirectiveMatch):
            for declared in match.names:
                symbols.append(
                    OutlineSymbol(
                        name=declared.name,
                        kind=symbol_kind(declared.name),
                        line=i,
                        line_length=len(text),
                        name_start=declared.start,
                    )
                )
    return symbols
