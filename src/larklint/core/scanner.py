"""
Reference scanning and diagnostic construction.

Runs after the symbol table is complete, so a symbol defined at the end of
a grammar satisfies references that appear before it. Three checks:

- usage sweep: whole-word occurrences of a defined name on any other line
  mark the name as used (raw text, literals and comments included)
- undefined references: symbol-shaped tokens in rule bodies, with string
  literals, regex literals, aliases and comments masked out, that have no
  definition
- invalid heads: text before ':' that is not a symbol name

Symbols never marked used are reported last.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from .classifier import (
    RULE_BODY,
    SYMBOL_SUFFIX,
    TERM_BODY,
    DefinitionMatch,
    DirectiveMatch,
    InvalidHead,
    SkippedLine,
    classify_line,
)
from .ir import Diagnostic, DiagnosticCode, Severity, SymbolKind, TextRange
from .source import TextSource, iter_lines
from .symbols import START_SYMBOL, SymbolTable

logger = logging.getLogger(__name__)

_STRING_RE = re.compile(r'"[^"]*"i?')
_TRUNCATE_RE = re.compile(r"//|->")
_REGEX_RE = re.compile(r"/(?:\\.|[^/\\])*/[gimsuylx]*")

TERM_USAGE_RE = re.compile(r"\b" + TERM_BODY + SYMBOL_SUFFIX + r"\b", re.ASCII)
RULE_USAGE_RE = re.compile(r"\b" + RULE_BODY + SYMBOL_SUFFIX + r"\b", re.ASCII)


def _blank(m: re.Match[str]) -> str:
    return " " * len(m.group(0))


def mask_body(text: str) -> str:
    """
    Blank out everything in a body that cannot hold a symbol reference.

    Column offsets are preserved: literals are replaced by spaces of equal
    length and the text is only ever shortened at its end.
    """
    masked = _STRING_RE.sub(_blank, text)
    masked = _TRUNCATE_RE.split(masked, maxsplit=1)[0]
    return _REGEX_RE.sub(_blank, masked)


def _word_pattern(name: str) -> re.Pattern[str]:
    return re.compile(r"\b" + re.escape(name) + r"\b", re.ASCII)


def mark_usages(source: TextSource, table: SymbolTable) -> None:
    """Mark every record referenced on a line other than its own."""
    patterns = {name: _word_pattern(name) for name in table}
    for i, text in iter_lines(source):
        for name, record in table.items():
            if record.used or record.line == i:
                continue
            if patterns[name].search(text):
                record.mark_used()


def _undefined(line: int, start: int, name: str, kind: SymbolKind) -> Diagnostic:
    if kind == SymbolKind.TERMINAL:
        message, code = f"Undefined terminal '{name}'", DiagnosticCode.UNDEFINED_TERMINAL
    else:
        message, code = f"Undefined rule '{name}'", DiagnosticCode.UNDEFINED_RULE
    return Diagnostic(
        range=TextRange.of(line, start, len(name)),
        message=message,
        severity=Severity.ERROR,
        code=code,
    )


def _references(body: str) -> Iterator[tuple[int, str, SymbolKind]]:
    for pattern, kind in ((TERM_USAGE_RE, SymbolKind.TERMINAL), (RULE_USAGE_RE, SymbolKind.RULE)):
        for m in pattern.finditer(body):
            yield m.start(1), m.group(1), kind


def find_undefined_references(source: TextSource, table: SymbolTable) -> list[Diagnostic]:
    """Report invalid definition heads and references with no definition."""
    diagnostics: list[Diagnostic] = []
    for i, text in iter_lines(source):
        match = classify_line(text)
        if isinstance(match, (SkippedLine, DirectiveMatch)):
            continue

        offset = 0
        if isinstance(match, DefinitionMatch):
            offset = match.body_start
        elif isinstance(match, InvalidHead):
            diagnostics.append(
                Diagnostic(
                    range=TextRange(line=i, start=match.start, end=match.end),
                    message=f"Invalid definition name '{match.head}'",
                    severity=Severity.ERROR,
                    code=DiagnosticCode.INVALID_DEFINITION_NAME,
                )
            )

        for start, name, kind in _references(mask_body(text[offset:])):
            if kind == SymbolKind.RULE and name == START_SYMBOL:
                continue
            if name not in table:
                diagnostics.append(_undefined(i, offset + start, name, kind))
    return diagnostics


def report_unused(source: TextSource, table: SymbolTable) -> list[Diagnostic]:
    """Warn about every symbol that was never marked used."""
    diagnostics: list[Diagnostic] = []
    for record in table.unused():
        text = source.line_text(record.line)
        start = record.column
        if not text.startswith(record.name, start):
            start = text.find(record.name)
        if start < 0:
            continue
        diagnostics.append(
            Diagnostic(
                range=TextRange.of(record.line, start, len(record.name)),
                message=f"Unused grammar symbol '{record.name}'",
                severity=Severity.WARNING,
                code=DiagnosticCode.UNUSED_SYMBOL,
            )
        )
    return diagnostics


def scan(source: TextSource, table: SymbolTable) -> list[Diagnostic]:
    """Run the reference checks against a complete symbol table."""
    mark_usages(source, table)
    diagnostics = find_undefined_references(source, table)
    diagnostics.extend(report_unused(source, table))
    logger.debug(f"Scan produced {len(diagnostics)} diagnostics")
    return diagnostics
