"""
Symbol table construction.

The table maps every name defined or imported by a document to a single
DefinitionRecord. It is built fresh for each validation pass and handed to
the scanner, which flips the records' ``used`` flags.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from .classifier import DefinitionMatch, DirectiveMatch, classify_line, symbol_kind
from .ir import DefinitionRecord, SymbolKind
from .source import TextSource, iter_lines

logger = logging.getLogger(__name__)

# Implicit entry point of every Lark grammar
START_SYMBOL = "start"


class SymbolTable(Mapping[str, DefinitionRecord]):
    """Name -> DefinitionRecord, one record per name (last definition wins)."""

    def __init__(self) -> None:
        self._records: dict[str, DefinitionRecord] = {}

    def __getitem__(self, name: str) -> DefinitionRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def define(self, name: str, kind: SymbolKind, line: int, column: int = 0) -> DefinitionRecord:
        record = DefinitionRecord(name=name, kind=kind, line=line, column=column)
        self._records[name] = record
        return record

    def unused(self) -> list[DefinitionRecord]:
        """Records never referenced, excluding the start symbol."""
        return [r for r in self._records.values() if not r.used and r.name != START_SYMBOL]


def build_symbol_table(source: TextSource) -> SymbolTable:
    """Collect every definition head and directive-bound name in a document."""
    table = SymbolTable()
    for i, text in iter_lines(source):
        match = classify_line(text)
        if isinstance(match, DefinitionMatch):
            table.define(match.name, match.kind, i, match.name_start)
        elif isinstance(match, DirectiveMatch):
            for declared in match.names:
                table.define(declared.name, symbol_kind(declared.name), i, declared.start)

    logger.debug(f"Symbol table built with {len(table)} symbols")
    return table
