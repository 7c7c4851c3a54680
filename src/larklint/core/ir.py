"""
Intermediate representation for larklint analysis results.

This module contains the symbol records built from a grammar document and
the diagnostics and outline entries produced from them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SymbolKind(str, Enum):
    """Lexical class of a grammar symbol."""

    TERMINAL = "terminal"  # UPPER_CASE
    RULE = "rule"  # lower_case


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(str, Enum):
    """Stable identifiers for every diagnostic larklint can emit."""

    UNUSED_SYMBOL = "unused-symbol"
    UNDEFINED_TERMINAL = "undefined-terminal"
    UNDEFINED_RULE = "undefined-rule"
    INVALID_DEFINITION_NAME = "invalid-definition-name"


class DefinitionRecord(BaseModel):
    """
    A symbol defined in a grammar document.

    Attributes:
        name: Symbol name without prefix markers or priority suffix
        kind: Terminal or rule
        line: 0-based line of the (last) definition
        column: 0-based column of the name on that line
        used: Set once a reference to the symbol is seen on another line
    """

    name: str
    kind: SymbolKind
    line: int
    column: int = 0
    used: bool = False

    def mark_used(self) -> None:
        """Transition the record to used. There is no way back."""
        self.used = True


class TextRange(BaseModel):
    """Half-open column span on a single line."""

    line: int
    start: int
    end: int

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, line: int, start: int, length: int) -> TextRange:
        return cls(line=line, start=start, end=start + length)


class Diagnostic(BaseModel):
    """
    A single finding reported against a grammar document.

    Examples:
        - Diagnostic(range=..., message="Unused grammar symbol 'BAR'",
          severity=WARNING, code=UNUSED_SYMBOL)
        - Diagnostic(range=..., message="Undefined rule 'baz'",
          severity=ERROR, code=UNDEFINED_RULE)
    """

    range: TextRange
    message: str
    severity: Severity
    code: DiagnosticCode
    source: str = "larklint"

    model_config = ConfigDict(frozen=True)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


class OutlineSymbol(BaseModel):
    """Flat outline entry for one defined or imported symbol."""

    name: str
    kind: SymbolKind
    line: int
    line_length: int
    name_start: int

    model_config = ConfigDict(frozen=True)

    @property
    def range(self) -> TextRange:
        """The whole defining line."""
        return TextRange(line=self.line, start=0, end=self.line_length)

    @property
    def selection_range(self) -> TextRange:
        """Just the symbol name."""
        return TextRange.of(self.line, self.name_start, len(self.name))
