"""
Host-facing contracts for the analysis core.

The core reads grammar text through a TextSource and hands results to a
DiagnosticSink. Editors, the language server and the CLI each provide
their own implementations; the in-memory ones here back the CLI and tests.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .ir import Diagnostic

# Only the line breaks editors and LSP clients count, unlike str.splitlines
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split text into lines without line endings. A trailing break adds no line."""
    if not text:
        return []
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


@runtime_checkable
class TextSource(Protocol):
    """Read-only, line-addressed view of a document."""

    def line_count(self) -> int: ...

    def line_text(self, index: int) -> str: ...


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives complete diagnostic sets, keyed by document identity."""

    def set(self, document_id: str, diagnostics: Sequence[Diagnostic]) -> None: ...

    def delete(self, document_id: str) -> None: ...


class LinesTextSource:
    """TextSource over a string or a list of lines (without line endings)."""

    def __init__(self, lines: Sequence[str]):
        self._lines = list(lines)

    @classmethod
    def from_text(cls, text: str) -> LinesTextSource:
        return cls(split_lines(text))

    def line_count(self) -> int:
        return len(self._lines)

    def line_text(self, index: int) -> str:
        return self._lines[index]


class MemoryDiagnosticSink:
    """DiagnosticSink that keeps the latest set per document in a dict."""

    def __init__(self) -> None:
        self.documents: dict[str, list[Diagnostic]] = {}

    def set(self, document_id: str, diagnostics: Sequence[Diagnostic]) -> None:
        self.documents[document_id] = list(diagnostics)

    def delete(self, document_id: str) -> None:
        self.documents.pop(document_id, None)

    def get(self, document_id: str) -> list[Diagnostic]:
        return self.documents.get(document_id, [])


def iter_lines(source: TextSource):
    """Yield ``(index, text)`` for every line of a source."""
    for i in range(source.line_count()):
        yield i, source.line_text(i)
