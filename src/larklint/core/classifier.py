"""
Line classification for Lark grammar text.

Each line is classified on its own with regular expressions, without a
grammar parser, so that partially written or broken grammars can still be
analysed. A line is one of:

- DefinitionMatch: ``NAME: ...`` / ``?rule.2: ...`` starts a definition
- DirectiveMatch: ``%import`` / ``%declare`` binds one or more names
- SkippedLine: any other ``%`` directive, or a ``//`` comment
- InvalidHead: something that is not an identifier sits before ``:``
- None: plain body text (alternatives, continuation lines, blanks)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, NamedTuple

from .ir import SymbolKind

# Building blocks shared by definition heads and references
SYMBOL_PREFIX = r"^\s*(?:[?!])?"
SYMBOL_SUFFIX = r"(?:\.\d+)?"
TERM_BODY = r"([A-Z_][A-Z_0-9]*)"
RULE_BODY = r"([a-z_][a-z_0-9]*)"

TERM_DEF_RE = re.compile(SYMBOL_PREFIX + TERM_BODY + SYMBOL_SUFFIX + r"\s*:", re.ASCII)
RULE_DEF_RE = re.compile(SYMBOL_PREFIX + RULE_BODY + SYMBOL_SUFFIX + r"\s*:", re.ASCII)
DEF_HEAD_RE = re.compile(r"^\s*([^:\s]+)\s*:")

_TERM_NAME_RE = re.compile(r"[A-Z_][A-Z_0-9]*", re.ASCII)
_RULE_NAME_RE = re.compile(r"[a-z_][a-z_0-9]*", re.ASCII)
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z_0-9]*", re.ASCII)

# %import common.NUMBER
# %import common.WS -> _WS
# %import common (DIGIT, LETTER)
_IMPORT_RE = re.compile(
    r"^\s*%import\s+(?P<path>\.*[A-Za-z_0-9]+(?:\.[A-Za-z_0-9]+)*)\s*"
    r"(?:->\s*(?P<alias>[A-Za-z_][A-Za-z_0-9]*)|\((?P<names>[^)]*)\))?",
    re.ASCII,
)
# Bare form: first uppercase identifier after the keyword
_IMPORT_FALLBACK_RE = re.compile(r"^\s*%import[^A-Z0-9_]*([A-Z0-9_]+)", re.ASCII)
_DECLARE_RE = re.compile(r"^\s*%declare\b(?P<names>.*)$", re.ASCII)


def is_terminal_name(name: str) -> bool:
    return _TERM_NAME_RE.fullmatch(name) is not None


def is_rule_name(name: str) -> bool:
    return _RULE_NAME_RE.fullmatch(name) is not None


def symbol_kind(name: str) -> SymbolKind:
    """Terminals are upper case; anything else is treated as a rule."""
    return SymbolKind.TERMINAL if is_terminal_name(name) else SymbolKind.RULE


class DeclaredName(NamedTuple):
    name: str
    start: int


@dataclass(frozen=True)
class DefinitionMatch:
    """A line that starts a terminal or rule definition."""

    name: str
    kind: SymbolKind
    name_start: int
    body_start: int  # index just past the ':'


@dataclass(frozen=True)
class DirectiveMatch:
    """A directive line that binds names without a body."""

    directive: str
    names: tuple[DeclaredName, ...]


@dataclass(frozen=True)
class SkippedLine:
    """A directive or comment line that takes no part in reference checks."""

    reason: Literal["directive", "comment"]


@dataclass(frozen=True)
class InvalidHead:
    """Text before ':' that is not a valid symbol name."""

    head: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.head)


LineMatch = DefinitionMatch | DirectiveMatch | SkippedLine | InvalidHead


def classify_line(text: str) -> LineMatch | None:
    """Classify a single line of grammar text."""
    trimmed = text.strip()
    if trimmed.startswith("%"):
        directive = match_directive(text)
        return directive if directive is not None else SkippedLine("directive")
    if trimmed.startswith("//"):
        return SkippedLine("comment")

    definition = match_definition(text)
    if definition is not None:
        return definition

    head = DEF_HEAD_RE.match(text)
    if head:
        return InvalidHead(head.group(1), head.start(1))
    return None


def match_definition(text: str) -> DefinitionMatch | None:
    """Match a definition head. Terminals win over rules."""
    for pattern, kind in ((TERM_DEF_RE, SymbolKind.TERMINAL), (RULE_DEF_RE, SymbolKind.RULE)):
        m = pattern.match(text)
        if m:
            return DefinitionMatch(
                name=m.group(1),
                kind=kind,
                name_start=m.start(1),
                body_start=m.end(),
            )
    return None


def match_directive(text: str) -> DirectiveMatch | None:
    """Match a name-binding directive (``%import`` or ``%declare``)."""
    m = _DECLARE_RE.match(text)
    if m:
        declared = _names_in(m.group("names"), m.start("names"))
        return DirectiveMatch("declare", declared) if declared else None

    m = _IMPORT_RE.match(text)
    if m:
        names: tuple[DeclaredName, ...] = ()
        if m.group("names") is not None:
            names = _names_in(m.group("names"), m.start("names"))
        elif m.group("alias"):
            names = (DeclaredName(m.group("alias"), m.start("alias")),)
        elif "." in m.group("path").lstrip("."):
            last = m.group("path").rsplit(".", 1)[1]
            if _IDENT_RE.fullmatch(last):
                names = (DeclaredName(last, m.end("path") - len(last)),)
        if names:
            return DirectiveMatch("import", names)

    m = _IMPORT_FALLBACK_RE.match(text)
    if m:
        return DirectiveMatch("import", (DeclaredName(m.group(1), m.start(1)),))
    return None


def _names_in(fragment: str, offset: int) -> tuple[DeclaredName, ...]:
    # Trailing comments are not part of the name list
    fragment = fragment.split("//", 1)[0]
    return tuple(DeclaredName(m.group(0), offset + m.start()) for m in _IDENT_RE.finditer(fragment))
