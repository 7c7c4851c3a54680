"""Shared pytest fixtures for larklint tests."""

from pathlib import Path

import pytest

from larklint.core.source import LinesTextSource

CALC_GRAMMAR = """\
?start: sum

?sum: product
    | sum "+" product   -> add
    | sum "-" product   -> sub

?product: atom
    | product "*" atom  -> mul

?atom: NUMBER           -> number
     | "-" atom         -> neg
     | NAME             -> var
     | "(" sum ")"

%import common.CNAME -> NAME
%import common.NUMBER
%import common.WS_INLINE

%ignore WS_INLINE
"""


@pytest.fixture
def calc_grammar() -> str:
    """Return a small, clean calculator grammar."""
    return CALC_GRAMMAR


@pytest.fixture
def source():
    """Return a factory building a TextSource from grammar text."""

    def _make(text: str) -> LinesTextSource:
        return LinesTextSource.from_text(text)

    return _make


@pytest.fixture
def grammar_dir(tmp_path: Path) -> Path:
    """Create a directory with one clean and one broken grammar."""
    grammars = tmp_path / "grammars"
    grammars.mkdir()
    (grammars / "calc.lark").write_text(CALC_GRAMMAR)
    (grammars / "broken.lark").write_text('start: baz\nBAR: "b"\n')
    (grammars / "notes.txt").write_text("start: nothing\n")
    return grammars
