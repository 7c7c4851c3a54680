"""Tests for line classification."""

from __future__ import annotations

import pytest

from larklint.core.classifier import (
    DefinitionMatch,
    DirectiveMatch,
    InvalidHead,
    SkippedLine,
    classify_line,
    is_rule_name,
    is_terminal_name,
    symbol_kind,
)
from larklint.core.ir import SymbolKind


class TestDefinitions:
    """Definition heads: NAME ':' with optional markers and priority."""

    def test_terminal_definition(self) -> None:
        match = classify_line('NUMBER: /[0-9]+/')
        assert isinstance(match, DefinitionMatch)
        assert match.name == "NUMBER"
        assert match.kind == SymbolKind.TERMINAL
        assert match.name_start == 0
        assert match.body_start == 7

    def test_rule_definition(self) -> None:
        match = classify_line("start: foo")
        assert isinstance(match, DefinitionMatch)
        assert match.name == "start"
        assert match.kind == SymbolKind.RULE
        assert match.body_start == 6

    def test_inline_marker_and_priority(self) -> None:
        match = classify_line("  ?expr.2 : term")
        assert isinstance(match, DefinitionMatch)
        assert match.name == "expr"
        assert match.name_start == 3
        assert match.body_start == 11

    def test_keep_all_tokens_marker(self) -> None:
        match = classify_line('!op: "+" | "-"')
        assert isinstance(match, DefinitionMatch)
        assert match.name == "op"

    def test_underscore_terminal(self) -> None:
        match = classify_line("_NL: /\\n/")
        assert isinstance(match, DefinitionMatch)
        assert match.kind == SymbolKind.TERMINAL

    def test_underscore_rule(self) -> None:
        match = classify_line("_item: foo")
        assert isinstance(match, DefinitionMatch)
        assert match.kind == SymbolKind.RULE

    def test_body_start_is_after_first_colon(self) -> None:
        match = classify_line('COLON: ":"')
        assert isinstance(match, DefinitionMatch)
        assert match.body_start == 6


class TestDirectives:
    """%import / %declare bind names; other directives are skipped."""

    def test_dotted_import(self) -> None:
        match = classify_line("%import common.NUMBER")
        assert isinstance(match, DirectiveMatch)
        assert [n.name for n in match.names] == ["NUMBER"]
        assert match.names[0].start == 15

    def test_aliased_import_binds_alias(self) -> None:
        match = classify_line("%import common.CNAME -> NAME")
        assert isinstance(match, DirectiveMatch)
        assert [n.name for n in match.names] == ["NAME"]
        assert match.names[0].start == 24

    def test_import_name_list(self) -> None:
        match = classify_line("%import common (DIGIT, LETTER)")
        assert isinstance(match, DirectiveMatch)
        assert [n.name for n in match.names] == ["DIGIT", "LETTER"]

    def test_import_rule(self) -> None:
        match = classify_line("%import .shared.expr")
        assert isinstance(match, DirectiveMatch)
        assert [n.name for n in match.names] == ["expr"]
        assert symbol_kind("expr") == SymbolKind.RULE

    def test_declare(self) -> None:
        match = classify_line("%declare _INDENT _DEDENT")
        assert isinstance(match, DirectiveMatch)
        assert match.directive == "declare"
        assert [n.name for n in match.names] == ["_INDENT", "_DEDENT"]

    def test_import_without_names_is_skipped(self) -> None:
        assert classify_line("%import .lib") == SkippedLine("directive")

    def test_ignore_is_skipped(self) -> None:
        assert classify_line("%ignore WS") == SkippedLine("directive")

    def test_comment_is_skipped(self) -> None:
        assert classify_line("  // FOO: bar") == SkippedLine("comment")


class TestInvalidHeads:
    """Text before ':' that is not an identifier."""

    def test_leading_digit(self) -> None:
        match = classify_line('123abc: "x"')
        assert isinstance(match, InvalidHead)
        assert match.head == "123abc"
        assert match.start == 0
        assert match.end == 6

    def test_mixed_case(self) -> None:
        match = classify_line("  Foo: bar")
        assert isinstance(match, InvalidHead)
        assert match.head == "Foo"
        assert match.start == 2


class TestPlainLines:
    """Lines without a definition head."""

    @pytest.mark.parametrize(
        "text",
        ["", "    | foo bar", '    | "a" : b', "foo bar: baz"],
    )
    def test_plain(self, text: str) -> None:
        assert classify_line(text) is None


class TestNamePredicates:
    def test_terminal_and_rule_names(self) -> None:
        assert is_terminal_name("WS_INLINE")
        assert not is_terminal_name("ws")
        assert is_rule_name("expr_2")
        assert not is_rule_name("Expr")
        assert symbol_kind("NAME") == SymbolKind.TERMINAL
