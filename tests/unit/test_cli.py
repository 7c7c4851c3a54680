"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from larklint.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


def test_check_clean_file(cli_runner: CliRunner, grammar_dir: Path):
    """A clean grammar exits 0 and says so."""
    result = cli_runner.invoke(app, ["check", str(grammar_dir / "calc.lark")])
    assert result.exit_code == 0
    assert "OK: no problems found" in result.output


def test_check_reports_errors(cli_runner: CliRunner, grammar_dir: Path):
    """Undefined symbols make the command fail."""
    result = cli_runner.invoke(app, ["check", str(grammar_dir / "broken.lark")])
    assert result.exit_code == 1
    assert "Undefined rule 'baz'" in result.output
    assert "Unused grammar symbol 'BAR'" in result.output


def test_check_directory(cli_runner: CliRunner, grammar_dir: Path):
    """Directories are searched for *.lark files only."""
    result = cli_runner.invoke(app, ["check", "--format", "json", str(grammar_dir)])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert {entry["code"] for entry in payload} == {"undefined-rule", "unused-symbol"}
    assert all(entry["file"].endswith("broken.lark") for entry in payload)


def test_check_json_positions(cli_runner: CliRunner, grammar_dir: Path):
    """JSON output uses 1-based lines and columns."""
    result = cli_runner.invoke(app, ["check", "-f", "json", str(grammar_dir / "broken.lark")])
    payload = json.loads(result.stdout)
    undefined = next(e for e in payload if e["code"] == "undefined-rule")
    assert undefined["line"] == 1
    assert undefined["column"] == 8
    assert undefined["end_column"] == 11
    assert undefined["severity"] == "error"


def test_check_vscode_format(cli_runner: CliRunner, grammar_dir: Path):
    result = cli_runner.invoke(app, ["check", "-f", "vscode", str(grammar_dir / "broken.lark")])
    assert result.exit_code == 1
    assert "broken.lark:1:8: error: Undefined rule 'baz' [undefined-rule]" in result.output
    assert "broken.lark:2:1: warning: Unused grammar symbol 'BAR' [unused-symbol]" in result.output


def test_check_disable_errors(cli_runner: CliRunner, grammar_dir: Path):
    """Disabling the only error code makes the check pass."""
    result = cli_runner.invoke(
        app,
        ["check", "--disable", "undefined-rule", str(grammar_dir / "broken.lark")],
    )
    assert result.exit_code == 0
    assert "Unused grammar symbol 'BAR'" in result.output
    assert "Undefined rule" not in result.output


def test_check_unknown_disable_code(cli_runner: CliRunner, grammar_dir: Path):
    result = cli_runner.invoke(app, ["check", "--disable", "bogus", str(grammar_dir / "calc.lark")])
    assert result.exit_code == 2
    assert "Unknown diagnostic code 'bogus'" in result.output


def test_check_uses_config(cli_runner: CliRunner, grammar_dir: Path):
    """Config file settings apply to the files it governs."""
    config = grammar_dir / "larklint.toml"
    config.write_text('disable = ["unused-symbol", "undefined-rule"]\n')
    result = cli_runner.invoke(app, ["check", "--config", str(config), str(grammar_dir / "broken.lark")])
    assert result.exit_code == 0
    assert "OK: no problems found" in result.output


def test_check_missing_file(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["check", str(tmp_path / "missing.lark")])
    assert result.exit_code == 2
    assert "Cannot read grammar" in result.output


def test_outline(cli_runner: CliRunner, grammar_dir: Path):
    result = cli_runner.invoke(app, ["outline", str(grammar_dir / "calc.lark")])
    assert result.exit_code == 0
    for name in ("start", "sum", "NUMBER", "WS_INLINE"):
        assert name in result.output


def test_lsp_check(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["lsp", "check"])
    assert result.exit_code == 0
    assert "All LSP dependencies installed." in result.output


def test_lsp_run_without_transport(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["lsp", "run", "--no-stdio"])
    assert result.exit_code == 2
    assert "--no-stdio requires --tcp" in result.output
