"""
Grammar checking commands for larklint CLI.

Commands:
- check: Report unused / undefined symbols in grammar files
- outline: List the symbols a grammar defines
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from larklint.cli.utils import configure_logging
from larklint.core.analysis import document_outline, validate
from larklint.core.config import LintConfig, resolve_config
from larklint.core.errors import LarkLintError
from larklint.core.fileset import discover_grammar_files, read_grammar
from larklint.core.ir import Diagnostic, Severity

console = Console(soft_wrap=True)

_STYLES = {Severity.ERROR: "bold red", Severity.WARNING: "yellow"}


# =============================================================================
# Helper Functions
# =============================================================================


def _collect_files(paths: list[Path] | None, config: LintConfig) -> list[Path]:
    """Expand CLI arguments (files or directories) into grammar files."""
    if not paths:
        return discover_grammar_files(config)
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(discover_grammar_files(dataclasses.replace(config, paths=[str(path.resolve())])))
        else:
            files.append(path)
    return files


def _display_path(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _print_human_diagnostics(results: dict[Path, list[Diagnostic]]) -> None:
    """Print diagnostics in human-readable format."""
    errors = sum(1 for diags in results.values() for d in diags if d.is_error)
    warnings = sum(1 for diags in results.values() for d in diags if not d.is_error)

    for path, diags in results.items():
        if not diags:
            continue
        console.print(f"[bold]{escape(_display_path(path))}[/bold]")
        for d in sorted(diags, key=lambda d: (d.range.line, d.range.start)):
            style = _STYLES[d.severity]
            console.print(
                f"  {d.range.line + 1}:{d.range.start + 1}  "
                f"[{style}]{d.severity.value}[/{style}]  {escape(d.message)}  "
                f"[dim]{d.code.value}[/dim]"
            )

    if not errors and not warnings:
        console.print(f"OK: no problems found in {len(results)} file(s).")
    else:
        console.print(f"\nFound {errors} error(s) and {warnings} warning(s) in {len(results)} file(s).")


def _print_vscode_diagnostics(results: dict[Path, list[Diagnostic]]) -> None:
    """
    Print diagnostics in VS Code format: file:line:col: severity: message
    """
    for path, diags in results.items():
        for d in sorted(diags, key=lambda d: (d.range.line, d.range.start)):
            typer.echo(
                f"{_display_path(path)}:{d.range.line + 1}:{d.range.start + 1}: "
                f"{d.severity.value}: {d.message} [{d.code.value}]"
            )


def _print_json_diagnostics(results: dict[Path, list[Diagnostic]]) -> None:
    payload = [
        {
            "file": _display_path(path),
            "line": d.range.line + 1,
            "column": d.range.start + 1,
            "end_column": d.range.end + 1,
            "severity": d.severity.value,
            "code": d.code.value,
            "message": d.message,
        }
        for path, diags in results.items()
        for d in sorted(diags, key=lambda d: (d.range.line, d.range.start))
    ]
    typer.echo(json.dumps(payload, indent=2))


# =============================================================================
# Commands
# =============================================================================


def check_command(
    paths: list[Path] = typer.Argument(None, help="Grammar files or directories (default: from config)"),
    config_file: Path = typer.Option(None, "--config", "-c", help="Path to larklint.toml or pyproject.toml"),
    format: str = typer.Option("human", "--format", "-f", help="Output format: 'human', 'vscode' or 'json'"),
    disable: list[str] = typer.Option(None, "--disable", "-d", help="Diagnostic code to suppress (repeatable)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Check Lark grammars for unused and undefined symbols.

    Exits with code 1 when any error is reported.
    """
    configure_logging(verbose)
    if format not in ("human", "vscode", "json"):
        typer.echo(f"Error: unknown format '{format}'", err=True)
        raise typer.Exit(code=2)

    start = paths[0] if paths else Path.cwd()
    try:
        config = resolve_config(start, config_file)
        if disable:
            config = config.with_disabled(disable)

        results: dict[Path, list[Diagnostic]] = {}
        for path in _collect_files(paths, config):
            results[path] = validate(read_grammar(path), config)
    except LarkLintError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if format == "vscode":
        _print_vscode_diagnostics(results)
    elif format == "json":
        _print_json_diagnostics(results)
    else:
        _print_human_diagnostics(results)

    if any(d.is_error for diags in results.values() for d in diags):
        raise typer.Exit(code=1)


def outline_command(
    path: Path = typer.Argument(..., help="Grammar file"),
) -> None:
    """
    Show the terminals and rules a grammar defines or imports.
    """
    try:
        source = read_grammar(path)
    except LarkLintError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    table = Table(title=_display_path(path))
    table.add_column("Line", justify="right")
    table.add_column("Kind")
    table.add_column("Name", style="bold")
    for entry in document_outline(source):
        table.add_row(str(entry.line + 1), entry.kind.value, entry.name)
    console.print(table)
