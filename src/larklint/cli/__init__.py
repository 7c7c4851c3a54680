"""
larklint CLI Package.

- check.py: check / outline commands
- lsp.py: Language server commands
- utils.py: Shared utilities
"""

import typer

from larklint.cli.check import check_command, outline_command
from larklint.cli.lsp import lsp_app
from larklint.cli.utils import version_callback

app = typer.Typer(
    help="Name-binding checks for Lark grammars.",
    no_args_is_help=True,
)


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """larklint command line."""


app.command("check")(check_command)
app.command("outline")(outline_command)
app.add_typer(lsp_app, name="lsp")


def main() -> None:
    app()


__all__ = ["app", "main", "lsp_app"]
