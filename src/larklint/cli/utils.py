"""
larklint CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform
from pathlib import Path

import typer

from larklint._version import get_version


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        # Get installation location
        try:
            import larklint

            install_location = Path(larklint.__file__).parent
        except Exception:
            install_location = Path.cwd()

        # Check LSP server availability
        lsp_available = False
        try:
            # MUST set logging level BEFORE importing pygls/larklint.lsp.server
            logging.getLogger("pygls.feature_manager").setLevel(logging.ERROR)
            logging.getLogger("pygls").setLevel(logging.ERROR)

            import larklint.lsp.server  # noqa: F401 - intentional import for availability check

            lsp_available = True
        except ImportError:
            pass

        typer.echo(f"larklint version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo(f"  Location:      {install_location}")
        typer.echo("")
        typer.echo("Features:")
        if lsp_available:
            lsp_status = "✓ Available"
        else:
            lsp_status = "✗ Not available (install with: pip install larklint)"
        typer.echo(f"  LSP Server:    {lsp_status}")

        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route larklint debug logs to stderr when --verbose is given."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("larklint").setLevel(logging.DEBUG if verbose else logging.WARNING)
