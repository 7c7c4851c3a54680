"""
Error types for larklint configuration and file handling.

Grammar text itself never raises: problems in a grammar are reported as
diagnostics. These exceptions cover the host layer around the engine.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class LarkLintError(Exception):
    """Base exception for all larklint errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ConfigError(LarkLintError):
    """
    Raised when configuration cannot be loaded.

    Examples:
    - Malformed TOML
    - Wrong value types (e.g. ``exclude = "x"`` instead of a list)
    - Unknown diagnostic codes in ``disable``
    """

    pass


class SourceError(LarkLintError):
    """
    Raised when a grammar file cannot be read.

    Examples:
    - Missing file
    - Undecodable bytes
    """

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        file: Path to the file the error refers to
        line: Line number (1-indexed), if known
        column: Column number (1-indexed), if known
    """

    file: Path
    line: int | None = None
    column: int | None = None

    def format(self) -> str:
        """
        Format as ``file``, ``file:line`` or ``file:line:column``.
        """
        location = str(self.file)
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        return location


def make_config_error(message: str, file: Path, line: int | None = None) -> ConfigError:
    """Helper to create a ConfigError pointing at a config file."""
    return ConfigError(message, ErrorContext(file=file, line=line))
