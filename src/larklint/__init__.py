"""
larklint - name-binding checks for Lark grammars.

Finds unused and undefined terminals and rules in ``.lark`` files, from the
command line or through a language server.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.analysis import document_outline, validate
from .core.errors import ConfigError, LarkLintError, SourceError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "validate",
    "document_outline",
    "LarkLintError",
    "ConfigError",
    "SourceError",
]
