"""
larklint Language Server Protocol implementation.

Provides IDE features for Lark grammars:
- Diagnostics (unused / undefined symbols, invalid definition names)
- Document symbols
"""

from .server import start_server

__all__ = ["start_server"]
