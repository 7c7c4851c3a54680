"""
Entry point for the larklint CLI.

Usage:
    python -m larklint check grammar.lark
"""

from larklint.cli import main

if __name__ == "__main__":
    main()
