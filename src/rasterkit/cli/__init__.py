"""Command-line interface for rasterkit.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- One command per operation (line, circle, clip, fill)
- Optional derivation traces and character-grid previews
- Detailed error reporting
"""

from rasterkit.cli.app import cli, main

__all__ = ["cli", "main"]
