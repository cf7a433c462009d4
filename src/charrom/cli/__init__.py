"""Command-line interface for charrom.

This module provides the CLI using Typer with rich output for
terminal previews of character sets.

Key features:
- Block-art previews of ROM files in any layout
- Share token encoding and decoding
- Font and source-listing import
- Share URL size estimates
"""

from charrom.cli.app import cli, main

__all__ = ["cli", "main"]
