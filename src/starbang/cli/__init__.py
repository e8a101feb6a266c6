"""Starbang CLI.

Usage:
    uv run starbang --help
"""

from starbang.cli.app import app

__all__ = ["app"]
