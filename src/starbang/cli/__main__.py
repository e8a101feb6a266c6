"""Entry point for running the CLI as a module.

Usage:
    python -m starbang.cli
"""

from starbang.cli.app import app

if __name__ == "__main__":
    app()
