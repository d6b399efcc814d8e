"""Entry point for running pagestack as a module.

Usage:
    python -m pagestack [command] [options]

Example:
    python -m pagestack build --output www
    python -m pagestack render pages/index.md
"""

from pagestack.cli import app

if __name__ == "__main__":
    app()
