"""
Convenience entry point for running salonslots directly.

Usage: python -m salonslots [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
