"""
Convenience entry point for running hearingslots directly.

Usage: python -m hearingslots [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
