"""
CLI module for Armory.

Provides the command-line interface using Click.
"""

from armory.cli.main import cli, main

__all__ = ["main", "cli"]
