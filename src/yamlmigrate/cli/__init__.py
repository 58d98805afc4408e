"""
CLI module for yamlmigrate.

Provides the command-line interface using Click.
"""

from yamlmigrate.cli.main import cli, main

__all__ = ["main", "cli"]
