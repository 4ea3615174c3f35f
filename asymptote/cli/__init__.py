"""Command-line interface for Asymptote."""

from asymptote.cli.main import cli

__all__ = ["cli"]
