"""Command-line interface for boardmirror."""

from boardmirror.cli.app import main
from boardmirror.cli.parser import build_parser

__all__ = ["build_parser", "main"]
