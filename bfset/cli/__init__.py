"""Command line interface for inspecting and combining bitfields."""

from bfset.cli.main import cli, main

__all__ = [
    "cli",
    "main",
]
