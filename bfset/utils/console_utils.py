"""Console utilities for Rich output used by the CLI."""

from __future__ import annotations

import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def create_console(stderr: bool = False) -> Console:
    """Create a Rich Console bound to the current stdout or stderr."""
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        force_terminal=None,
        legacy_windows=False,
        safe_box=True,
    )


def print_error(
    message: str,
    console: Console | None = None,
    **kwargs: Any,
) -> None:
    """Print an error message with Rich formatting.

    Args:
        message: Message to display
        console: Optional Rich Console instance, defaults to stderr
        **kwargs: Additional arguments for console.print()

    """
    if console is None:
        console = create_console(stderr=True)
    kwargs.setdefault("soft_wrap", True)
    console.print(f"[red]✗[/red] {escape(message)}", **kwargs)


def print_table(
    title: str | None = None,
    show_header: bool = True,
    border_style: str = "blue",
    header_style: str = "bold cyan",
    **kwargs: Any,
) -> Table:
    """Create a Rich table with the project's default styling.

    Returns:
        Rich Table instance; the caller adds rows and prints it.

    """
    return Table(
        title=title,
        show_header=show_header,
        border_style=border_style,
        header_style=header_style,
        **kwargs,
    )
