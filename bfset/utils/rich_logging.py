"""Rich logging integration for bfset.

Provides the Rich console handler and the file formatter used by
:func:`bfset.utils.logging_config.setup_logging`.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Rich markup tags like [red], [bold], [/red]
_MARKUP_PATTERN = re.compile(r"\[/?[^\]]+\]")

# Hex payloads in messages, e.g. "payload=aa00"
_PAYLOAD_PATTERN = re.compile(r"\b(payload|bitfield)=([0-9a-f]+)\b")


class CorrelationRichHandler(RichHandler):
    """RichHandler with correlation ID support and payload highlighting.

    Method names are colored pink and hex payloads bright cyan.
    """

    def __init__(
        self,
        *args: Any,
        console: Console | None = None,
        show_colors: bool = True,
        **kwargs: Any,
    ) -> None:
        """Initialize RichHandler with correlation ID filter.

        Args:
            *args: Positional arguments for RichHandler
            console: Optional Rich Console instance
            show_colors: Whether to colorize method names and payloads
            **kwargs: Keyword arguments for RichHandler

        """
        if console is None:
            console = Console(file=sys.stderr, markup=True)

        self.show_colors = show_colors
        kwargs.setdefault("markup", True)
        super().__init__(*args, console=console, **kwargs)

    def _colorize(self, message: str, func_name: str | None) -> str:
        message = _PAYLOAD_PATTERN.sub(
            r"\1=[bright_cyan]\2[/bright_cyan]", message
        )
        if func_name:
            return f"[#ff69b4]{func_name}[/#ff69b4] {message}"
        return message

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record with correlation ID and colorized message."""
        try:
            if not hasattr(record, "correlation_id"):
                from bfset.utils.logging_config import correlation_id

                record.correlation_id = correlation_id.get() or "no-correlation-id"

            if self.show_colors:
                # Other handlers share the record, so colorize a copy
                record = logging.makeLogRecord(record.__dict__)
                text = record.getMessage().replace("[", r"\[")
                record.msg = self._colorize(text, getattr(record, "funcName", None))
                record.args = ()

            super().emit(record)
        except Exception:
            self.handleError(record)


def strip_rich_markup(text: str) -> str:
    """Strip Rich markup from text for file logging."""
    return _MARKUP_PATTERN.sub("", text)


class FileFormatter(logging.Formatter):
    """Formatter for file output that strips Rich markup."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, stripping Rich markup for file output."""
        return strip_rich_markup(super().format(record))


def create_rich_handler(
    console: Console | None = None,
    level: int | str = logging.INFO,
    show_path: bool = False,
    rich_tracebacks: bool = True,
    show_colors: bool = True,
) -> logging.Handler:
    """Create a RichHandler with correlation ID support.

    Args:
        console: Optional Rich Console instance
        level: Log level
        show_path: Whether to show file paths in log output
        rich_tracebacks: Whether to use rich tracebacks
        show_colors: Whether to colorize method names and payloads

    Returns:
        Configured RichHandler instance

    """
    return CorrelationRichHandler(
        console=console,
        level=level,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
        show_colors=show_colors,
    )
