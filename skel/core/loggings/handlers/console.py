"""Console logging handler."""

import sys
import copy
import logging
from typing import Literal

from rich.logging import RichHandler
from rich.console import Console
from rich.highlighter import NullHighlighter

from ..config import HandlerConfig
from ..theme import LOGGING_THEME


class ConsoleHandlerConfig(HandlerConfig):
    """Console handler configuration.

    Args:
        use_rich: Render through Rich with the registry theme (default: True).
            When False a plain StreamHandler on stderr is used and
            `format_str` applies.
    """

    type: Literal["console"] = "console"
    use_rich: bool = True


class NamedRichHandler(RichHandler):
    """RichHandler that prefixes each message with the logger name."""

    LEVEL_STYLES = {
        "DEBUG": "#8b949e",
        "INFO": "white",
        "WARNING": "#d29922",
        "ERROR": "#f85149",
        "CRITICAL": "bold reverse #b81c1c",
    }

    def emit(self, record: logging.LogRecord) -> None:
        style = self.LEVEL_STYLES.get(record.levelname, "muted")

        # Copy so other handlers see the original message
        record = copy.copy(record)
        record.msg = f"[{style}]\\[{record.name}][/{style}] {record.msg}"
        super().emit(record)


def create_console_handler(config: ConsoleHandlerConfig) -> logging.Handler:
    """Create a console handler from config."""
    level = getattr(logging, config.level.upper())

    if config.use_rich:
        console = Console(theme=LOGGING_THEME, highlight=False, stderr=True)
        handler = NamedRichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            omit_repeated_times=False,
            highlighter=NullHighlighter(),
        )
        handler.setLevel(level)
        return handler

    format_str = config.format_str or '[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s'
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_str, datefmt='%H:%M:%S'))
    return handler
