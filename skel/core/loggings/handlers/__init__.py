"""Built-in logging handlers.

Each module defines a HandlerConfig subclass and a factory; both are
registered by `skel.core.loggings` on import.
"""

from .console import ConsoleHandlerConfig, NamedRichHandler, create_console_handler
from .file import FileHandlerConfig, create_file_handler

__all__ = [
    "ConsoleHandlerConfig",
    "NamedRichHandler",
    "create_console_handler",
    "FileHandlerConfig",
    "create_file_handler",
]
