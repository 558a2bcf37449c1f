"""Failure reporter that writes to the package logger."""

from typing import List, Tuple

from skel.core.loggings import LOGGER, format_log_data

from .interfaces import FailureReporter


class LoggingFailureReporter(FailureReporter):
    """Logs reported failures at ERROR and keeps them for inspection."""

    def __init__(self):
        self.failures: List[Tuple[str, str, str]] = []

    def report_failure(self, stage: str, context: str, cause: str) -> None:
        self.failures.append((stage, context, cause))
        LOGGER.error(
            "%s: %s: [error]%s[/error]",
            format_log_data(stage), format_log_data(context), format_log_data(cause),
        )
