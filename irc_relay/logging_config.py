r"""
Logging configuration module for the IRC/Slack relay.

Provides a clean, configurable logging setup using colorlog library with
structured error logging and aggregation capabilities.
"""

import atexit
import logging
import os
import sys
from collections import Counter
from typing import Any

import colorlog


class ErrorAggregator:
    """Counts logged errors per category for the shutdown summary."""

    def __init__(self):
        self.counts: Counter[str] = Counter()
        self.last: dict[str, dict[str, Any]] = {}

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        self.counts[error_type] += 1
        self.last[error_type] = {"message": message, "context": context or {}}

    def get_error_summary(self) -> dict[str, Any]:
        return {
            error_type: {"total_count": count, "last_occurrence": self.last[error_type]}
            for error_type, count in self.counts.items()
        }

    def log_summary_report(self) -> None:
        """Log a summary report of error patterns."""
        if not self.counts:
            logging.info("No errors recorded in current session")
            return

        logging.warning("🚨 ERROR SUMMARY REPORT")
        for error_type, count in self.counts.most_common():
            logging.warning(f"  {error_type}: {count} total")
            logging.warning(f"    Last: {self.last[error_type]['message']}")


error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error as one structured line and count it for the summary.

    Args:
        error_type: Category of the error (e.g., 'network', 'irc', 'slack_api')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_aggregator.record_error(error_type, message, context)


_LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}

# Third-party loggers that are too chatty at DEBUG
_QUIET_LOGGERS = {
    "websockets": logging.INFO,
    "aiohttp": logging.INFO,
    "asyncio": logging.WARNING,
}


class LoggerConfigurator:
    """Installs a colorlog handler on stderr for the relay process.

    The level is DEBUG when the ``DEBUG`` env var is 'true', '1' or 'yes',
    INFO otherwise.
    """

    def __init__(self):
        self._summary_registered = False

    def configure(self):
        debug_env = os.environ.get("DEBUG", "").lower()
        log_level = logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

        formatter = colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors=_LOG_COLORS,
            secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
            reset=True,
        )
        handler = logging.StreamHandler(sys.stderr)
        logging.basicConfig(level=log_level, handlers=[handler])

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        for h in root_logger.handlers:
            h.setFormatter(formatter)
        for name, level in _QUIET_LOGGERS.items():
            logging.getLogger(name).setLevel(level)

        if not self._summary_registered:
            atexit.register(self._log_final_error_summary)
            self._summary_registered = True

    def _log_final_error_summary(self):
        logging.info("📊 Final error summary before shutdown:")
        error_aggregator.log_summary_report()
