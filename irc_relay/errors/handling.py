from __future__ import annotations

import asyncio

import aiohttp
from websockets.exceptions import WebSocketException

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    RelayError,
    ResolutionError,
    SlackAPIError,
    SlackError,
)
from .irc import IRCError, RegistrationError, TooLongError


def _classify(error: BaseException) -> str:
    if isinstance(error, TooLongError):
        return "irc_length"
    if isinstance(error, RegistrationError):
        return "irc_registration"
    if isinstance(error, IRCError):
        return "irc"
    if isinstance(error, SlackAPIError):
        return "slack_api"
    if isinstance(error, SlackError):
        return "slack"
    if isinstance(error, ResolutionError):
        return "resolution"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, RelayError):
        return "internal"
    if isinstance(
        error,
        TimeoutError
        | asyncio.TimeoutError
        | OSError
        | aiohttp.ClientError
        | WebSocketException,
    ):
        return "network"
    return "unknown"


def log_error(
    message: str, error: BaseException, context: dict[str, object] | None = None
) -> None:
    """Logs an error message with the associated exception details.

    The error is categorized from its type and forwarded to the structured
    error logger, which also records it for the exit summary.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict[str, object] = {}
    if isinstance(error, RelayError) and error.data:
        merged.update(error.data)
    if context:
        merged.update(context)
    log_structured_error(
        error_type=_classify(error),
        message=f"{message}: {error}",
        exception=error,
        context=merged or None,
    )


__all__ = ["log_error"]
