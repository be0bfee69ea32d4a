"""Relay error taxonomy and structured error logging."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigError,
    EventStreamError,
    RelayError,
    ResolutionError,
    SlackAPIError,
    SlackError,
)
from .irc import (  # noqa: F401
    DialError,
    IRCError,
    ParseError,
    ReadError,
    RegistrationError,
    TooLongError,
)

__all__ = [
    "RelayError",
    "ConfigError",
    "ResolutionError",
    "SlackError",
    "SlackAPIError",
    "EventStreamError",
    "IRCError",
    "DialError",
    "RegistrationError",
    "TooLongError",
    "ReadError",
    "ParseError",
    "log_error",
]
