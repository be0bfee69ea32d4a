"""Centralized relay error hierarchy.

These exceptions give semantic categories to the failures the relay can
observe. Raw socket / aiohttp / websockets errors are wrapped into these at
the component boundary so callers only deal with one taxonomy.

Classes:
  RelayError        – Base for all relay errors (carries structured data).
  ConfigError       – Startup configuration failed validation.
  ResolutionError   – A Slack directory lookup found no match at startup.
  SlackError        – Base for Slack-side failures.
  SlackAPIError     – Web API returned ok=false or the request failed.
  EventStreamError  – RTM event stream closed or delivered garbage.

IRC-specific errors live in `errors.irc`.
"""

from __future__ import annotations

from collections.abc import Mapping


class RelayError(Exception):
    """Base class for all relay errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigError(RelayError):
    """Raised when startup configuration is missing or invalid."""


class ResolutionError(RelayError):
    """Raised when a startup directory lookup fails.

    Without the resolved Slack ids no event can be routed, so this is fatal
    for the process; the caller decides how to exit.
    """


class SlackError(RelayError):
    """Base class for Slack-side failures."""


class SlackAPIError(SlackError):
    """Raised when a Slack Web API call fails.

    Args:
        error: Slack's error code (e.g. ``channel_not_found``) or a
            transport description.
        method: The Web API method that was called.
    """

    def __init__(self, error: str, *, method: str) -> None:
        super().__init__(
            f"Slack API {method} failed: {error}",
            data={"error": error, "method": method},
        )
        self.error = error
        self.method = method


class EventStreamError(SlackError):
    """Raised when the RTM event stream is closed or unreadable."""


__all__ = [
    "RelayError",
    "ConfigError",
    "ResolutionError",
    "SlackError",
    "SlackAPIError",
    "EventStreamError",
]
