"""IRC error hierarchy for the protocol engine.

All IRC exceptions derive from `IRCError`, which is itself a `RelayError`,
so callers can catch the whole family or a single failure mode.
"""

from __future__ import annotations

from .internal import RelayError


class IRCError(RelayError):
    """Base exception for all IRC protocol engine errors."""


class DialError(IRCError):
    """Raised when the TCP or TLS connection to the server cannot be opened.

    Example:
        >>> raise DialError("connection refused", data={"server": "irc.example.net:6697"})
    """


class RegistrationError(IRCError):
    """Raised when the server rejects the registration handshake.

    Args:
        reason: The server's human-readable text, or the canonical name of
            the numeric reply when the server sent no text.
    """

    def __init__(self, reason: str, *, command: str | None = None) -> None:
        super().__init__(reason, data={"command": command} if command else None)
        self.reason = reason
        self.command = command


class TooLongError(IRCError):
    """Raised when an outbound message exceeds the 512 byte line limit.

    The message is not sent. The caller may shorten and resend.

    Args:
        message: The encoded line truncated to the sendable maximum.
        n_truncated: Number of bytes that did not fit.
    """

    def __init__(self, message: bytes, n_truncated: int) -> None:
        super().__init__(
            f"message too long: {n_truncated} bytes truncated",
            data={"n_truncated": n_truncated},
        )
        self.message = message
        self.n_truncated = n_truncated


class ReadError(IRCError):
    """Raised when the connection is closed or an inbound line is unusable."""


class ParseError(ReadError):
    """Raised when an inbound line is not a well-formed IRC message."""


__all__ = [
    "IRCError",
    "DialError",
    "RegistrationError",
    "TooLongError",
    "ReadError",
    "ParseError",
]
