"""IRC protocol engine.

Contains the message codec, command/numeric table and the asyncio client
that performs registration and answers keep-alive probes transparently.
"""

from .client import IRCClient, RegistrationState, split_address  # noqa: F401
from .message import Message, nick_from_prefix, parse_message  # noqa: F401

__all__ = [
    "IRCClient",
    "RegistrationState",
    "split_address",
    "Message",
    "parse_message",
    "nick_from_prefix",
]
