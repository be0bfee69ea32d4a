"""Slack client: Web API over aiohttp and the RTM event stream over websockets."""

from __future__ import annotations

from .api import SlackAPI
from .client import SlackClient
from .events import MessageEvent, NoiseEvent, SlackEvent, UnrecognizedEvent, parse_event
from .models import Directory, DisplayIdentity
from .rtm import RTMStream

__all__ = [
    "SlackAPI",
    "SlackClient",
    "RTMStream",
    "Directory",
    "DisplayIdentity",
    "SlackEvent",
    "MessageEvent",
    "NoiseEvent",
    "UnrecognizedEvent",
    "parse_event",
]
