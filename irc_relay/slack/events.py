"""Typed model of Slack RTM events.

RTM frames are loosely typed JSON objects keyed by ``type``. `parse_event`
turns each one into exactly one variant of `SlackEvent`; anything the relay
does not model becomes `UnrecognizedEvent` carrying the raw payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

MESSAGE = "message"

# Event types that are expected on every RTM session and never relayed.
NOISE_TYPES = frozenset(
    {"presence_change", "user_typing", "reconnect_url", "hello", "pong"}
)


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """A ``message`` event.

    ``subtype`` and ``reply_to`` are None when the payload does not carry
    them; their presence marks edits, bot posts, joins, acks and so on.
    """

    channel: str
    user: str
    text: str
    subtype: str | None = None
    reply_to: str | None = None

    @property
    def is_plain(self) -> bool:
        return self.subtype is None and self.reply_to is None


@dataclass(frozen=True, slots=True)
class NoiseEvent:
    type: str


@dataclass(frozen=True, slots=True)
class UnrecognizedEvent:
    type: str
    raw: dict[str, Any] = field(default_factory=dict)


SlackEvent = MessageEvent | NoiseEvent | UnrecognizedEvent


def parse_event(payload: Mapping[str, Any]) -> SlackEvent:
    """Map one decoded RTM payload onto a `SlackEvent` variant."""
    event_type = payload.get("type")
    if not isinstance(event_type, str):
        return UnrecognizedEvent(type="", raw=dict(payload))
    if event_type == MESSAGE:
        return MessageEvent(
            channel=_text(payload, "channel"),
            user=_text(payload, "user"),
            text=_text(payload, "text"),
            subtype=_optional(payload, "subtype"),
            reply_to=_optional(payload, "reply_to"),
        )
    if event_type in NOISE_TYPES:
        return NoiseEvent(type=event_type)
    return UnrecognizedEvent(type=event_type, raw=dict(payload))


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    return value if isinstance(value, str) else ""


def _optional(payload: Mapping[str, Any], key: str) -> str | None:
    if key not in payload:
        return None
    value = payload[key]
    return "" if value is None else str(value)
