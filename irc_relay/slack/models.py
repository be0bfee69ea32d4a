"""Plain value types exchanged with the Slack client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Directory:
    """A user, channel or group record: Slack id plus display name."""

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class DisplayIdentity:
    """How a relayed post is attributed in Slack."""

    username: str
    icon_emoji: str | None = None
