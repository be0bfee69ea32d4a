"""Startup resolution of Slack names to ids."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from ..errors.internal import ResolutionError
from ..logs.logger import logger
from ..slack.models import Directory


class SlackDirectory(Protocol):
    async def users_list(self) -> list[Directory]: ...

    async def channels_list(self) -> list[Directory]: ...

    async def groups_list(self) -> list[Directory]: ...


@dataclass(frozen=True, slots=True)
class RelayTargets:
    """Slack ids the relay routes by, resolved once at startup."""

    user_id: str
    channel_id: str


def _find(entries: Iterable[Directory], name: str) -> Directory | None:
    for entry in entries:
        if entry.name == name:
            return entry
    return None


async def _lookup(
    listing: Callable[[], Awaitable[list[Directory]]], name: str, what: str
) -> Directory:
    found = _find(await listing(), name)
    if found is None:
        raise ResolutionError(f"{what} {name!r} not found", data={"kind": what, "name": name})
    return found


async def resolve_targets(
    slack: SlackDirectory, user_name: str, channel_name: str
) -> RelayTargets:
    """Look up the Slack user id and channel id to relay with.

    A channel name starting with ``#`` is looked up among public channels
    (without the marker); any other name among private groups.

    Raises:
        ResolutionError: If the user or channel does not exist.
        SlackAPIError: If a directory listing call fails.
    """
    user = await _lookup(slack.users_list, user_name, "Slack user")
    if channel_name.startswith("#"):
        channel = await _lookup(slack.channels_list, channel_name[1:], "Slack channel")
        private = False
    else:
        channel = await _lookup(slack.groups_list, channel_name, "Slack group")
        private = True
    logger.log_event(
        "relay",
        "targets_resolved",
        user=user_name,
        user_id=user.id,
        channel_id=channel.id,
        private=private,
    )
    return RelayTargets(user_id=user.id, channel_id=channel.id)
