"""Display identity for posts relayed from IRC into Slack."""

from __future__ import annotations

import zlib
from collections.abc import Sequence

from ..constants import SLACK_SPEAKER_ICONS, SLACK_SYSTEM_ICON
from ..slack.models import DisplayIdentity
from .events import RelayEvent


def speaker_icon(speaker: str, pool: Sequence[str] = SLACK_SPEAKER_ICONS) -> str:
    """Pick an icon for ``speaker`` from ``pool``.

    Depends only on the nick's bytes (CRC32), so a nick keeps its icon
    across restarts.
    """
    return pool[zlib.crc32(speaker.encode("utf-8")) % len(pool)]


def display_identity(
    event: RelayEvent, server_host: str, *, icons: bool = False
) -> DisplayIdentity:
    """Return how ``event`` is attributed when posted to Slack.

    System events (empty speaker) are shown under the IRC server's host
    name. With ``icons`` enabled, speakers get a per-nick icon and system
    events the system icon.
    """
    if event.is_system:
        return DisplayIdentity(
            username=server_host, icon_emoji=SLACK_SYSTEM_ICON if icons else None
        )
    return DisplayIdentity(
        username=event.speaker,
        icon_emoji=speaker_icon(event.speaker) if icons else None,
    )
