"""Protocol-neutral event passed between the two sides of the relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RelayEvent:
    """A speaker/channel/text triple.

    ``speaker`` is "" for system narration (joins, parts, renames). The
    channel is the source side's channel: an IRC channel name or a Slack
    channel id.
    """

    speaker: str
    channel: str
    text: str

    @property
    def is_system(self) -> bool:
        return not self.speaker
