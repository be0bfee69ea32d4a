"""Known-speaker tracking for presence narration."""

from __future__ import annotations

from collections.abc import Iterator


class KnownSpeakers:
    """IRC nicks observed acting in the tracked channel.

    Join/part/quit/rename notices are narrated only for nicks in this set,
    which keeps lurkers and netsplit floods out of Slack. Entries are never
    removed; the set lives as long as the process.
    """

    def __init__(self) -> None:
        self._nicks: set[str] = set()

    def add(self, nick: str) -> None:
        if nick:
            self._nicks.add(nick)

    def __contains__(self, nick: object) -> bool:
        return nick in self._nicks

    def __len__(self) -> int:
        return len(self._nicks)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._nicks))
