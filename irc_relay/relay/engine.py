"""The relay loop: two producers, one fair consumer."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from ..config import RelayConfig
from ..errors.handling import log_error
from ..errors.internal import EventStreamError, SlackAPIError
from ..errors.irc import ReadError, TooLongError
from ..irc import commands
from ..irc.message import Message
from ..logs.logger import logger
from ..slack.events import SlackEvent
from ..slack.models import DisplayIdentity
from .events import RelayEvent
from .identity import display_identity
from .resolve import RelayTargets
from .tracker import KnownSpeakers
from .translate import IRCTranslator, SlackTranslator

IRC_SIDE = "irc"
SLACK_SIDE = "slack"

# Put by a producer when its source has ended.
_CLOSED = object()


class IRCSide(Protocol):
    async def next(self) -> Message: ...

    async def send(self, command: str, *arguments: str) -> None: ...


class SlackSide(Protocol):
    async def next_event(self) -> SlackEvent: ...

    async def post_message(
        self, display: DisplayIdentity, channel_id: str, text: str
    ) -> None: ...


class Relay:
    """Moves events between one IRC channel and one Slack channel.

    Each side has a producer task that reads, translates and queues events
    into a single-slot queue. The consumer takes one event at a time from
    whichever queue is ready, alternating when both are, and delivers it
    to the opposite side. Delivery is at-most-once: failures are logged
    and the event is dropped.

    The relay ends when either source ends.
    """

    def __init__(
        self,
        config: RelayConfig,
        irc: IRCSide,
        slack: SlackSide,
        targets: RelayTargets,
        *,
        known: KnownSpeakers | None = None,
    ) -> None:
        self.config = config
        self.irc = irc
        self.slack = slack
        self.targets = targets
        self.known = known if known is not None else KnownSpeakers()
        self.irc_translator = IRCTranslator(
            config.irc_channel, config.irc_nick, self.known
        )
        self.slack_translator = SlackTranslator(targets, config.slack_user)
        self.delivered = 0
        self.failed = 0
        self.skipped = 0
        self._queues: dict[str, asyncio.Queue[object]] = {
            IRC_SIDE: asyncio.Queue(maxsize=1),
            SLACK_SIDE: asyncio.Queue(maxsize=1),
        }
        self._preferred = IRC_SIDE

    async def run(self) -> str:
        """Relay until one side ends; return the name of that side."""
        producers = [
            asyncio.create_task(self._produce_irc(), name="relay-irc"),
            asyncio.create_task(self._produce_slack(), name="relay-slack"),
        ]
        logger.log_event(
            "relay",
            "started",
            channel=self.config.irc_channel,
            slack_channel=self.targets.channel_id,
        )
        try:
            ended = await self._consume()
        finally:
            for task in producers:
                task.cancel()
            await asyncio.gather(*producers, return_exceptions=True)
        logger.log_event(
            "relay",
            "stopped",
            level=logging.WARNING,
            side=ended,
            delivered=self.delivered,
            failed=self.failed,
            skipped=self.skipped,
        )
        return ended

    async def _produce_irc(self) -> None:
        queue = self._queues[IRC_SIDE]
        try:
            while True:
                msg = await self.irc.next()
                event = self.irc_translator.translate(msg)
                if event is not None:
                    await queue.put(event)
        except ReadError as e:
            log_error("IRC connection ended", e)
        except Exception as e:
            log_error("IRC producer failed", e)
        await queue.put(_CLOSED)

    async def _produce_slack(self) -> None:
        queue = self._queues[SLACK_SIDE]
        try:
            while True:
                payload = await self.slack.next_event()
                event = self.slack_translator.translate(payload)
                if event is not None:
                    await queue.put(event)
        except EventStreamError as e:
            log_error("Slack event stream ended", e)
        except Exception as e:
            log_error("Slack producer failed", e)
        await queue.put(_CLOSED)

    async def _consume(self) -> str:
        getters: dict[str, asyncio.Task[object]] = {}
        try:
            while True:
                for side, queue in self._queues.items():
                    if side not in getters:
                        getters[side] = asyncio.create_task(queue.get())
                done, _ = await asyncio.wait(
                    getters.values(), return_when=asyncio.FIRST_COMPLETED
                )
                side = self._pick({s for s, t in getters.items() if t in done})
                item = getters.pop(side).result()
                if item is _CLOSED:
                    return side
                await self._deliver(side, item)  # type: ignore[arg-type]
        finally:
            for task in getters.values():
                task.cancel()

    def _pick(self, ready: set[str]) -> str:
        if self._preferred in ready:
            side = self._preferred
        else:
            side = next(iter(ready))
        self._preferred = SLACK_SIDE if side == IRC_SIDE else IRC_SIDE
        return side

    async def _deliver(self, source: str, event: RelayEvent) -> None:
        if source == SLACK_SIDE and not event.text.strip():
            self.skipped += 1
            logger.log_event(
                "relay", "slack_blank", level=logging.DEBUG, user=event.speaker
            )
            return
        if source == IRC_SIDE:
            ok = await self._to_slack(event)
        else:
            ok = await self._to_irc(event)
        if ok:
            self.delivered += 1
        else:
            self.failed += 1

    async def _to_slack(self, event: RelayEvent) -> bool:
        display = display_identity(
            event, self.config.irc_host, icons=self.config.slack_icons
        )
        try:
            await self.slack.post_message(display, self.targets.channel_id, event.text)
        except SlackAPIError as e:
            log_error(
                "Failed to post to Slack",
                e,
                {"speaker": event.speaker or "system", "channel": self.targets.channel_id},
            )
            return False
        logger.log_event(
            "relay",
            "from_irc",
            user=display.username,
            channel=self.config.irc_channel,
            text=event.text,
        )
        return True

    async def _to_irc(self, event: RelayEvent) -> bool:
        lines = [line for line in event.text.splitlines() if line.strip()]
        ok = True
        for line in lines:
            try:
                await self.irc.send(commands.PRIVMSG, self.config.irc_channel, line)
            except TooLongError as e:
                log_error(
                    "Dropped over-long line for IRC",
                    e,
                    {"channel": self.config.irc_channel},
                )
                ok = False
                continue
            except (TimeoutError, OSError, ValueError) as e:
                log_error(
                    "Failed to send to IRC", e, {"channel": self.config.irc_channel}
                )
                ok = False
                continue
            logger.log_event(
                "relay",
                "from_slack",
                user=event.speaker,
                channel=self.config.irc_channel,
                text=line,
            )
        return ok
