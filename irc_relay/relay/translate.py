"""Translation of native IRC and Slack events into `RelayEvent`s."""

from __future__ import annotations

import html
import logging
from collections.abc import Callable

from ..irc import commands
from ..irc.message import Message
from ..logs.logger import logger
from ..slack.events import MessageEvent, NoiseEvent, SlackEvent, UnrecognizedEvent
from .events import RelayEvent
from .resolve import RelayTargets
from .tracker import KnownSpeakers


class IRCTranslator:
    """Turns IRC messages seen on the tracked channel into relay events.

    Presence changes (JOIN, PART, QUIT, NICK) are narrated only for known
    speakers. A nick becomes known once it joins or speaks. PRIVMSGs from
    our own nick are dropped so our own relayed posts never echo back.
    """

    def __init__(
        self, channel: str, own_nick: str, known: KnownSpeakers | None = None
    ) -> None:
        self.channel = channel
        self.own_nick = own_nick
        self.known = known if known is not None else KnownSpeakers()
        self._handlers: dict[str, Callable[[Message], RelayEvent | None]] = {
            commands.JOIN: self._on_join,
            commands.NICK: self._on_nick,
            commands.QUIT: self._on_quit,
            commands.PART: self._on_part,
            commands.PRIVMSG: self._on_privmsg,
        }

    def translate(self, msg: Message) -> RelayEvent | None:
        handler = self._handlers.get(msg.command)
        if handler is None:
            logger.log_event(
                "relay",
                "irc_ignored",
                level=logging.DEBUG,
                command=commands.command_name(msg.command),
                origin=msg.origin,
                raw=str(msg),
            )
            return None
        return handler(msg)

    def _system(self, text: str) -> RelayEvent:
        return RelayEvent(speaker="", channel=self.channel, text=text)

    def _in_channel(self, msg: Message) -> bool:
        return bool(msg.arguments) and msg.arguments[0] == self.channel

    def _on_join(self, msg: Message) -> RelayEvent | None:
        if not self._in_channel(msg) or not msg.origin:
            return None
        event = None
        if msg.origin in self.known:
            event = self._system(f"{msg.origin} joined")
        self.known.add(msg.origin)
        return event

    def _on_nick(self, msg: Message) -> RelayEvent | None:
        if msg.origin not in self.known or not msg.arguments:
            return None
        new_nick = msg.arguments[0]
        self.known.add(new_nick)
        return self._system(f"{msg.origin} is now {new_nick}")

    def _on_quit(self, msg: Message) -> RelayEvent | None:
        if msg.origin not in self.known:
            return None
        if msg.arguments and msg.arguments[0]:
            return self._system(f"{msg.origin} quit: {msg.arguments[0]}")
        return self._system(f"{msg.origin} quit")

    def _on_part(self, msg: Message) -> RelayEvent | None:
        if msg.origin in self.known and self._in_channel(msg):
            return self._system(f"{msg.origin} parted")
        return None

    def _on_privmsg(self, msg: Message) -> RelayEvent | None:
        if not self._in_channel(msg) or msg.origin == self.own_nick:
            return None
        if len(msg.arguments) < 2 or not msg.origin:
            logger.log_event(
                "relay", "irc_privmsg_malformed", level=logging.WARNING, raw=str(msg)
            )
            return None
        self.known.add(msg.origin)
        return RelayEvent(
            speaker=msg.origin, channel=self.channel, text=msg.arguments[1]
        )


class SlackTranslator:
    """Turns Slack RTM events into relay events.

    Only plain messages posted by the configured Slack user in the resolved
    channel pass. Their text is HTML-unescaped (Slack escapes ``&``, ``<``
    and ``>``).
    """

    def __init__(self, targets: RelayTargets, speaker: str) -> None:
        self.targets = targets
        self.speaker = speaker

    def translate(self, event: SlackEvent) -> RelayEvent | None:
        match event:
            case MessageEvent():
                return self._on_message(event)
            case NoiseEvent():
                return None
            case UnrecognizedEvent(type=event_type, raw=raw):
                logger.log_event(
                    "relay",
                    "slack_unrecognized",
                    level=logging.DEBUG,
                    event_type=event_type,
                    raw=raw,
                )
                return None
        return None

    def _on_message(self, event: MessageEvent) -> RelayEvent | None:
        if not event.is_plain:
            return None
        if (
            event.channel != self.targets.channel_id
            or event.user != self.targets.user_id
        ):
            return None
        return RelayEvent(
            speaker=self.speaker,
            channel=event.channel,
            text=html.unescape(event.text),
        )
