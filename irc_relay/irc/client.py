"""Asyncio IRC client: dial, register, framed read/write, automatic PONG."""

from __future__ import annotations

import asyncio
import logging
import ssl
from enum import Enum, auto

from ..constants import (
    IRC_CONNECT_TIMEOUT_SECONDS,
    IRC_DEFAULT_PORT,
    IRC_DEFAULT_TLS_PORT,
    IRC_MAX_LINE_BYTES,
    IRC_READ_LIMIT_BYTES,
    IRC_WRITE_TIMEOUT_SECONDS,
)
from ..errors.irc import DialError, IRCError, ReadError, RegistrationError, TooLongError
from ..logs.logger import logger
from . import commands
from .message import Message, parse_message


class RegistrationState(Enum):
    START = auto()
    PASS_SENT = auto()
    NICK_SENT = auto()
    USER_SENT = auto()
    READY = auto()
    FAILED = auto()


def split_address(server: str, use_tls: bool = False) -> tuple[str, int]:
    """Split ``host[:port]`` (IPv6 hosts in brackets) into host and port.

    The default port depends on whether TLS is used.

    Raises:
        ValueError: If the port is not a number or the host is empty.
    """
    default_port = IRC_DEFAULT_TLS_PORT if use_tls else IRC_DEFAULT_PORT
    server = server.strip()
    if server.startswith("["):
        host, _, rest = server[1:].partition("]")
        port_text = rest[1:] if rest.startswith(":") else ""
    elif server.count(":") == 1:
        host, _, port_text = server.partition(":")
    else:
        host, port_text = server, ""
    if not host:
        raise ValueError(f"missing host in server address {server!r}")
    if not port_text:
        return host, default_port
    if not port_text.isdigit():
        raise ValueError(f"invalid port in server address {server!r}")
    return host, int(port_text)


class IRCClient:
    """A registered connection to an IRC server.

    Use `IRCClient.connect` to dial and register. `next()` never returns
    PING messages: they are answered with PONG as they are read.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        nick: str = "",
        server: str = "",
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.nick = nick
        self.server = server
        self.state = RegistrationState.START
        self._write_lock = asyncio.Lock()

    @classmethod
    async def connect(
        cls,
        server: str,
        nick: str,
        full_name: str,
        password: str = "",
        *,
        use_tls: bool = False,
        trust_all: bool = False,
    ) -> IRCClient:
        """Dial ``server`` and complete registration.

        Raises:
            DialError: The transport could not be opened.
            RegistrationError: The server rejected the handshake.
            ReadError: The connection dropped during the handshake.
        """
        try:
            host, port = split_address(server, use_tls)
        except ValueError as e:
            raise DialError(str(e), data={"server": server}) from e
        ssl_context = _make_ssl_context(trust_all) if use_tls else None
        logger.log_event(
            "irc", "connect_start", user=nick, server=host, port=port, tls=use_tls
        )
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(
                    host, port, ssl=ssl_context, limit=IRC_READ_LIMIT_BYTES
                ),
                timeout=IRC_CONNECT_TIMEOUT_SECONDS,
            )
        except TimeoutError as e:
            raise DialError(
                f"timed out connecting to {host}:{port}",
                data={"server": server, "timeout": IRC_CONNECT_TIMEOUT_SECONDS},
            ) from e
        except OSError as e:
            raise DialError(
                f"failed to connect to {host}:{port}: {e}", data={"server": server}
            ) from e
        logger.log_event(
            "irc", "connection_established", level=logging.DEBUG, user=nick
        )

        client = cls(reader, writer, nick=nick, server=server)
        try:
            await client.register(nick, full_name, password)
        except BaseException:
            await client._close_transport()
            raise
        return client

    def _set_state(self, new_state: RegistrationState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.nick,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    async def register(self, nick: str, full_name: str, password: str = "") -> None:
        """Run the registration handshake on an open transport.

        Raises:
            RegistrationError: On any reply in the registration failure set.
        """
        self.nick = nick
        if password:
            await self.send(commands.PASS, password)
            self._set_state(RegistrationState.PASS_SENT)
        await self.send(commands.NICK, nick)
        self._set_state(RegistrationState.NICK_SENT)
        await self.send(commands.USER, nick, "0", "*", full_name)
        self._set_state(RegistrationState.USER_SENT)

        while True:
            msg = await self.next()
            if msg.command in commands.REGISTRATION_FAILURES:
                reason = (
                    msg.arguments[-1]
                    if msg.arguments
                    else commands.command_name(msg.command)
                )
                self._set_state(RegistrationState.FAILED)
                logger.log_event(
                    "irc",
                    "registration_failed",
                    level=logging.ERROR,
                    user=nick,
                    reason=reason,
                    numeric=commands.command_name(msg.command),
                )
                raise RegistrationError(reason, command=msg.command)
            if msg.command == commands.RPL_WELCOME:
                self._set_state(RegistrationState.READY)
                logger.log_event("irc", "registered", user=nick, server=self.server)
                return
            logger.log_event(
                "irc",
                "registration_skip",
                level=logging.DEBUG,
                user=nick,
                command=msg.command,
            )

    async def send(self, command: str, *arguments: str) -> None:
        await self.send_message(Message(command=command, arguments=arguments))

    async def send_message(self, msg: Message) -> None:
        """Write one message under the write deadline.

        Raises:
            TooLongError: The encoded line exceeds 512 bytes; nothing was sent.
            TimeoutError: The peer did not accept the bytes in time.
            ValueError: The message cannot be represented on the wire.
        """
        data = msg.to_bytes()
        if len(data) > IRC_MAX_LINE_BYTES:
            raise TooLongError(
                data[:IRC_MAX_LINE_BYTES], len(data) - IRC_MAX_LINE_BYTES
            )
        async with self._write_lock:
            self.writer.write(data)
            await asyncio.wait_for(
                self.writer.drain(), timeout=IRC_WRITE_TIMEOUT_SECONDS
            )

    async def next(self) -> Message:
        """Return the next non-PING message from the server.

        Raises:
            ReadError: The connection closed or failed.
            ParseError: A line could not be parsed.
        """
        while True:
            try:
                line = await self.reader.readline()
            except (OSError, ValueError) as e:
                raise ReadError(f"read failed: {e}", data={"user": self.nick}) from e
            if not line:
                raise ReadError("connection closed by server", data={"user": self.nick})
            if not line.strip():
                continue
            msg = parse_message(line)
            if msg.command == commands.PING:
                await self._answer_ping(msg)
                continue
            return msg

    async def _answer_ping(self, ping: Message) -> None:
        try:
            await self.send(commands.PONG, *ping.arguments)
        except ValueError as e:
            logger.log_event(
                "irc",
                "ping_unanswerable",
                level=logging.WARNING,
                user=self.nick,
                ping=str(ping),
                error=str(e),
            )
            return
        logger.log_event("irc", "ping_answered", level=logging.DEBUG, user=self.nick)

    async def close(self) -> None:
        """Send QUIT (best-effort) and close the transport."""
        try:
            await self.send(commands.QUIT)
        except (IRCError, OSError, TimeoutError) as e:
            logger.log_event(
                "irc", "quit_failed", level=logging.DEBUG, user=self.nick, error=str(e)
            )
        await self._close_transport()

    async def _close_transport(self) -> None:
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "irc", "close_error", level=logging.DEBUG, user=self.nick, error=str(e)
            )
        logger.log_event("irc", "disconnected", level=logging.DEBUG, user=self.nick)


def _make_ssl_context(trust_all: bool) -> ssl.SSLContext:
    context = ssl.create_default_context()
    if trust_all:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context
