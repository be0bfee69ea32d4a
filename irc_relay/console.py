"""Raw IRC console: stdin lines go to the server, server lines go to stdout."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable

from .config import IRCConfig
from .errors.handling import log_error
from .errors.irc import ParseError, ReadError, TooLongError
from .irc.client import IRCClient
from .irc.message import parse_message
from .logs.logger import logger


async def _stdin_reader() -> asyncio.StreamReader:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    await loop.connect_read_pipe(
        lambda: asyncio.StreamReaderProtocol(reader), sys.stdin
    )
    return reader


async def _pump_input(irc: IRCClient, lines: asyncio.StreamReader) -> None:
    while True:
        raw = await lines.readline()
        if not raw:
            return
        if not raw.strip():
            continue
        try:
            msg = parse_message(raw)
        except ParseError as e:
            log_error("Ignoring unparsable console line", e)
            continue
        try:
            await irc.send_message(msg)
        except (TooLongError, ValueError) as e:
            log_error("Console line not sent", e)
        except (TimeoutError, OSError) as e:
            log_error("IRC connection lost while sending", e)
            return


async def _pump_output(irc: IRCClient, write: Callable[[str], None]) -> None:
    try:
        while True:
            write(str(await irc.next()))
    except ReadError as e:
        log_error("IRC connection ended", e)


async def console(
    irc: IRCClient,
    lines: asyncio.StreamReader,
    write: Callable[[str], None] = print,
) -> None:
    """Shuttle raw lines between ``lines`` and ``irc`` until either ends.

    PINGs are answered by the client and never shown.
    """
    tasks = [
        asyncio.create_task(_pump_input(irc, lines)),
        asyncio.create_task(_pump_output(irc, write)),
    ]
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


async def run_console(config: IRCConfig) -> None:
    irc = await IRCClient.connect(
        config.irc_server,
        config.irc_nick,
        config.full_name,
        config.irc_password,
        use_tls=config.irc_ssl,
        trust_all=config.irc_trust_all,
    )
    logger.log_event("app", "console_ready", level=logging.INFO, user=irc.nick)
    try:
        await console(irc, await _stdin_reader())
    finally:
        await irc.close()
