"""
Fake asyncio stream endpoints for IRC client tests
"""

import asyncio


class FakeWriter:
    """Stand-in for asyncio.StreamWriter that captures written bytes."""

    def __init__(self) -> None:
        self.buffer = bytearray()
        self.closed = False

    def write(self, data: bytes) -> None:
        self.buffer.extend(data)

    async def drain(self) -> None:
        await asyncio.sleep(0)

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None

    def lines(self) -> list[str]:
        return [
            line.decode("utf-8") for line in bytes(self.buffer).split(b"\r\n") if line
        ]


def make_reader(*lines: str, eof: bool = True) -> asyncio.StreamReader:
    """Build a StreamReader pre-loaded with CRLF-terminated lines.

    Must be called from inside a running event loop.
    """
    reader = asyncio.StreamReader()
    for line in lines:
        reader.feed_data(line.encode("utf-8") + b"\r\n")
    if eof:
        reader.feed_eof()
    return reader
