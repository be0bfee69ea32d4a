"""RTM websocket stream: connect, receive one event at a time, close."""

from __future__ import annotations

import json
import logging

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from ..errors.internal import EventStreamError
from ..logs.logger import logger
from .events import SlackEvent, parse_event

STREAM_NOT_CONNECTED_ERROR = "RTM stream not connected"


class RTMStream:
    """Handles the RTM websocket connection and event decoding.

    Attributes:
        url (str): The websocket URL returned by ``rtm.connect``.
        ws: Active websocket connection, or None before `connect`.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.ws = None

    async def connect(self) -> None:
        logger.log_event("slack", "rtm_connecting", level=logging.DEBUG)
        try:
            self.ws = await websockets.connect(self.url)
        except (OSError, TimeoutError, WebSocketException) as e:
            raise EventStreamError(
                f"RTM websocket connection failed: {e}", data={"operation": "connect"}
            ) from e
        logger.log_event("slack", "rtm_connected")

    async def next_event(self) -> SlackEvent:
        """Block until the next RTM event arrives.

        Raises:
            EventStreamError: If the stream is closed or a frame is not a
                JSON object.
        """
        if self.ws is None:
            raise EventStreamError(STREAM_NOT_CONNECTED_ERROR)
        try:
            frame = await self.ws.recv()
        except ConnectionClosed as e:
            raise EventStreamError(
                f"RTM stream closed: {e}", data={"operation": "receive"}
            ) from e
        try:
            payload = json.loads(frame)
        except ValueError as e:
            raise EventStreamError(
                "RTM frame is not valid JSON", data={"operation": "decode"}
            ) from e
        if not isinstance(payload, dict):
            raise EventStreamError(
                "RTM frame is not a JSON object", data={"operation": "decode"}
            )
        return parse_event(payload)

    async def close(self) -> None:
        if self.ws is None:
            return
        try:
            await self.ws.close()
        except (OSError, WebSocketException) as e:
            logger.log_event(
                "slack", "rtm_close_error", level=logging.WARNING, error=str(e)
            )
        finally:
            self.ws = None
