from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ..errors.internal import EventStreamError
from ..logs.logger import logger
from .api import SlackAPI
from .events import SlackEvent
from .models import Directory, DisplayIdentity
from .rtm import RTMStream


class SlackClient:
    """Slack side of the relay: Web API directory/post calls plus RTM events.

    This class owns the HTTP session (unless one is injected) and the RTM
    stream, and exposes the small contract the relay consumes:
    ``users_list``, ``channels_list``, ``groups_list``, ``post_message`` and
    ``next_event``.

    Attributes:
        api (SlackAPI | None): Web API client, created on entry if not injected.
        stream (RTMStream | None): RTM stream, created by `connect`.
    """

    def __init__(
        self,
        token: str,
        http_session: aiohttp.ClientSession | None = None,
        api: SlackAPI | None = None,
        stream: RTMStream | None = None,
    ) -> None:
        self._token = token
        self._session = http_session
        self._owns_session = http_session is None
        self.api = api
        self.stream = stream

    async def __aenter__(self) -> SlackClient:
        self._initialize_components()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _initialize_components(self) -> None:
        if self.api is None:
            if self._session is None:
                self._session = aiohttp.ClientSession()
            self.api = SlackAPI(self._session, self._token)

    def _require_api(self) -> SlackAPI:
        if self.api is None:
            self._initialize_components()
        return self.api  # type: ignore[return-value]

    async def connect(self) -> None:
        """Open the RTM event stream."""
        if self.stream is None:
            url = await self._require_api().rtm_connect()
            self.stream = RTMStream(url)
        await self.stream.connect()

    async def users_list(self) -> list[Directory]:
        return await self._require_api().users_list()

    async def channels_list(self) -> list[Directory]:
        return await self._require_api().channels_list()

    async def groups_list(self) -> list[Directory]:
        return await self._require_api().groups_list()

    async def post_message(
        self, display: DisplayIdentity, channel_id: str, text: str
    ) -> None:
        await self._require_api().post_message(display, channel_id, text)

    async def next_event(self) -> SlackEvent:
        if self.stream is None:
            raise EventStreamError("RTM stream not connected")
        return await self.stream.next_event()

    async def close(self) -> None:
        if self.stream is not None:
            await self.stream.close()
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        logger.log_event("slack", "closed", level=logging.DEBUG)
