"""Thin asynchronous Slack Web API client used by the relay.

Wraps only the methods the relay needs: directory listings, posting a
message and opening an RTM session. Prefer adding focused methods here over
sprinkling raw request logic across modules.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ..constants import SLACK_API_BASE_URL, SLACK_HTTP_TIMEOUT_SECONDS
from ..errors.internal import SlackAPIError
from ..logs.logger import logger
from .models import Directory, DisplayIdentity


class SlackAPI:
    """Asynchronous client for Slack Web API methods.

    Attributes:
        base_url (str): Web API root, ``https://slack.com/api`` by default.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        token: str,
        base_url: str = SLACK_API_BASE_URL,
    ):
        """Initialize the SlackAPI client.

        Args:
            session (aiohttp.ClientSession): The aiohttp session to use for requests.
            token (str): Bot or user token sent as a Bearer credential.
            base_url (str): Web API root URL.

        Raises:
            ValueError: If session or token is not provided.
        """
        if not session:
            raise ValueError("aiohttp session required")
        if not token:
            raise ValueError("Slack token required")
        self._session = session
        self._token = token
        self.base_url = base_url.rstrip("/")

    async def call(self, method: str, **params: Any) -> dict[str, Any]:
        """Call a Web API method and return the decoded JSON body.

        Args:
            method (str): Method name, e.g. ``users.list``.
            **params: Form fields; None values are omitted.

        Returns:
            dict[str, Any]: The response payload (``ok`` is always true).

        Raises:
            SlackAPIError: On transport failure, non-JSON body or ``ok: false``.
        """
        url = f"{self.base_url}/{method}"
        headers = {"Authorization": f"Bearer {self._token}"}
        form = {k: _form_value(v) for k, v in params.items() if v is not None}
        try:
            async with self._session.post(
                url,
                headers=headers,
                data=form,
                timeout=aiohttp.ClientTimeout(total=SLACK_HTTP_TIMEOUT_SECONDS),
            ) as resp:
                logger.log_event(
                    "slack",
                    "api_response",
                    level=logging.DEBUG,
                    method=method,
                    status=resp.status,
                )
                payload = await resp.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as e:
            raise SlackAPIError(f"{type(e).__name__}: {e}", method=method) from e
        except ValueError as e:
            raise SlackAPIError("invalid JSON response", method=method) from e
        if not isinstance(payload, dict):
            raise SlackAPIError("unexpected response shape", method=method)
        if not payload.get("ok"):
            raise SlackAPIError(str(payload.get("error", "unknown_error")), method=method)
        return payload

    async def _list(self, method: str, key: str) -> list[Directory]:
        out: list[Directory] = []
        cursor: str | None = None
        while True:
            payload = await self.call(method, cursor=cursor)
            for item in payload.get(key) or []:
                if isinstance(item, dict) and item.get("id") and item.get("name"):
                    out.append(Directory(id=str(item["id"]), name=str(item["name"])))
            cursor = (payload.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                return out

    # ---- High level helpers ----
    async def users_list(self) -> list[Directory]:
        return await self._list("users.list", "members")

    async def channels_list(self) -> list[Directory]:
        return await self._list("channels.list", "channels")

    async def groups_list(self) -> list[Directory]:
        return await self._list("groups.list", "groups")

    async def post_message(
        self, display: DisplayIdentity, channel_id: str, text: str
    ) -> None:
        """Post ``text`` to ``channel_id`` attributed to ``display``."""
        await self.call(
            "chat.postMessage",
            channel=channel_id,
            text=text,
            username=display.username,
            icon_emoji=display.icon_emoji,
            as_user=False,
        )

    async def rtm_connect(self) -> str:
        """Open an RTM session and return its websocket URL."""
        payload = await self.call("rtm.connect")
        url = payload.get("url")
        if not isinstance(url, str) or not url:
            raise SlackAPIError("rtm.connect returned no url", method="rtm.connect")
        return url


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
