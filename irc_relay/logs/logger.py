"""Event logger used by every relay component."""

from __future__ import annotations

import logging
import os

# Events whose human text is a chat line and gets the speech-bubble prefix.
_CHAT_EVENTS = frozenset({"relay_from_irc", "relay_from_slack"})


class RelayLogger:
    """Emits named events (``<domain>_<action>``) through stdlib logging.

    Handlers and formatting are owned by `LoggerConfigurator`; this class
    only builds the message text. In DEBUG mode every keyword argument is
    appended as ``key=value`` context; otherwise only the human text is
    shown.
    """

    def __init__(self, name: str = "irc_relay") -> None:
        # Fixed width for event name column when in debug (alignment)
        self._event_name_width = 32
        self.logger = logging.getLogger(name)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        event_name = f"{domain}_{action}".lower()
        human_text = human
        derived = False
        if human_text is None:
            # Local import to avoid cyclic import issues during module init.
            from .event_catalog import EVENT_TEMPLATES as _event_templates

            template = _event_templates.get((domain, action))
            if template:
                try:
                    human_text = template.format(**kwargs)
                except (KeyError, IndexError, ValueError):
                    human_text = template
            else:
                human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
                derived = True
        kwargs.setdefault("_human_text", human_text)
        if derived:
            kwargs.setdefault("derived", True)
        self._log(level, event_name, exc_info=exc_info, **kwargs)

    def _log(
        self, level: int, event_name: str, exc_info: bool = False, **kwargs: object
    ) -> None:
        kw: dict[str, object] = dict(kwargs)  # copy for mutation in extract
        user, channel, human_text = self._extract_reserved(kw)
        prefix = self._build_prefix(user, channel)
        if event_name in _CHAT_EVENTS and human_text:
            human_text = f"💬 {human_text}"
        msg = (
            self._build_debug_message(
                event_name, prefix, human_text, kw, self._event_name_width
            )
            if self._is_debug_enabled()
            else self._build_concise_message(event_name, prefix, human_text)
        )
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _is_debug_enabled() -> bool:
        return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")

    @staticmethod
    def _extract_reserved(
        kwargs: dict[str, object],
    ) -> tuple[str | None, str | None, str | None]:
        user_o = kwargs.pop("user", None)
        channel_o = kwargs.pop("channel", None)
        human_text_o = kwargs.pop("_human_text", None)
        user = user_o if isinstance(user_o, str) else None
        channel = channel_o if isinstance(channel_o, str) else None
        human_text = human_text_o if isinstance(human_text_o, str) else None
        return user, channel, human_text

    @staticmethod
    def _build_prefix(user: str | None, channel: str | None) -> str:
        user_label = user or "system"
        core = f"{user_label}@{channel}" if channel else user_label
        padded = core.ljust(24)[:24]
        return f"[{padded}]"

    @staticmethod
    def _build_debug_message(
        event_name: str,
        prefix: str,
        human_text: str | None,
        kwargs: dict[str, object],
        width: int,
    ) -> str:
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        if len(event_name) <= width:
            ev = event_name.ljust(width)
        else:  # truncate but keep rightmost indicator
            ev = event_name[: width - 1] + "…"
        base = f"{ev} {prefix}"
        if human_text:
            base = f"{base} {human_text}"
        if context:
            base = f"{base} ({context})"
        return base

    @staticmethod
    def _build_concise_message(
        event_name: str, prefix: str, human_text: str | None
    ) -> str:
        return f"{prefix} {human_text or event_name}"


logger = RelayLogger()
