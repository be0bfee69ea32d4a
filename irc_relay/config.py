"""Relay configuration: one immutable, validated value built at startup."""

from __future__ import annotations

import getpass
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors.internal import ConfigError
from .irc.client import split_address

# Environment variable → field name
ENV_FIELDS: dict[str, str] = {
    "RELAY_IRC_SERVER": "irc_server",
    "RELAY_IRC_SSL": "irc_ssl",
    "RELAY_IRC_TRUST_ALL": "irc_trust_all",
    "RELAY_IRC_PASSWORD": "irc_password",
    "RELAY_IRC_NICK": "irc_nick",
    "RELAY_IRC_FULLNAME": "irc_full_name",
    "RELAY_IRC_CHANNEL": "irc_channel",
    "RELAY_SLACK_TOKEN": "slack_token",
    "RELAY_SLACK_USER": "slack_user",
    "RELAY_SLACK_CHANNEL": "slack_channel",
    "RELAY_SLACK_ICONS": "slack_icons",
}

_SECRET_FIELDS = ("irc_password", "slack_token")


def _default_nick() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


class IRCConfig(BaseModel):
    """Connection parameters for the IRC side.

    Attributes:
        irc_server: ``host:port`` of the IRC server.
        irc_ssl: Connect with TLS.
        irc_trust_all: Accept any TLS certificate.
        irc_password: Server password; sent as PASS when non-empty.
        irc_nick: Nick to register; also used for self-echo suppression.
        irc_full_name: Real name sent in USER (defaults to the nick).
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    irc_server: str = "irc.freenode.net:7000"
    irc_ssl: bool = True
    irc_trust_all: bool = False
    irc_password: str = ""
    irc_nick: str = Field(
        default_factory=_default_nick, min_length=1, validate_default=True
    )
    irc_full_name: str = ""

    @field_validator("irc_nick")
    @classmethod
    def validate_irc_nick(cls, v: str) -> str:
        if " " in v or v.startswith(":"):
            raise ValueError("irc_nick must be a single token")
        return v

    @field_validator("irc_server")
    @classmethod
    def validate_irc_server(cls, v: str) -> str:
        split_address(v)
        return v

    @property
    def full_name(self) -> str:
        return self.irc_full_name or self.irc_nick

    @property
    def irc_host(self) -> str:
        """Server host name, used as the display name for system events."""
        return split_address(self.irc_server, self.irc_ssl)[0]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None):
        """Build the config from ``RELAY_*`` environment variables.

        Only the variables mapping to this model's fields are read.

        Raises:
            ConfigError: If a required value is missing or invalid.
        """
        env = os.environ if environ is None else environ
        values = {
            field: env[name]
            for name, field in ENV_FIELDS.items()
            if field in cls.model_fields and name in env
        }
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            problems = "; ".join(
                f"{_env_name(err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigError(
                f"invalid configuration: {problems}", data={"errors": e.error_count()}
            ) from e

    def summary(self) -> dict[str, object]:
        """Config values safe to log (secrets masked)."""
        data = self.model_dump()
        for name in _SECRET_FIELDS:
            if data.get(name):
                data[name] = "***"
        return data


class RelayConfig(IRCConfig):
    """All startup parameters of the relay.

    Attributes:
        irc_channel: The single IRC channel relayed, e.g. ``#room``.
        slack_token: Slack API token.
        slack_user: Slack user name whose messages are relayed to IRC.
        slack_channel: ``#name`` for a public channel, bare name for a
            private group.
        slack_icons: Decorate relayed posts with a per-nick icon.
    """

    irc_channel: str = Field(min_length=2)
    slack_token: str = Field(min_length=1)
    slack_user: str = Field(min_length=1)
    slack_channel: str = Field(min_length=1)
    slack_icons: bool = False

    @field_validator("irc_channel")
    @classmethod
    def validate_irc_channel(cls, v: str) -> str:
        if v[0] not in "#&+!":
            raise ValueError("irc_channel must start with a channel prefix such as '#'")
        if " " in v or "," in v:
            raise ValueError("irc_channel must not contain spaces or commas")
        return v


def _env_name(loc: tuple[int | str, ...]) -> str:
    field = str(loc[0]) if loc else "?"
    for name, mapped in ENV_FIELDS.items():
        if mapped == field:
            return name
    return field


def load_config(environ: Mapping[str, str] | None = None) -> RelayConfig:
    return RelayConfig.from_env(environ)
