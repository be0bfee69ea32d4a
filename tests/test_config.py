"""
Tests for environment-driven configuration
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from irc_relay.config import IRCConfig, RelayConfig, load_config
from irc_relay.errors.internal import ConfigError


class TestRelayConfig:
    def test_from_env(self, relay_env):
        config = RelayConfig.from_env(relay_env)
        assert config.irc_server == "irc.example.net:6697"
        assert config.irc_nick == "relaybot"
        assert config.irc_channel == "#room"
        assert config.slack_user == "alice"
        assert config.slack_channel == "#general"

    def test_defaults(self, relay_env):
        config = RelayConfig.from_env(
            {k: v for k, v in relay_env.items() if k != "RELAY_IRC_SERVER"}
        )
        assert config.irc_server == "irc.freenode.net:7000"
        assert config.irc_ssl is True
        assert config.irc_trust_all is False
        assert config.irc_password == ""
        assert config.slack_icons is False

    def test_full_name_defaults_to_nick(self, relay_config):
        assert relay_config.full_name == "relaybot"

    def test_explicit_full_name(self, relay_env):
        config = RelayConfig.from_env({**relay_env, "RELAY_IRC_FULLNAME": "Relay Bot"})
        assert config.full_name == "Relay Bot"

    def test_nick_defaults_to_os_user(self, relay_env, monkeypatch):
        monkeypatch.setattr("irc_relay.config.getpass.getuser", lambda: "osuser")
        env = {k: v for k, v in relay_env.items() if k != "RELAY_IRC_NICK"}
        assert RelayConfig.from_env(env).irc_nick == "osuser"

    @pytest.mark.parametrize(
        "value, expected", [("false", False), ("0", False), ("true", True), ("yes", True)]
    )
    def test_boolean_parsing(self, relay_env, value, expected):
        config = RelayConfig.from_env({**relay_env, "RELAY_IRC_SSL": value})
        assert config.irc_ssl is expected

    def test_irc_host(self, relay_config):
        assert relay_config.irc_host == "irc.example.net"

    def test_private_group(self, relay_env):
        config = RelayConfig.from_env({**relay_env, "RELAY_SLACK_CHANNEL": "secret-room"})
        assert config.slack_channel == "secret-room"

    def test_whitespace_is_stripped(self, relay_env):
        config = RelayConfig.from_env({**relay_env, "RELAY_IRC_CHANNEL": "  #room "})
        assert config.irc_channel == "#room"

    def test_missing_required_names_env_var(self, relay_env):
        env = {k: v for k, v in relay_env.items() if k != "RELAY_SLACK_TOKEN"}
        with pytest.raises(ConfigError, match="RELAY_SLACK_TOKEN"):
            RelayConfig.from_env(env)

    @pytest.mark.parametrize("channel", ["room", "#my room", "#a,#b", "#"])
    def test_invalid_channel(self, relay_env, channel):
        with pytest.raises(ConfigError, match="RELAY_IRC_CHANNEL"):
            RelayConfig.from_env({**relay_env, "RELAY_IRC_CHANNEL": channel})

    def test_invalid_nick(self, relay_env):
        with pytest.raises(ConfigError, match="RELAY_IRC_NICK"):
            RelayConfig.from_env({**relay_env, "RELAY_IRC_NICK": "two words"})

    def test_invalid_server(self, relay_env):
        with pytest.raises(ConfigError, match="RELAY_IRC_SERVER"):
            RelayConfig.from_env({**relay_env, "RELAY_IRC_SERVER": "irc.example.net:port"})

    def test_config_is_frozen(self, relay_config):
        with pytest.raises(ValidationError):
            relay_config.irc_channel = "#other"  # type: ignore[misc]

    def test_summary_masks_secrets(self, relay_env):
        config = RelayConfig.from_env({**relay_env, "RELAY_IRC_PASSWORD": "hunter2"})
        summary = config.summary()
        assert summary["slack_token"] == "***"
        assert summary["irc_password"] == "***"
        assert summary["irc_channel"] == "#room"

    def test_summary_leaves_empty_password(self, relay_config):
        assert relay_config.summary()["irc_password"] == ""

    def test_load_config_reads_os_environ(self, relay_env, monkeypatch):
        for name, value in relay_env.items():
            monkeypatch.setenv(name, value)
        assert load_config().irc_channel == "#room"


class TestIRCConfig:
    def test_ignores_slack_settings(self):
        config = IRCConfig.from_env(
            {"RELAY_IRC_NICK": "console", "RELAY_SLACK_TOKEN": "ignored"}
        )
        assert config.irc_nick == "console"
        assert not hasattr(config, "slack_token")

    def test_works_without_relay_settings(self):
        config = IRCConfig.from_env({"RELAY_IRC_NICK": "console", "RELAY_IRC_SSL": "false"})
        assert config.irc_ssl is False
        assert config.irc_host == "irc.freenode.net"
