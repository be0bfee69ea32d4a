#!/usr/bin/env python3
"""
Main entry point for the IRC/Slack relay
"""

import asyncio
import logging
import sys

# Import all modules first (required by E402)
from .config import IRCConfig, load_config
from .console import run_console
from .errors.handling import log_error
from .errors.internal import ConfigError
from .irc import commands
from .irc.client import IRCClient

# Configure logging after imports to prevent other modules from configuring it
from .logging_config import LoggerConfigurator
from .logs.logger import logger
from .relay.engine import Relay
from .relay.resolve import resolve_targets
from .slack.client import SlackClient

configurator = LoggerConfigurator()
configurator.configure()


async def main() -> None:
    """Main entry point for the relay.

    Loads the configuration, resolves the Slack targets, opens both
    connections and relays until either side ends. A relay that ends is
    a failure: the process exits with status 1.

    Raises:
        SystemExit: On configuration, resolution or connection failure, and
            when the relay stops.
    """
    try:
        logger.log_event("app", "start")
        config = load_config()
        logger.log_event("app", "config_loaded", level=logging.DEBUG, **config.summary())
        async with SlackClient(config.slack_token) as slack:
            targets = await resolve_targets(
                slack, config.slack_user, config.slack_channel
            )
            await slack.connect()
            irc = await IRCClient.connect(
                config.irc_server,
                config.irc_nick,
                config.full_name,
                config.irc_password,
                use_tls=config.irc_ssl,
                trust_all=config.irc_trust_all,
            )
            try:
                await irc.send(commands.JOIN, config.irc_channel)
                ended = await Relay(config, irc, slack, targets).run()
            finally:
                await irc.close()
        logger.log_event("app", "relay_ended", level=logging.ERROR, side=ended)
        sys.exit(1)
    except asyncio.CancelledError:
        raise
    except KeyboardInterrupt:
        pass
    except Exception as e:
        log_error("Main application error", e)
        sys.exit(1)
    finally:
        logger.log_event("app", "shutdown")


def health_check() -> int:
    """Validate the configuration without connecting; return an exit code."""
    logger.log_event("app", "health_mode")
    try:
        config = load_config()
    except ConfigError as e:
        logger.log_event("app", "health_fail", level=logging.ERROR, error=str(e))
        return 1
    logger.log_event(
        "app", "health_pass", channel=config.irc_channel, server=config.irc_server
    )
    return 0


async def console_main() -> None:
    """Run the raw IRC console with the IRC part of the configuration."""
    try:
        await run_console(IRCConfig.from_env())
    except asyncio.CancelledError:
        raise
    except KeyboardInterrupt:
        pass
    except Exception as e:
        log_error("Console error", e)
        sys.exit(1)


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application.

    ``--health-check`` validates the configuration and exits;
    ``--irc-console`` runs the raw IRC console; otherwise the relay runs.

    Raises:
        SystemExit: If a critical error occurs during execution.
    """
    args = sys.argv[1:] if argv is None else argv
    if "--health-check" in args:
        sys.exit(health_check())
    entry = console_main if "--irc-console" in args else main
    try:
        asyncio.run(entry())
    except KeyboardInterrupt:
        sys.exit(0)
    except asyncio.CancelledError:
        sys.exit(0)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
