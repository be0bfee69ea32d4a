"""
Configuration constants for the IRC/Slack relay

This module contains all tunable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Same contract as `_get_env_int` but for floating point values.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# IRC wire limits (RFC 2812: 512 bytes per line including CRLF)
IRC_MAX_LINE_BYTES = 512
IRC_LINE_DELIMITER = b"\r\n"

# IRC transport
IRC_CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "IRC_CONNECT_TIMEOUT_SECONDS", 30.0
)  # Dial (TCP + TLS) timeout
IRC_WRITE_TIMEOUT_SECONDS = _get_env_float(
    "IRC_WRITE_TIMEOUT_SECONDS", 60.0
)  # Per-write drain deadline; a stalled peer raises TimeoutError
IRC_DEFAULT_PORT = _get_env_int("IRC_DEFAULT_PORT", 6667)  # Plain text port
IRC_DEFAULT_TLS_PORT = _get_env_int("IRC_DEFAULT_TLS_PORT", 6697)  # TLS port
IRC_READ_LIMIT_BYTES = _get_env_int(
    "IRC_READ_LIMIT_BYTES", 64 * 1024
)  # StreamReader buffer limit for a single inbound line

# Slack endpoints
SLACK_API_BASE_URL = os.getenv("SLACK_API_BASE_URL", "https://slack.com/api")
SLACK_HTTP_TIMEOUT_SECONDS = _get_env_float(
    "SLACK_HTTP_TIMEOUT_SECONDS", 30.0
)  # Total timeout for a single Web API call

# Relay display
SLACK_SYSTEM_ICON = os.getenv("SLACK_SYSTEM_ICON", ":globe_with_meridians:")
SLACK_SPEAKER_ICONS = (
    ":bear:",
    ":cat:",
    ":cow:",
    ":dog:",
    ":frog:",
    ":hamster:",
    ":koala:",
    ":monkey_face:",
    ":mouse:",
    ":octopus:",
    ":panda_face:",
    ":penguin:",
    ":pig:",
    ":rabbit:",
    ":tiger:",
    ":wolf:",
)
