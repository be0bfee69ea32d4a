"""Relay between one IRC channel and one Slack channel."""

__version__ = "1.0.0"
