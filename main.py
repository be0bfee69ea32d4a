#!/usr/bin/env python3
"""
Main entry point for the IRC/Slack relay
"""

from irc_relay.main import run

if __name__ == "__main__":
    run()
