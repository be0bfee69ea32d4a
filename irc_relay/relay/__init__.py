from .engine import Relay
from .events import RelayEvent
from .identity import display_identity, speaker_icon
from .resolve import RelayTargets, resolve_targets
from .tracker import KnownSpeakers
from .translate import IRCTranslator, SlackTranslator

__all__ = [
    "IRCTranslator",
    "KnownSpeakers",
    "Relay",
    "RelayEvent",
    "RelayTargets",
    "SlackTranslator",
    "display_identity",
    "resolve_targets",
    "speaker_icon",
]
