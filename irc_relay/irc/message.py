"""IRC message model, parsing and serialization."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import IRC_LINE_DELIMITER
from ..errors.irc import ParseError

_FORBIDDEN = ("\r", "\n", "\0")
_DISPLAY_ESCAPES = str.maketrans({"\r": "\\r", "\n": "\\n", "\0": "\\0"})


@dataclass(frozen=True, slots=True)
class Message:
    """A single IRC protocol message.

    Attributes:
        command: Upper-case verb (``PRIVMSG``) or three digit numeric (``001``).
        arguments: Positional arguments; only the last may contain spaces.
        origin: Nick of the sender, or "" for messages we originate.
    """

    command: str
    arguments: tuple[str, ...] = field(default=())
    origin: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.arguments, tuple):
            object.__setattr__(self, "arguments", tuple(self.arguments))

    @classmethod
    def build(cls, command: str, *arguments: str, origin: str = "") -> Message:
        return cls(command=command, arguments=tuple(arguments), origin=origin)

    def to_bytes(self) -> bytes:
        """Serialize to a CRLF-terminated wire line.

        The line length is not checked here; the client enforces the limit.

        Raises:
            ValueError: If a field cannot be represented on the wire.
        """
        if not _is_command(self.command):
            raise ValueError(f"invalid IRC command: {self.command!r}")
        if self.origin:
            _check_token(self.origin, "origin")
        last = len(self.arguments) - 1
        for i, arg in enumerate(self.arguments):
            if any(c in arg for c in _FORBIDDEN):
                raise ValueError(f"argument {i} contains a line break or NUL")
            if i != last or not _needs_trailing_marker(arg):
                _check_token(arg, f"argument {i}")
        return self._render().encode("utf-8") + IRC_LINE_DELIMITER

    def _render(self) -> str:
        parts: list[str] = []
        if self.origin:
            parts.append(f":{self.origin}")
        parts.append(self.command)
        last = len(self.arguments) - 1
        for i, arg in enumerate(self.arguments):
            if i == last and _needs_trailing_marker(arg):
                parts.append(f":{arg}")
            else:
                parts.append(arg)
        return " ".join(parts)

    def __str__(self) -> str:
        # Display form for logs and the console; never raises.
        return self._render().translate(_DISPLAY_ESCAPES)


def parse_message(raw: bytes | str) -> Message:
    """Parse one wire line (with or without its terminator).

    A stray CR or NUL inside an argument is kept as received. Such a message
    still displays through `str` but `Message.to_bytes` rejects it.

    Raises:
        ParseError: If the line is empty or has no valid command.
    """
    line = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    line = line.rstrip("\r\n")
    if not line.strip():
        raise ParseError("empty line")
    original = line

    # IRCv3 message tags carry nothing the relay uses.
    if line.startswith("@"):
        _, _, line = line.partition(" ")

    origin = ""
    if line.startswith(":"):
        prefix, sep, line = line[1:].partition(" ")
        if not prefix or not sep:
            raise ParseError(f"missing command: {original!r}")
        origin = nick_from_prefix(prefix)

    command, _, rest = line.lstrip(" ").partition(" ")
    command = command.upper()
    if not _is_command(command):
        raise ParseError(f"invalid command in line: {original!r}")

    arguments: list[str] = []
    while rest:
        rest = rest.lstrip(" ")
        if not rest:
            break
        if rest.startswith(":"):
            arguments.append(rest[1:])
            break
        arg, _, rest = rest.partition(" ")
        arguments.append(arg)

    return Message(command=command, arguments=tuple(arguments), origin=origin)


def nick_from_prefix(prefix: str) -> str:
    """Strip the ``!user@host`` suffix from a message prefix."""
    for sep in ("!", "@"):
        prefix = prefix.split(sep, 1)[0]
    return prefix


def _is_command(command: str) -> bool:
    if not command or not command.isascii():
        return False
    if command.isdigit():
        return len(command) == 3
    return command.isalpha() and command == command.upper()


def _needs_trailing_marker(arg: str) -> bool:
    return not arg or " " in arg or arg.startswith(":")


def _check_token(value: str, what: str) -> None:
    if not value or " " in value or value.startswith(":") or any(
        c in value for c in _FORBIDDEN
    ):
        raise ValueError(f"{what} is not a valid middle token: {value!r}")
