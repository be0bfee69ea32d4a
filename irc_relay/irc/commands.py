"""IRC command verbs and numeric replies (RFC 2812 subset)."""

from __future__ import annotations

# Verbs
PASS = "PASS"
NICK = "NICK"
USER = "USER"
QUIT = "QUIT"
JOIN = "JOIN"
PART = "PART"
PRIVMSG = "PRIVMSG"
NOTICE = "NOTICE"
PING = "PING"
PONG = "PONG"
ERROR = "ERROR"

# Numeric replies
RPL_WELCOME = "001"
RPL_YOURHOST = "002"
RPL_CREATED = "003"
RPL_MYINFO = "004"
RPL_BOUNCE = "005"
RPL_TOPIC = "332"
RPL_NAMREPLY = "353"
RPL_ENDOFNAMES = "366"
RPL_MOTD = "372"
RPL_MOTDSTART = "375"
RPL_ENDOFMOTD = "376"
ERR_NOSUCHNICK = "401"
ERR_NOSUCHCHANNEL = "403"
ERR_CANNOTSENDTOCHAN = "404"
ERR_NOMOTD = "422"
ERR_NONICKNAMEGIVEN = "431"
ERR_ERRONEUSNICKNAME = "432"
ERR_NICKNAMEINUSE = "433"
ERR_NICKCOLLISION = "436"
ERR_UNAVAILRESOURCE = "437"
ERR_NOTONCHANNEL = "442"
ERR_NEEDMOREPARAMS = "461"
ERR_ALREADYREGISTRED = "462"
ERR_PASSWDMISMATCH = "464"
ERR_CHANNELISFULL = "471"
ERR_INVITEONLYCHAN = "473"
ERR_BANNEDFROMCHAN = "474"
ERR_BADCHANNELKEY = "475"
ERR_RESTRICTED = "484"

COMMAND_NAMES: dict[str, str] = {
    name_value: name
    for name, name_value in dict(globals()).items()
    if name.startswith(("RPL_", "ERR_")) and isinstance(name_value, str)
}

# Replies that end the registration handshake with a failure.
REGISTRATION_FAILURES = frozenset(
    {
        ERR_NONICKNAMEGIVEN,
        ERR_ERRONEUSNICKNAME,
        ERR_NICKNAMEINUSE,
        ERR_NICKCOLLISION,
        ERR_UNAVAILRESOURCE,
        ERR_RESTRICTED,
        ERR_NEEDMOREPARAMS,
        ERR_ALREADYREGISTRED,
    }
)


def command_name(command: str) -> str:
    """Return the canonical name for a numeric reply, or the command itself."""
    return COMMAND_NAMES.get(command, command)
