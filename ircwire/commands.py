"""IRC command encoding.

Builds wire protocol commands, ready to be handed to a transport: each
function takes str or bytes parameters and returns the full command as bytes,
CRLF included. For example:

    >>> privmsg("#chan", "hello")
    b'PRIVMSG #chan :hello\\r\\n'

Parameters are encoded as given. Nothing is validated: parameter lengths, the
character set and embedded CR/LF are the caller's responsibility.
"""

# SPDX-FileCopyrightText: Faidon Liambotis
# SPDX-FileCopyrightText: Wikimedia Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import dataclasses
import types
from collections.abc import Callable, Mapping

from .text import Text, normalize, normalize_all

CRLF = b"\r\n"

DEFAULT_QUIT_MESSAGE = "Leaving"


@dataclasses.dataclass(frozen=True)
class IRCCommand:
    """Represents an outgoing command: a verb, its parameters and an optional trailing parameter.

    The trailing parameter is always prefixed with a colon and thus may contain
    spaces. Middle parameters are joined with a single space each, as given;
    in particular, empty middle parameters are kept.
    """

    verb: bytes
    params: tuple[bytes, ...] = ()
    trailing: bytes | None = None

    def encode(self) -> bytes:
        """Generate the wire protocol line for the instance, without CRLF."""
        line = self.verb
        if self.params:
            line += b" " + b" ".join(self.params)
        if self.trailing is not None:
            line += b" :" + self.trailing
        return line

    def __bytes__(self) -> bytes:
        """Generate the framed, CRLF-terminated, command."""
        return command(self.encode())


def command(*parts: Text) -> bytes:
    """Concatenate parts into a single command and terminate it with CRLF."""
    return b"".join(normalize_all(*parts)) + CRLF


def pass_(password: Text) -> bytes:
    """Send the connection password to the server."""
    return bytes(IRCCommand(b"PASS", (normalize(password),)))


def nick(nickname: Text) -> bytes:
    """Set or change the nickname."""
    return bytes(IRCCommand(b"NICK", (normalize(nickname),)))


def user(username: Text, realname: Text) -> bytes:
    """Register the username and real name of a new connection."""
    username, realname = normalize_all(username, realname)
    return bytes(IRCCommand(b"USER", (username, b"0", b"*"), realname))


def pong(nickname: Text, target: Text | None = None) -> bytes:
    """Respond to a PING, optionally targeted at a specific server."""
    if target is None:
        return bytes(IRCCommand(b"PONG", (normalize(nickname),)))
    return bytes(IRCCommand(b"PONG", normalize_all(nickname, target)))


def privmsg(target: Text, message: Text) -> bytes:
    """Send a message to a channel or a user."""
    target, message = normalize_all(target, message)
    return bytes(IRCCommand(b"PRIVMSG", (target,), message))


def notice(target: Text, message: Text) -> bytes:
    """Send a notice to a channel or a user."""
    target, message = normalize_all(target, message)
    return bytes(IRCCommand(b"NOTICE", (target,), message))


def join(channel: Text, key: Text = "") -> bytes:
    """Join a channel.

    The separator between channel and key is always emitted, so a join without
    a key ends with a space, e.g. b"JOIN #chan \\r\\n".
    """
    return bytes(IRCCommand(b"JOIN", normalize_all(channel, key)))


def part(channel: Text) -> bytes:
    """Leave a channel."""
    return bytes(IRCCommand(b"PART", (normalize(channel),)))


def quit(message: Text = DEFAULT_QUIT_MESSAGE) -> bytes:  # noqa: A001
    """Disconnect from the server."""
    return bytes(IRCCommand(b"QUIT", (), normalize(message)))


ENCODERS: Mapping[str, Callable[..., bytes]] = types.MappingProxyType(
    {
        "PASS": pass_,
        "NICK": nick,
        "USER": user,
        "PONG": pong,
        "PRIVMSG": privmsg,
        "NOTICE": notice,
        "JOIN": join,
        "PART": part,
        "QUIT": quit,
    }
)
