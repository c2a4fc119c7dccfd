"""IRC numeric replies and errors.

Server replies carry a three-digit numeric instead of a command name. This
module defines the numerics a client is likely to meet, sorted into replies
(RPL) and errors (ERR), as well as named groups of numerics that share a role,
such as the errors that may be returned while registering a connection.

All tables are built once, at import time, and are read-only afterwards.
"""

# SPDX-FileCopyrightText: Faidon Liambotis
# SPDX-FileCopyrightText: Wikimedia Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import enum
import types
from collections.abc import Mapping
from typing import Union


class IRCNumeric(enum.Enum):
    """Base class for IRC numeric enums."""

    def __str__(self) -> str:
        """Return the numeric in the wire protocol format, e.g. 001."""
        return str(self.value).zfill(3)

    def __repr__(self) -> str:
        """Return the representation of the numeric, e.g. RPL_WELCOME."""
        return f"{self.__class__.__name__}_{self.name}"


@enum.unique
class RPL(IRCNumeric):
    """Standard IRC RPL_* replies, as defined in RFCs."""

    WELCOME = 1
    YOURHOST = 2
    CREATED = 3
    MYINFO = 4
    ISUPPORT = 5  # de facto standard for server support
    BOUNCE = 10  # de facto replacement of 005 in RFC 2812
    UMODEIS = 221
    STATSDLINE = 250
    LUSERCLIENT = 251
    LUSEROP = 252
    LUSERUNKNOWN = 253
    LUSERCHANNELS = 254
    LUSERME = 255
    LOCALUSERS = 265
    GLOBALUSERS = 266
    USERHOST = 302
    WHOISUSER = 311
    WHOISSERVER = 312
    ENDOFWHO = 315
    WHOISIDLE = 317
    ENDOFWHOIS = 318
    LIST = 322
    LISTEND = 323
    CHANNELMODEIS = 324
    NOTOPIC = 331
    TOPIC = 332
    TOPICWHOTIME = 333
    NAMREPLY = 353
    ENDOFNAMES = 366
    ENDOFBANLIST = 368
    ENDOFWHOWAS = 369
    MOTD = 372
    MOTDSTART = 375
    ENDOFMOTD = 376


@enum.unique
class ERR(IRCNumeric):
    """Erroneous IRC ERR_* replies, as defined in RFCs."""

    NOSUCHNICK = 401
    NOSUCHSERVER = 402
    NOSUCHCHANNEL = 403
    CANNOTSENDTOCHAN = 404
    TOOMANYCHANNELS = 405
    WASNOSUCHNICK = 406
    NOORIGIN = 409
    UNKNOWNCOMMAND = 421
    NONICKNAMEGIVEN = 431
    ERRONEUSNICKNAME = 432
    NICKNAMEINUSE = 433
    NICKCOLLISION = 436
    UNAVAILRESOURCE = 437
    NOTONCHANNEL = 442
    NOTREGISTERED = 451
    NEEDMOREPARAMS = 461
    ALREADYREGISTERED = 462
    CHANOPRIVSNEEDED = 482
    RESTRICTED = 484
    USERSDONTMATCH = 502


class Category(enum.Enum):
    """The semantic category of a numeric."""

    REPLY = "reply"
    ERROR = "error"
    UNCLASSIFIED = "unclassified"

    def __str__(self) -> str:
        return self.value


Code = Union[str, bytes, int, IRCNumeric]

# errors that may be returned in response to PASS/NICK/USER, before registration completes
LOGON_ERRORS: frozenset[ERR] = frozenset(
    {
        ERR.NONICKNAMEGIVEN,
        ERR.ERRONEUSNICKNAME,
        ERR.NICKNAMEINUSE,
        ERR.NICKCOLLISION,
        ERR.UNAVAILRESOURCE,
        ERR.NEEDMOREPARAMS,
        ERR.ALREADYREGISTERED,
        ERR.RESTRICTED,
    }
)

GROUPS: Mapping[str, frozenset[IRCNumeric]] = types.MappingProxyType(
    {
        "logon_errors": LOGON_ERRORS,
    }
)

_BY_CODE: Mapping[str, IRCNumeric] = types.MappingProxyType({str(numeric): numeric for numeric in (*RPL, *ERR)})


def lookup(code: Code) -> IRCNumeric | None:
    """Return the numeric for a code such as "433", b"433" or 433.

    Returns None for codes that are unknown or not three digits long.
    """
    if isinstance(code, IRCNumeric):
        return code
    if isinstance(code, bytes):
        try:
            code = code.decode("ascii")
        except UnicodeDecodeError:
            return None
    elif isinstance(code, int) and not isinstance(code, bool):
        if not 0 <= code <= 999:
            return None
        code = str(code).zfill(3)
    if not isinstance(code, str):
        return None
    return _BY_CODE.get(code)


def category(code: Code) -> Category:
    """Classify a code as a reply or an error; unknown codes are UNCLASSIFIED."""
    numeric = lookup(code)
    if isinstance(numeric, RPL):
        return Category.REPLY
    if isinstance(numeric, ERR):
        return Category.ERROR
    return Category.UNCLASSIFIED


def in_group(code: Code, group: str) -> bool:
    """Return True if code is a member of the named group.

    Raises KeyError for unknown group names.
    """
    members = GROUPS[group]
    numeric = lookup(code)
    return numeric is not None and numeric in members


def is_logon_error(code: Code) -> bool:
    """Return True if code is one of the errors returned during registration."""
    return in_group(code, "logon_errors")
