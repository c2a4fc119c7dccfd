"""CTCP (Client-To-Client Protocol) quoting."""

# SPDX-FileCopyrightText: Faidon Liambotis
# SPDX-FileCopyrightText: Wikimedia Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from .text import Text, normalize

CTCP_DELIMITER = b"\x01"


def ctcp(payload: Text) -> bytes:
    """Wrap payload in CTCP delimiters, e.g. \\x01ACTION waves\\x01.

    No CRLF is appended; the result is meant to be used as the message of a
    PRIVMSG or NOTICE.
    """
    return CTCP_DELIMITER + normalize(payload) + CTCP_DELIMITER
