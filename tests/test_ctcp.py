"""Test the CTCP encoder."""

from __future__ import annotations

import pytest

from ircwire.commands import notice, privmsg
from ircwire.ctcp import CTCP_DELIMITER, ctcp
from ircwire.text import InvalidParameterType


def test_ctcp() -> None:
    """Test that payloads are wrapped in delimiters, without a terminator."""
    assert ctcp("ACTION waves") == b"\x01ACTION waves\x01"
    assert ctcp(b"VERSION") == b"\x01VERSION\x01"
    assert ctcp("") == CTCP_DELIMITER * 2
    assert not ctcp("PING 12345").endswith(b"\r\n")


def test_ctcp_in_message() -> None:
    """Test using a CTCP payload as a message."""
    assert privmsg("#chan", ctcp("ACTION waves")) == b"PRIVMSG #chan :\x01ACTION waves\x01\r\n"
    assert notice("guest", ctcp("VERSION ircwire")) == b"NOTICE guest :\x01VERSION ircwire\x01\r\n"


def test_ctcp_invalid() -> None:
    """Test that non-text payloads are rejected."""
    with pytest.raises(InvalidParameterType):
        ctcp(1)  # type: ignore
