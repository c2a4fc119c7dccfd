"""ircwire — IRC client command encoding.

ircwire turns client intents (register, join a channel, send a message, quit)
into byte-exact, CRLF-terminated IRC commands, ready to be handed over to a
transport, and classifies the numeric replies and errors sent by servers.
"""

# Copyright © Faidon Liambotis
# Copyright © Wikimedia Foundation, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY CODE, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-FileCopyrightText: Faidon Liambotis
# SPDX-FileCopyrightText: Wikimedia Foundation
# SPDX-License-Identifier: Apache-2.0

from ._version import __version__
from .commands import IRCCommand, command, join, nick, notice, part, pass_, pong, privmsg, quit, user
from .ctcp import ctcp
from .main import run
from .numerics import ERR, LOGON_ERRORS, RPL, Category, IRCNumeric, category, is_logon_error, lookup
from .text import InvalidParameterType, normalize
from .transport import SinkMetrics, StreamSink, send, send_async

__all__ = [
    "__version__",
    "Category",
    "ERR",
    "IRCCommand",
    "IRCNumeric",
    "InvalidParameterType",
    "LOGON_ERRORS",
    "RPL",
    "SinkMetrics",
    "StreamSink",
    "category",
    "command",
    "ctcp",
    "is_logon_error",
    "join",
    "lookup",
    "nick",
    "normalize",
    "notice",
    "part",
    "pass_",
    "pong",
    "privmsg",
    "quit",
    "run",
    "send",
    "send_async",
    "user",
]
