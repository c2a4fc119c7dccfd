"""Transport sinks.

Encoded commands are handed over to a transport, which is responsible for
actually transmitting them. A connected socket.socket or an
asyncio.StreamWriter can be used directly; anything else implementing the same
methods works too. No connection handling happens here: sinks are expected to
be connected already, and errors are passed back to the caller as-is.
"""

# SPDX-FileCopyrightText: Faidon Liambotis
# SPDX-FileCopyrightText: Wikimedia Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import IO, Any, Protocol

import prometheus_client
import structlog
from prometheus_client import Counter

logger = structlog.get_logger()


class TransportSink(Protocol):
    """A blocking sink, e.g. a connected socket."""

    def sendall(self, data: bytes) -> Any:
        """Transmit all of data."""


class AsyncTransportSink(Protocol):
    """An asyncio sink, e.g. an asyncio.StreamWriter."""

    def write(self, data: bytes) -> Any:
        """Buffer data for transmission."""

    async def drain(self) -> None:
        """Wait until buffered data has been transmitted."""


class StreamSink:
    """Adapts a binary file object, such as sys.stdout.buffer, to a TransportSink."""

    def __init__(self, fileobj: IO[bytes]) -> None:
        self.fileobj = fileobj

    def sendall(self, data: bytes) -> None:
        """Write and flush data."""
        self.fileobj.write(data)
        self.fileobj.flush()

    def __repr__(self) -> str:
        """Return a user-readable description of the sink."""
        return f"<{self.__class__.__name__} {getattr(self.fileobj, 'name', '?')}>"


class SinkMetrics:
    """Prometheus counters for the commands handed over to sinks."""

    def __init__(self, registry: prometheus_client.CollectorRegistry | None = None) -> None:
        if registry is None:
            registry = prometheus_client.CollectorRegistry()
        self.registry = registry
        self.commands = Counter("ircwire_commands_sent", "Count of commands sent", ["verb"], registry=registry)
        self.bytes = Counter("ircwire_bytes_sent", "Count of bytes sent", registry=registry)
        self.errors = Counter("ircwire_errors", "Count of errors and exceptions", ["type"], registry=registry)

    def observe(self, data: bytes) -> None:
        """Account for a successfully sent command."""
        self.commands.labels(_verb(data)).inc()
        self.bytes.inc(len(data))


def _verb(data: bytes) -> str:
    """Return the command name of an encoded command, e.g. PRIVMSG."""
    return data.split(b" ", 1)[0].rstrip(b"\r\n").decode("ascii", errors="replace")


def send(sink: TransportSink, data: bytes, metrics: SinkMetrics | None = None) -> None:
    """Hand an encoded command over to a sink.

    Transport errors (OSError) are logged, and then raised again.
    """
    log = logger.bind(verb=_verb(data), sink=repr(sink))
    try:
        sink.sendall(data)
    except OSError as exc:
        if metrics:
            metrics.errors.labels("transport").inc()
        log.error("Unable to send command", error=str(exc))
        raise
    log.debug("Command sent", size=len(data))
    if metrics:
        metrics.observe(data)


async def send_async(sink: AsyncTransportSink, data: bytes, metrics: SinkMetrics | None = None) -> None:
    """Hand an encoded command over to an asyncio sink and wait for it to drain."""
    log = logger.bind(verb=_verb(data), sink=repr(sink))
    try:
        sink.write(data)
        await sink.drain()
    except OSError as exc:
        if metrics:
            metrics.errors.labels("transport").inc()
        log.error("Unable to send command", error=str(exc))
        raise
    log.debug("Command sent", size=len(data))
    if metrics:
        metrics.observe(data)
