"""Test handing encoded commands over to transport sinks."""

from __future__ import annotations

import asyncio
import errno
import io
import socket

import pytest

from ircwire.commands import join, nick, privmsg
from ircwire.transport import SinkMetrics, StreamSink, send, send_async


class FakeSink:
    """A sink recording everything sent to it."""

    def __init__(self) -> None:
        self.sent: list[bytes] = []

    def sendall(self, data: bytes) -> None:
        self.sent.append(data)


class BrokenSink:
    """A sink failing as if the connection was closed."""

    def sendall(self, data: bytes) -> None:
        raise OSError(errno.EPIPE, "Broken pipe")


class FakeWriter:
    """An asyncio.StreamWriter lookalike."""

    def __init__(self, fail: bool = False) -> None:
        self.buffer = b""
        self.drained = False
        self.fail = fail

    def write(self, data: bytes) -> None:
        self.buffer += data

    async def drain(self) -> None:
        if self.fail:
            raise ConnectionResetError(errno.ECONNRESET, "Connection reset by peer")
        self.drained = True


def test_send() -> None:
    """Test that data is passed to the sink unchanged, and accounted for."""
    sink, metrics = FakeSink(), SinkMetrics()
    send(sink, nick("guest"), metrics)
    send(sink, privmsg("#chan", "hello"), metrics)
    send(sink, privmsg("#chan", "again"), metrics)

    assert sink.sent == [b"NICK guest\r\n", b"PRIVMSG #chan :hello\r\n", b"PRIVMSG #chan :again\r\n"]
    registry = metrics.registry
    assert registry.get_sample_value("ircwire_commands_sent_total", {"verb": "NICK"}) == 1
    assert registry.get_sample_value("ircwire_commands_sent_total", {"verb": "PRIVMSG"}) == 2
    assert registry.get_sample_value("ircwire_bytes_sent_total") == sum(len(data) for data in sink.sent)


def test_send_without_metrics() -> None:
    """Test that metrics are optional."""
    sink = FakeSink()
    send(sink, join("#chan"))
    assert sink.sent == [b"JOIN #chan \r\n"]


def test_send_error() -> None:
    """Test that transport errors are counted and raised again."""
    metrics = SinkMetrics()
    with pytest.raises(OSError) as exc:
        send(BrokenSink(), nick("guest"), metrics)
    assert exc.value.errno == errno.EPIPE

    registry = metrics.registry
    assert registry.get_sample_value("ircwire_errors_total", {"type": "transport"}) == 1
    assert registry.get_sample_value("ircwire_bytes_sent_total") == 0


def test_send_socket() -> None:
    """Test sending to an actual (connected) socket."""
    left, right = socket.socketpair()
    with left, right:
        send(left, privmsg("#chan", "hello"))
        assert right.recv(512) == b"PRIVMSG #chan :hello\r\n"


def test_stream_sink() -> None:
    """Test the file object adapter."""
    fileobj = io.BytesIO()
    sink = StreamSink(fileobj)
    send(sink, nick("guest"))
    send(sink, join("#chan", "key"))
    assert fileobj.getvalue() == b"NICK guest\r\nJOIN #chan key\r\n"
    assert repr(sink) == "<StreamSink ?>"


@pytest.mark.asyncio
async def test_send_async() -> None:
    """Test sending to an asyncio writer."""
    writer, metrics = FakeWriter(), SinkMetrics()
    await send_async(writer, nick("guest"), metrics)
    assert writer.buffer == b"NICK guest\r\n"
    assert writer.drained
    assert metrics.registry.get_sample_value("ircwire_commands_sent_total", {"verb": "NICK"}) == 1


@pytest.mark.asyncio
async def test_send_async_error() -> None:
    """Test that asyncio transport errors are counted and raised again."""
    writer, metrics = FakeWriter(fail=True), SinkMetrics()
    with pytest.raises(ConnectionResetError):
        await send_async(writer, nick("guest"), metrics)
    assert metrics.registry.get_sample_value("ircwire_errors_total", {"type": "transport"}) == 1


@pytest.mark.asyncio
async def test_send_async_stream() -> None:
    """Test sending through an actual asyncio stream."""
    received: asyncio.Future[bytes] = asyncio.get_running_loop().create_future()

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        received.set_result(await reader.readline())
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    async with server:
        _, writer = await asyncio.open_connection("127.0.0.1", port)
        await send_async(writer, privmsg("#chan", "hello"))
        assert await asyncio.wait_for(received, timeout=5) == b"PRIVMSG #chan :hello\r\n"
        writer.close()
        await writer.wait_closed()
