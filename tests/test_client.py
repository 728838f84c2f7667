from __future__ import annotations

import asyncio
import socket

import pytest

from basicirc.errors import ConnectError, StreamError
from basicirc.irc.client import BasicIRCClient
from basicirc.irc.message_types import MessageType
from basicirc.irc.models import ConnectionState
from basicirc.irc.parser import message, privmsg

REGISTRATION = ["USER tester 0 * :basicirc", "NICK tester", "JOIN #test"]


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.mark.asyncio
async def test_connect_sends_registration_in_order(irc_server, make_client):
    client = make_client()
    await client.connect()
    try:
        assert client.state is ConnectionState.ACTIVE
        assert await irc_server.expect(3) == REGISTRATION
    finally:
        await client.close()
    assert client.state is ConnectionState.CLOSED


@pytest.mark.asyncio
async def test_connect_failure_raises_connect_error(observer):
    client = BasicIRCClient(
        "127.0.0.1", _unused_port(), "tester", "#test", observer=observer
    )
    with pytest.raises(ConnectError) as exc_info:
        await client.connect()
    assert exc_info.value.data["port"] == client.port
    assert client.state is ConnectionState.CLOSED
    assert client.enqueue(message(MessageType.NICK, "x")) is False


@pytest.mark.asyncio
async def test_connect_twice_is_rejected(make_client):
    client = make_client()
    await client.connect()
    try:
        with pytest.raises(ConnectError):
            await client.connect()
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_ping_answered_with_pong(irc_server, make_client, observer):
    client = make_client()
    await client.connect()
    try:
        await irc_server.expect(3)
        await irc_server.send("PING :server.example")
        assert await irc_server.next_line() == "PONG tester :server.example"
        assert observer.received[0].type is MessageType.PING
        assert [m.type for m in observer.sent][-1] is MessageType.PONG
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_blank_line_reaches_observer_as_malformed(irc_server, make_client, observer):
    client = make_client()
    await client.connect()
    try:
        await irc_server.expect(3)
        await irc_server.send("")
        await irc_server.send("PING :x")
        assert await irc_server.next_line() == "PONG tester :x"
        assert observer.received[0].type is MessageType.MALFORMED
        assert observer.received[0].params == ("",)
        assert observer.received[1].type is MessageType.PING
        assert client.state is ConnectionState.ACTIVE
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_privmsg_delivered_to_observer_in_arrival_order(irc_server, make_client, observer):
    client = make_client()
    await client.connect()
    try:
        await irc_server.send(":alice!a@h PRIVMSG #test :first")
        await irc_server.send(":bob!b@h PRIVMSG #test :\x01ACTION waves\x01")
        await irc_server.send(":srv 366 tester #test :End of /NAMES list.")
        await irc_server.send(":carol!c@h PRIVMSG tester :third")
        for _ in range(50):
            if len(observer.received) == 4:
                break
            await asyncio.sleep(0.01)
        assert observer.chat == [
            "[#test] alice: first",
            "[#test] bob waves",
            "[tester] carol: third",
        ]
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_outbound_messages_keep_enqueue_order(irc_server, make_client):
    client = make_client()
    await client.connect()
    try:
        for i in range(5):
            assert client.enqueue(privmsg("#test", f"line {i}"))
        lines = await irc_server.expect(8)
        assert lines[:3] == REGISTRATION
        assert lines[3:] == [f"PRIVMSG #test :line {i}" for i in range(5)]
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_send_interval_spaces_out_writes(irc_server, make_client):
    client = make_client(send_interval=0.1)
    loop = asyncio.get_running_loop()
    await client.connect()
    try:
        await irc_server.next_line()
        started = loop.time()
        await irc_server.expect(2)
        assert loop.time() - started >= 0.15
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_enqueue_beyond_capacity_is_rejected():
    client = BasicIRCClient("127.0.0.1", 6667, "tester", "#test", queue_size=3)
    results = [client.enqueue(message(MessageType.NICK, f"n{i}")) for i in range(5)]
    assert results == [True, True, True, False, False]
    assert client.pending == 3


def test_queue_size_must_be_positive():
    with pytest.raises(ValueError):
        BasicIRCClient("127.0.0.1", 6667, "tester", "#test", queue_size=0)


@pytest.mark.asyncio
async def test_enqueue_after_shutdown_returns_false(make_client):
    client = make_client()
    await client.connect()
    try:
        await client.shutdown()
        assert client.shutting_down
        assert client.enqueue(privmsg("#test", "too late")) is False
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_shutdown_twice_sends_single_quit(irc_server, make_client):
    client = make_client()
    await client.connect()
    await asyncio.gather(client.shutdown(), client.shutdown())
    await client.shutdown()
    await client.close()
    await asyncio.wait_for(irc_server.disconnected.wait(), timeout=2)
    lines = irc_server.drain_received()
    assert lines[:3] == REGISTRATION
    assert [line for line in lines if line.startswith("QUIT")] == ["QUIT :leaving..."]


@pytest.mark.asyncio
async def test_shutdown_moves_through_draining(make_client):
    client = make_client(shutdown_grace=0.1)
    await client.connect()
    pending = asyncio.create_task(client.shutdown())
    await asyncio.sleep(0.02)
    assert client.state is ConnectionState.DRAINING
    await pending
    await client.close()
    assert client.state is ConnectionState.CLOSED


@pytest.mark.asyncio
async def test_shutdown_with_full_queue_does_not_block(make_client):
    client = make_client(queue_size=3, send_interval=1.0, shutdown_grace=0.05)
    await client.connect()
    # registration fills the queue; QUIT cannot be queued
    await asyncio.wait_for(client.shutdown(), timeout=1)
    await client.close()
    assert client.state is ConnectionState.CLOSED


@pytest.mark.asyncio
async def test_peer_close_reports_error_and_ends_session(irc_server, make_client, observer):
    client = make_client(shutdown_grace=0.05)
    await client.connect()
    await irc_server.expect(3)
    await irc_server.hang_up()
    await asyncio.wait_for(client.wait_closed(), timeout=2)
    assert client.state is ConnectionState.CLOSED
    assert len(observer.errors) >= 1
    assert isinstance(observer.errors[0], StreamError)
    assert observer.errors[0].direction == "read"
    assert client.enqueue(privmsg("#test", "anyone?")) is False
    await client.close()


@pytest.mark.asyncio
async def test_close_is_idempotent_and_joins_tasks(make_client):
    client = make_client()
    await client.connect()
    await client.close()
    await client.close()
    assert client._reader_task is not None and client._reader_task.done()
    assert client._writer_task is not None and client._writer_task.done()
    assert client.state is ConnectionState.CLOSED


@pytest.mark.asyncio
async def test_close_without_connect():
    client = BasicIRCClient("127.0.0.1", 6667, "tester", "#test")
    await client.close()
    assert client.state is ConnectionState.CLOSED


@pytest.mark.asyncio
async def test_context_manager_connects_and_closes(irc_server, make_client):
    async with make_client() as client:
        assert client.state is ConnectionState.ACTIVE
        assert await irc_server.expect(3) == REGISTRATION
    assert client.state is ConnectionState.CLOSED


@pytest.mark.asyncio
async def test_failing_observer_does_not_stop_engine(irc_server, make_client):
    class ExplodingObserver:
        def on_send(self, msg):  # type: ignore[no-untyped-def]
            raise RuntimeError("send hook")

        def on_receive(self, msg):  # type: ignore[no-untyped-def]
            raise RuntimeError("receive hook")

        def on_chat(self, line):  # type: ignore[no-untyped-def]
            raise RuntimeError("chat hook")

        def on_error(self, error):  # type: ignore[no-untyped-def]
            raise RuntimeError("error hook")

    client = make_client(observer=ExplodingObserver())
    await client.connect()
    try:
        assert await irc_server.expect(3) == REGISTRATION
        await irc_server.send(":a!b@c PRIVMSG #test :hi")
        await irc_server.send("PING :still-here")
        assert await irc_server.next_line() == "PONG tester :still-here"
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_submit_threadsafe_from_worker_thread(irc_server, make_client):
    client = make_client()
    await client.connect()
    loop = asyncio.get_running_loop()
    try:
        await irc_server.expect(3)
        accepted = await loop.run_in_executor(
            None,
            lambda: client.submit_threadsafe(privmsg("#test", "from a thread")).result(
                timeout=2
            ),
        )
        assert accepted is True
        assert await irc_server.next_line() == "PRIVMSG #test :from a thread"
    finally:
        await client.close()


def test_submit_threadsafe_before_connect_is_rejected():
    client = BasicIRCClient("127.0.0.1", 6667, "tester", "#test")
    assert client.submit_threadsafe(privmsg("#test", "hi")).result(timeout=1) is False
