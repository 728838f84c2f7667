from __future__ import annotations

import asyncio
import socket

import pytest

from basicirc import cli
from basicirc.config import ClientConfig


@pytest.fixture(autouse=True)
def _no_root_logging(monkeypatch):  # type: ignore[no-untyped-def]
    monkeypatch.setattr(cli.LoggerConfigurator, "configure", lambda self: None)


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["irc.example.net", "6667", "tester"],
        ["irc.example.net", "port", "tester", "#test"],
        ["irc.example.net", "70000", "tester", "#test"],
    ],
)
def test_bad_arguments_print_usage_and_exit_1(argv, capsys):  # type: ignore[no-untyped-def]
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    assert exc_info.value.code == 1
    assert "usage: basicirc" in capsys.readouterr().err


def test_parse_config_valid():
    cfg = cli.parse_config(["irc.example.net", "6667", "tester", "test"])
    assert cfg == ClientConfig(host="irc.example.net", port=6667, nick="tester", channel="#test")


def test_unreachable_server_exits_1():
    assert cli.main(["127.0.0.1", str(_unused_port()), "tester", "#test"]) == 1


@pytest.mark.asyncio
async def test_run_client_relays_chat_until_peer_hangs_up(irc_server, observer):
    cfg = ClientConfig(host="127.0.0.1", port=irc_server.port, nick="tester", channel="#test")
    session = asyncio.create_task(cli.run_client(cfg, observer=observer, handle_signals=False))

    assert await irc_server.expect(3) == [
        "USER tester 0 * :basicirc",
        "NICK tester",
        "JOIN #test",
    ]
    await irc_server.send(":alice!a@h PRIVMSG #test :hello")
    for _ in range(50):
        if observer.chat:
            break
        await asyncio.sleep(0.01)
    await irc_server.hang_up()

    await asyncio.wait_for(session, timeout=3)
    assert observer.chat == ["[#test] alice: hello"]


class _StubClient:
    def __init__(self) -> None:
        self.calls = 0

    async def shutdown(self) -> None:
        self.calls += 1


@pytest.mark.asyncio
async def test_signal_handler_shuts_down_once():
    client = _StubClient()
    handler = cli.SignalHandler(client)  # type: ignore[arg-type]
    handler.stop()
    handler.stop()
    await asyncio.sleep(0)
    assert handler.shutdown_initiated
    assert client.calls == 1
