import asyncio
import os

import pytest
import pytest_asyncio

# Keep the module-level defaults small in case a test builds a client without overrides
os.environ.setdefault("SEND_INTERVAL_SECONDS", "0.01")
os.environ.setdefault("SHUTDOWN_GRACE_SECONDS", "0.05")
os.environ.setdefault("JOIN_TIMEOUT_SECONDS", "1")

from basicirc.irc.client import BasicIRCClient  # noqa: E402


class RecordingObserver:
    """Observer that keeps everything it is told, for assertions."""

    def __init__(self) -> None:
        self.sent = []
        self.received = []
        self.chat = []
        self.errors = []

    def on_send(self, msg) -> None:  # type: ignore[no-untyped-def]
        self.sent.append(msg)

    def on_receive(self, msg) -> None:  # type: ignore[no-untyped-def]
        self.received.append(msg)

    def on_chat(self, line: str) -> None:
        self.chat.append(line)

    def on_error(self, error) -> None:  # type: ignore[no-untyped-def]
        self.errors.append(error)


class FakeIRCServer:
    """Loopback server accepting a single client and recording its lines."""

    def __init__(self) -> None:
        self.lines: asyncio.Queue[str] = asyncio.Queue()
        self.connected = asyncio.Event()
        self.disconnected = asyncio.Event()
        self.port = 0
        self._server: asyncio.AbstractServer | None = None
        self._writer: asyncio.StreamWriter | None = None

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def _handle(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self._writer = writer
        self.connected.set()
        try:
            while True:
                raw = await reader.readline()
                if not raw:
                    break
                await self.lines.put(raw.decode("utf-8").rstrip("\r\n"))
        except ConnectionError:
            pass
        finally:
            self.disconnected.set()
            writer.close()

    async def send(self, line: str) -> None:
        await self.connected.wait()
        assert self._writer is not None
        self._writer.write(f"{line}\r\n".encode())
        await self._writer.drain()

    async def next_line(self, timeout: float = 2.0) -> str:
        return await asyncio.wait_for(self.lines.get(), timeout=timeout)

    async def expect(self, count: int, timeout: float = 2.0) -> list[str]:
        return [await self.next_line(timeout) for _ in range(count)]

    def drain_received(self) -> list[str]:
        out = []
        while not self.lines.empty():
            out.append(self.lines.get_nowait())
        return out

    async def hang_up(self) -> None:
        await self.connected.wait()
        assert self._writer is not None
        self._writer.close()

    async def stop(self) -> None:
        if self._writer is not None:
            self._writer.close()
        if self._server is not None:
            self._server.close()
            await asyncio.wait_for(self._server.wait_closed(), timeout=2)


@pytest_asyncio.fixture
async def irc_server():
    server = FakeIRCServer()
    await server.start()
    yield server
    await server.stop()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def make_client(irc_server, observer):  # type: ignore[no-untyped-def]
    def _factory(**overrides) -> BasicIRCClient:  # type: ignore[no-untyped-def]
        options = {
            "observer": observer,
            "send_interval": 0.005,
            "shutdown_grace": 0.2,
            "join_timeout": 1.0,
        }
        options.update(overrides)
        return BasicIRCClient("127.0.0.1", irc_server.port, "tester", "#test", **options)

    return _factory
