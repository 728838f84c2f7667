"""Async IRC client: one connection, one channel, rate-limited sends."""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
from collections.abc import Callable
from typing import Any

from ..constants import (
    CONNECT_TIMEOUT_SECONDS,
    JOIN_TIMEOUT_SECONDS,
    OUTGOING_QUEUE_SIZE,
    QUIT_MESSAGE,
    REAL_NAME,
    SEND_INTERVAL_SECONDS,
    SHUTDOWN_GRACE_SECONDS,
    WIRE_ENCODING,
)
from ..errors import ConnectError, StreamError
from ..logs.logger import logger
from .dispatcher import IRCDispatcher
from .message_types import MessageType
from .models import ConnectionState, IOResult
from .observer import ClientObserver, LoggingObserver
from .parser import Message, message, parse_message, serialize, trailing


class BasicIRCClient:  # pylint: disable=too-many-instance-attributes
    """Minimal IRC client.

    After ``connect()`` a reader task decodes and dispatches inbound lines in
    arrival order while a writer task drains a bounded FIFO queue, pausing
    ``send_interval`` seconds after every line. ``enqueue()`` never blocks and
    reports a full queue or a client that is shutting down by returning False.

    Any read or write failure ends the session: the observer is told, the
    shutdown sequence runs and both tasks exit. There is no reconnect.
    """

    def __init__(
        self,
        host: str,
        port: int,
        nick: str,
        channel: str,
        *,
        observer: ClientObserver | None = None,
        queue_size: int = OUTGOING_QUEUE_SIZE,
        send_interval: float = SEND_INTERVAL_SECONDS,
        shutdown_grace: float = SHUTDOWN_GRACE_SECONDS,
        connect_timeout: float = CONNECT_TIMEOUT_SECONDS,
        join_timeout: float = JOIN_TIMEOUT_SECONDS,
    ) -> None:
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        self.host = host
        self.port = port
        self._nick = nick
        self._channel = channel
        self.observer: ClientObserver = observer or LoggingObserver(nick, channel)
        self.queue_capacity = queue_size
        self.send_interval = send_interval
        self.shutdown_grace = shutdown_grace
        self.connect_timeout = connect_timeout
        self.join_timeout = join_timeout
        self._state = ConnectionState.UNCONNECTED
        self._queue: asyncio.Queue[Message] = asyncio.Queue(maxsize=queue_size)
        self._stop = asyncio.Event()
        self._shutdown_requested = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._writer_task: asyncio.Task[None] | None = None
        self.dispatcher = IRCDispatcher(self)

    @property
    def nick(self) -> str:
        return self._nick

    @property
    def channel(self) -> str:
        return self._channel

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def pending(self) -> int:
        """Number of messages waiting in the send queue."""
        return self._queue.qsize()

    @property
    def shutting_down(self) -> bool:
        return self._shutdown_requested

    def _set_state(self, new_state: ConnectionState) -> None:
        if self._state is new_state:
            return
        logger.log_event(
            "irc",
            "state_change",
            level=logging.DEBUG,
            user=self._nick,
            old_state=self._state.name,
            new_state=new_state.name,
        )
        self._state = new_state

    async def connect(self) -> None:
        """Open the connection, start both tasks and queue registration.

        Raises:
            ConnectError: the client was already used, or the server could
                not be reached.
        """
        if self._state is not ConnectionState.UNCONNECTED:
            raise ConnectError(
                "client can only connect once", data={"state": self._state.name}
            )
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "irc", "connect_start", user=self._nick, host=self.host, port=self.port
        )
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=self.connect_timeout,
            )
        except (OSError, TimeoutError) as e:
            error = str(e) or type(e).__name__
            logger.log_event(
                "irc",
                "connect_failed",
                level=logging.ERROR,
                user=self._nick,
                host=self.host,
                port=self.port,
                error=error,
            )
            self._shutdown_requested = True
            self._set_state(ConnectionState.CLOSED)
            raise ConnectError(
                f"could not connect to {self.host}:{self.port}: {error}",
                data={"host": self.host, "port": self.port},
            ) from e

        self._loop = asyncio.get_running_loop()
        logger.log_event(
            "irc", "connect_established", user=self._nick, host=self.host, port=self.port
        )
        self._set_state(ConnectionState.ACTIVE)
        self._reader_task = asyncio.create_task(
            self._read_loop(self._stop), name=f"irc-reader-{self._nick}"
        )
        self._writer_task = asyncio.create_task(
            self._write_loop(self._stop), name=f"irc-writer-{self._nick}"
        )
        for task in (self._reader_task, self._writer_task):
            task.add_done_callback(self._on_task_done)

        # The server tolerates registration sent without waiting for replies.
        for msg in self._registration_messages():
            self.enqueue(msg)
        logger.log_event("irc", "bootstrap_queued", level=logging.DEBUG, user=self._nick)

    def _registration_messages(self) -> list[Message]:
        return [
            message(MessageType.USER, self._nick, "0", "*", trailing(REAL_NAME)),
            message(MessageType.NICK, self._nick),
            message(MessageType.JOIN, self._channel),
        ]

    def enqueue(self, msg: Message) -> bool:
        """Queue ``msg`` for sending without blocking.

        Returns False, and drops the message, once shutdown has begun or when
        the queue is full. Must be called from the client's event loop; use
        ``submit_threadsafe`` from other threads.
        """
        if self._shutdown_requested:
            logger.log_event(
                "irc",
                "enqueue_after_shutdown",
                level=logging.DEBUG,
                user=self._nick,
                type=msg.type.name,
            )
            return False
        return self._offer(msg)

    def _offer(self, msg: Message) -> bool:
        try:
            self._queue.put_nowait(msg)
        except asyncio.QueueFull:
            logger.log_event(
                "irc",
                "enqueue_rejected",
                level=logging.WARNING,
                user=self._nick,
                type=msg.type.name,
                capacity=self.queue_capacity,
            )
            return False
        return True

    def submit_threadsafe(self, msg: Message) -> concurrent.futures.Future[bool]:
        """Enqueue from another thread; the future resolves to ``enqueue``'s result.

        Before ``connect()`` there is no loop to hand the message to and the
        future resolves to False.
        """
        future: concurrent.futures.Future[bool] = concurrent.futures.Future()

        def _put() -> None:
            if not future.cancelled():
                future.set_result(self.enqueue(msg))

        loop = self._loop
        if loop is None or loop.is_closed():
            future.set_result(False)
            return future
        try:
            loop.call_soon_threadsafe(_put)
        except RuntimeError:  # loop closed between the check and the call
            future.set_result(False)
        return future

    def notify(self, hook: Callable[..., object], *args: Any) -> None:
        """Call a bound observer hook; observer failures are logged and dropped."""
        try:
            hook(*args)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "observer_error",
                level=logging.ERROR,
                user=self._nick,
                hook=getattr(hook, "__name__", repr(hook)),
                error=str(e),
                error_type=type(e).__name__,
            )

    async def shutdown(self) -> None:
        """Ask the server to let us go, then stop both tasks.

        Idempotent. Queues QUIT if there is room, waits ``shutdown_grace``
        seconds so the writer can send it, then sets the stop event. Returns
        without waiting for the tasks; ``close()`` joins them.
        """
        if self._shutdown_requested:
            return
        self._shutdown_requested = True
        if self._state is not ConnectionState.ACTIVE:
            self._stop.set()
            if self._state is ConnectionState.UNCONNECTED:
                self._set_state(ConnectionState.CLOSED)
            return
        self._set_state(ConnectionState.DRAINING)
        logger.log_event(
            "irc", "shutdown_begin", user=self._nick, grace=self.shutdown_grace
        )
        if not self._offer(message(MessageType.QUIT, trailing(QUIT_MESSAGE))):
            logger.log_event(
                "irc", "shutdown_quit_dropped", level=logging.WARNING, user=self._nick
            )
        await asyncio.sleep(self.shutdown_grace)
        self._stop.set()
        logger.log_event("irc", "stop_signalled", level=logging.DEBUG, user=self._nick)

    async def close(self) -> None:
        """Shut down, join both tasks and release the stream. Idempotent."""
        await self.shutdown()
        tasks = [t for t in (self._reader_task, self._writer_task) if t is not None]
        for task in tasks:
            if task.done():
                continue
            try:
                await asyncio.wait_for(asyncio.shield(task), timeout=self.join_timeout)
            except TimeoutError:
                logger.log_event(
                    "irc",
                    "join_timeout",
                    level=logging.WARNING,
                    user=self._nick,
                    task=task.get_name(),
                    timeout=self.join_timeout,
                )
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        writer = self._writer
        self._release_stream("close")
        if writer is not None:
            try:
                await writer.wait_closed()
            except OSError as e:
                logger.log_event(
                    "irc",
                    "stream_released",
                    level=logging.DEBUG,
                    user=self._nick,
                    by="close",
                    error=str(e),
                )
        if self._state is not ConnectionState.CLOSED:
            self._set_state(ConnectionState.CLOSED)
            logger.log_event("irc", "closed", user=self._nick)

    async def wait_closed(self) -> None:
        """Wait until both tasks have exited."""
        tasks = [t for t in (self._reader_task, self._writer_task) if t is not None]
        if tasks:
            await asyncio.wait(tasks)

    async def __aenter__(self) -> BasicIRCClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _read_loop(self, stop: asyncio.Event) -> None:
        try:
            while not stop.is_set():
                result = await self._read_line()
                if not result.ok:
                    await self._fail(result.error)
                    break
                msg = parse_message(result.line or "")
                self.notify(self.observer.on_receive, msg)
                self.dispatcher.dispatch(msg)
        finally:
            self._release_stream("reader")
            logger.log_event(
                "irc", "task_exit", level=logging.DEBUG, user=self._nick, task="reader"
            )

    async def _write_loop(self, stop: asyncio.Event) -> None:
        try:
            while not stop.is_set():
                msg = await self._next_message(stop)
                if msg is None:
                    break
                self.notify(self.observer.on_send, msg)
                result = await self._write_message(msg)
                if not result.ok:
                    await self._fail(result.error)
                    break
                await self._pause(stop)
        finally:
            self._release_stream("writer")
            logger.log_event(
                "irc", "task_exit", level=logging.DEBUG, user=self._nick, task="writer"
            )

    async def _next_message(self, stop: asyncio.Event) -> Message | None:
        """Block until a message is queued or ``stop`` is set (then None)."""
        getter = asyncio.ensure_future(self._queue.get())
        stopper = asyncio.ensure_future(stop.wait())
        try:
            await asyncio.wait({getter, stopper}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for pending in (getter, stopper):
                if not pending.done():
                    pending.cancel()
        if getter.done() and not getter.cancelled():
            return getter.result()
        return None

    async def _pause(self, stop: asyncio.Event) -> None:
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(stop.wait(), timeout=self.send_interval)

    async def _read_line(self) -> IOResult:
        reader = self._reader
        if reader is None:
            return IOResult.failure(StreamError("stream not open", direction="read"))
        try:
            raw = await reader.readline()
        except (OSError, ValueError) as e:
            return IOResult.failure(
                StreamError(f"read failed: {e}", direction="read", cause=e)
            )
        if not raw:
            return IOResult.failure(
                StreamError("connection closed by peer", direction="read")
            )
        return IOResult.success(raw.decode(WIRE_ENCODING, errors="replace").strip("\r\n"))

    async def _write_message(self, msg: Message) -> IOResult:
        writer = self._writer
        if writer is None or writer.is_closing():
            return IOResult.failure(StreamError("stream not open", direction="write"))
        line = serialize(msg)
        try:
            writer.write(line.encode(WIRE_ENCODING))
            await writer.drain()
        except OSError as e:
            return IOResult.failure(
                StreamError(f"write failed: {e}", direction="write", cause=e)
            )
        return IOResult.success(line)

    async def _fail(self, error: StreamError) -> None:
        if not self._shutdown_requested:
            self.notify(self.observer.on_error, error)
            await self.shutdown()
            return
        # after shutdown: a peer hang-up logs at DEBUG, an OS error at WARNING
        logger.log_event(
            "irc",
            "io_error_after_shutdown",
            level=logging.WARNING if error.cause is not None else logging.DEBUG,
            user=self._nick,
            direction=error.direction,
            error=str(error),
        )

    def _release_stream(self, by: str) -> None:
        # Reader and writer share one transport; closing it twice is a no-op.
        writer = self._writer
        if writer is None or writer.is_closing():
            return
        writer.close()
        logger.log_event(
            "irc", "stream_released", level=logging.DEBUG, user=self._nick, by=by
        )

    def _on_task_done(self, _task: asyncio.Task[None]) -> None:
        tasks = (self._reader_task, self._writer_task)
        if all(t is not None and t.done() for t in tasks):
            if self._state is not ConnectionState.CLOSED:
                self._set_state(ConnectionState.CLOSED)
                logger.log_event("irc", "closed", user=self._nick)
