"""Command line entry point: ``basicirc <host> <port> <nick> <channel>``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from collections.abc import Sequence

from .config import ClientConfig
from .error_handling import log_error
from .errors import ConfigError, ConnectError
from .irc.client import BasicIRCClient
from .irc.observer import ClientObserver
from .logging_config import LoggerConfigurator
from .logs.logger import logger

EXIT_OK = 0
EXIT_USAGE = 1


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 instead of argparse's 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> UsageParser:
    parser = UsageParser(
        prog="basicirc",
        description="Connect to an IRC server, join one channel and print its chat.",
    )
    parser.add_argument("host", help="chat server, e.g. irc.libera.chat")
    parser.add_argument("port", type=int, help="server port, e.g. 6667")
    parser.add_argument("nick", help="used as both user name and nick")
    parser.add_argument("channel", help="channel to join, e.g. #test")
    return parser


def parse_config(argv: Sequence[str] | None = None) -> ClientConfig:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return ClientConfig.from_args([args.host, args.port, args.nick, args.channel])
    except ConfigError as e:
        logger.log_event("app", "config_invalid", level=logging.ERROR, error=str(e))
        parser.error(str(e))


class SignalHandler:
    """Turns SIGINT/SIGTERM into a single graceful shutdown of the client."""

    def __init__(self, client: BasicIRCClient) -> None:
        self.client = client
        self.shutdown_initiated = False
        self._task: asyncio.Task[None] | None = None

    def install(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.stop)
            except (NotImplementedError, RuntimeError):  # pragma: no cover - Windows
                logger.log_event(
                    "app", "signal_unsupported", level=logging.DEBUG, signal=sig.name
                )

    def stop(self) -> None:
        if self.shutdown_initiated:
            return
        self.shutdown_initiated = True
        logger.log_event("app", "interrupted", level=logging.WARNING)
        self._task = asyncio.create_task(self.client.shutdown())


async def run_client(
    config: ClientConfig,
    *,
    observer: ClientObserver | None = None,
    handle_signals: bool = True,
) -> None:
    """Connect and relay chat until the session ends.

    Raises:
        ConnectError: the server could not be reached.
    """
    client = BasicIRCClient(
        config.host, config.port, config.nick, config.channel, observer=observer
    )
    logger.log_event(
        "app",
        "start",
        host=config.host,
        port=config.port,
        nick=config.nick,
        channel=config.channel,
    )
    await client.connect()
    if handle_signals:
        SignalHandler(client).install()
    try:
        await client.wait_closed()
    finally:
        await client.close()
    logger.log_event("app", "exit")


def main(argv: Sequence[str] | None = None) -> int:
    config = parse_config(argv)
    LoggerConfigurator().configure()
    try:
        asyncio.run(run_client(config))
    except ConnectError as e:
        logger.log_event("app", "connect_failed", level=logging.ERROR, error=str(e))
        return EXIT_USAGE
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
    except Exception as e:  # noqa: BLE001
        log_error("Top-level error", e)
        return EXIT_USAGE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
