from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Dict

from wsserver.config import SERVER_CONFIG, load_server_config
from wsserver.core import ConnectionManager, SocketServer
from wsserver.workers import ConnectionStatsReporter

logger = logging.getLogger(__name__)


def install_exception_logging(loop: asyncio.AbstractEventLoop) -> None:
    """Log uncaught exceptions instead of letting them end the process."""

    def _loop_handler(_loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        logger.error(
            "Error! Event: loop, Message: %s",
            context.get("message"),
            exc_info=context.get("exception"),
        )

    def _excepthook(exc_type, exc, tb) -> None:
        logger.error("Error! Event: uncaughtException, Message: %s", exc, exc_info=(exc_type, exc, tb))

    loop.set_exception_handler(_loop_handler)
    sys.excepthook = _excepthook


async def run_server() -> None:
    load_server_config()
    logging.basicConfig(level=SERVER_CONFIG["log_level"])
    install_exception_logging(asyncio.get_running_loop())

    connection_manager = ConnectionManager()
    stats = ConnectionStatsReporter(connection_manager, interval=SERVER_CONFIG["stats_interval"])

    server = SocketServer(
        SERVER_CONFIG["host"],
        SERVER_CONFIG["port"],
        connection_manager,
        max_request_head=SERVER_CONFIG["max_request_head"],
        read_chunk_size=SERVER_CONFIG["read_chunk_size"],
    )
    await server.start()
    stats.start()
    try:
        await asyncio.Event().wait()  # keep running
    finally:
        await stats.stop()
        await server.stop()


def main() -> None:
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server stopped")


if __name__ == "__main__":
    main()
