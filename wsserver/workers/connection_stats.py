from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from wsserver.core.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


class ConnectionStatsReporter:
    """Periodically logs how many connections are registered."""

    def __init__(self, connection_manager: ConnectionManager, interval: float = 1.0) -> None:
        self.connection_manager = connection_manager
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name="connection-stats")

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    def report(self) -> int:
        count = self.connection_manager.count()
        logger.info("Open connections: %s", count)
        return count

    async def _run(self) -> None:
        while True:
            try:
                self.report()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.exception("Connection stats failed: %s", exc)
            await asyncio.sleep(self.interval)
