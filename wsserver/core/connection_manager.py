from __future__ import annotations

import itertools
import logging
from typing import Dict, Iterator, List, Optional

from wsshared.protocol import encode_frame

from .connection import ConnectionContext

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Registry of open WebSocket connections, used for broadcast.

    Only touched from the event loop thread, so no locking is needed.
    """

    def __init__(self) -> None:
        self._by_id: Dict[int, ConnectionContext] = {}
        self._ids: Iterator[int] = itertools.count(1)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, conn_id: object) -> bool:
        return conn_id in self._by_id

    def register(self, ctx: ConnectionContext) -> int:
        conn_id = next(self._ids)
        ctx.mark_open(conn_id)
        self._by_id[conn_id] = ctx
        return conn_id

    def unregister(self, conn_id: Optional[int]) -> Optional[ConnectionContext]:
        if conn_id is None:
            return None
        ctx = self._by_id.pop(conn_id, None)
        if ctx:
            ctx.mark_closed()
        return ctx

    def get(self, conn_id: int) -> Optional[ConnectionContext]:
        return self._by_id.get(conn_id)

    def find_by_key(self, handshake_key: str) -> List[ConnectionContext]:
        """Handshake keys are client supplied and may repeat, hence a list."""
        return [ctx for ctx in self._by_id.values() if ctx.handshake_key == handshake_key]

    def count(self) -> int:
        return len(self._by_id)

    def connections(self) -> List[ConnectionContext]:
        return list(self._by_id.values())

    def broadcast(self, message: str) -> int:
        """Write ``message`` as a text frame to every connection, sender included.

        The frame is encoded before any write, so an oversized message raises
        without reaching anyone. Returns the number of successful writes.
        """
        frame = encode_frame(message)
        delivered = 0
        for ctx in self.connections():
            try:
                ctx.writer.write(frame)
            except (ConnectionError, OSError, RuntimeError) as exc:
                logger.warning("Broadcast to connection %s (%s) failed: %s", ctx.conn_id, ctx.peername, exc)
                continue
            delivered += 1
        return delivered
