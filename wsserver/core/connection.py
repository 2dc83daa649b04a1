from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ConnectionState(Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class ConnectionContext:
    reader: Any  # asyncio.StreamReader
    writer: Any  # asyncio.StreamWriter
    peername: str
    handshake_key: Optional[str] = None
    conn_id: Optional[int] = None
    state: ConnectionState = ConnectionState.CONNECTING
    last_seen: float = field(default_factory=time.time)
    messages_received: int = 0

    def mark_open(self, conn_id: int) -> None:
        self.conn_id = conn_id
        self.state = ConnectionState.OPEN
        self.touch()

    def mark_closed(self) -> None:
        self.state = ConnectionState.CLOSED

    def touch(self) -> None:
        self.last_seen = time.time()
