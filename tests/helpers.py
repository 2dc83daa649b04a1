from __future__ import annotations

from typing import List


class FakeWriter:
    """Collects written bytes in place of an asyncio.StreamWriter."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.chunks: List[bytes] = []
        self.fail_with = fail_with
        self.closed = False

    def write(self, data: bytes) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.chunks.append(bytes(data))

    async def drain(self) -> None:
        return None

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None

    def get_extra_info(self, name: str, default=None):
        return ("127.0.0.1", 50000) if name == "peername" else default

    @property
    def data(self) -> bytes:
        return b"".join(self.chunks)
