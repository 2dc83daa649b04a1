from __future__ import annotations

import asyncio
import logging
from http import HTTPStatus
from typing import Optional, Set

from wsshared.protocol import ENCODING, HandshakeRequest, ProtocolError, StatusCode
from wsshared.protocol.constants import CRLF, HTTP_HEAD_DELIMITER

from .connection import ConnectionContext
from .connection_manager import ConnectionManager
from .upgrade import UpgradeController

logger = logging.getLogger(__name__)

FALLBACK_BODY = "Hello World"


class SocketServer:
    def __init__(
        self,
        host: str,
        port: int,
        connection_manager: ConnectionManager,
        max_request_head: int = 64 * 1024,
        read_chunk_size: int = 4096,
    ) -> None:
        self.host = host
        self.port = port
        self.connection_manager = connection_manager
        self.max_request_head = max_request_head
        self.controller = UpgradeController(connection_manager, read_chunk_size=read_chunk_size)
        self._server: Optional[asyncio.AbstractServer] = None
        self._writers: Set[asyncio.StreamWriter] = set()

    @property
    def bound_port(self) -> Optional[int]:
        if not self._server or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        self._server = await asyncio.start_server(
            self._handle_client, self.host, self.port, limit=self.max_request_head
        )
        logger.info("Server is listening to %s:%s", self.host, self.bound_port)

    async def stop(self) -> None:
        if not self._server:
            return
        self._server.close()
        # wait_closed() also waits for live client handlers, including ones
        # still waiting on their request head
        for writer in list(self._writers):
            writer.close()
        await self._server.wait_closed()
        self._server = None

    async def _handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        ctx = ConnectionContext(reader=reader, writer=writer, peername=str(writer.get_extra_info("peername")))
        self._writers.add(writer)
        try:
            head = await reader.readuntil(HTTP_HEAD_DELIMITER)
            request = HandshakeRequest.from_head(head)
            if not request.is_upgrade:
                await self._send_plain(writer, StatusCode.SUCCESS, FALLBACK_BODY)
            elif not request.websocket_key:
                raise ProtocolError(StatusCode.BAD_REQUEST, message="Missing Sec-WebSocket-Key")
            else:
                await self.controller.run(request, ctx)
        except asyncio.IncompleteReadError:
            logger.info("Client %s disconnected before sending a request", ctx.peername)
        except asyncio.LimitOverrunError:
            logger.warning("Request head from %s exceeds %s bytes", ctx.peername, self.max_request_head)
            await self._reject(writer, ctx, "Request head too large")
        except ProtocolError as exc:
            logger.warning("Protocol error for %s: %s", ctx.peername, exc)
            await self._reject(writer, ctx, exc.message)
        except (ConnectionResetError, ConnectionAbortedError, BrokenPipeError, OSError) as exc:
            logger.error("Error! Connection %s (%s): %s", ctx.conn_id, ctx.peername, exc)
        except Exception as exc:
            logger.exception("Unhandled error: %s", exc)
        finally:
            self._writers.discard(writer)
            try:
                writer.close()
                await writer.wait_closed()
            except Exception as e:
                logger.debug("Error during writer cleanup: %s", e)

    async def _reject(self, writer: asyncio.StreamWriter, ctx: ConnectionContext, reason: str) -> None:
        # Past the handshake the peer speaks frames, not HTTP.
        if ctx.conn_id is not None:
            return
        try:
            await self._send_plain(writer, StatusCode.BAD_REQUEST, reason)
        except (ConnectionError, OSError) as exc:
            logger.debug("Could not answer %s: %s", ctx.peername, exc)

    async def _send_plain(self, writer: asyncio.StreamWriter, status: StatusCode, body: str) -> None:
        writer.write(_plain_response(status, body))
        await writer.drain()


def _plain_response(status: StatusCode, body: str) -> bytes:
    payload = body.encode(ENCODING)
    reason = HTTPStatus(int(status)).phrase
    lines = [
        f"HTTP/1.1 {int(status)} {reason}",
        "Content-Type: text/plain; charset=utf-8",
        f"Content-Length: {len(payload)}",
        "Connection: close",
        "",
        "",
    ]
    return CRLF.join(lines).encode(ENCODING) + payload
