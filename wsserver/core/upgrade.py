from __future__ import annotations

import logging

from wsshared.protocol import (
    FrameDecoder,
    HandshakeRequest,
    OversizedIncomingFrame,
    OversizedOutgoingMessage,
    build_handshake_response,
)

from .connection import ConnectionContext
from .connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


class UpgradeController:
    """Drives one connection from the HTTP upgrade to its close.

    CONNECTING -> OPEN on handshake, OPEN -> CLOSED on socket error, end of
    stream or an unreadable frame.
    """

    def __init__(self, connection_manager: ConnectionManager, read_chunk_size: int = 4096) -> None:
        self.connection_manager = connection_manager
        self.read_chunk_size = read_chunk_size

    async def run(self, request: HandshakeRequest, ctx: ConnectionContext) -> None:
        ctx.handshake_key = request.websocket_key or ""
        logger.info("%s has connected (%s)", ctx.handshake_key, ctx.peername)

        ctx.writer.write(build_handshake_response(ctx.handshake_key))
        await ctx.writer.drain()
        self.connection_manager.register(ctx)

        decoder = FrameDecoder()
        try:
            while True:
                chunk = await ctx.reader.read(self.read_chunk_size)
                if not chunk:
                    logger.info("Connection %s (%s) ended the stream", ctx.conn_id, ctx.peername)
                    return
                decoder.feed(chunk)
                self._dispatch(ctx, decoder)
        except OversizedIncomingFrame as exc:
            logger.warning("Rejected frame from connection %s (%s): %s", ctx.conn_id, ctx.peername, exc.message)
        except (ConnectionError, OSError):
            logger.info("Connection %s (%s) errored, removing it", ctx.conn_id, ctx.peername)
            raise
        finally:
            self.connection_manager.unregister(ctx.conn_id)

    def _dispatch(self, ctx: ConnectionContext, decoder: FrameDecoder) -> None:
        for frame in decoder.frames():
            ctx.touch()
            ctx.messages_received += 1
            received = frame.text()
            logger.debug("Message received from %s: %s", ctx.conn_id, received)
            try:
                self.connection_manager.broadcast(received)
            except OversizedOutgoingMessage as exc:
                logger.warning("Dropped message from connection %s: %s", ctx.conn_id, exc.message)
