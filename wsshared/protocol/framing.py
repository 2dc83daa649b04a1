from __future__ import annotations

import asyncio
import struct
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .constants import (
    ENCODING,
    FIN_BIT,
    FIRST_BYTE_TEXT,
    LENGTH_BITS,
    MASK_BIT,
    MASK_KEY_LENGTH,
    MAX_SIXTEEN_BITS_LENGTH,
    OPCODE_BITS,
    SEVEN_BITS_INTEGER_MARKER,
    SIXTEEN_BITS_INTEGER_MARKER,
)
from .errors import OversizedIncomingFrame, OversizedOutgoingMessage
from .masking import mask, unmask

_UINT16 = struct.Struct(">H")


@dataclass(frozen=True)
class Frame:
    """One decoded frame. ``payload`` is already unmasked."""

    fin: bool
    opcode: int
    masked: bool
    payload: bytes
    mask_key: Optional[bytes] = None

    def text(self) -> str:
        return self.payload.decode(ENCODING, errors="replace")


def encode_frame(message: Union[str, bytes], mask_key: Optional[bytes] = None) -> bytes:
    """
    Serialize a text message into a single FIN=1 text frame.

    Server frames are never masked; ``mask_key`` exists for the client side
    (tooling and tests) and sets the mask bit when given.
    """
    payload = message.encode(ENCODING) if isinstance(message, str) else bytes(message)
    size = len(payload)
    mask_bit = MASK_BIT if mask_key is not None else 0

    if size <= SEVEN_BITS_INTEGER_MARKER:
        header = bytes([FIRST_BYTE_TEXT, mask_bit | size])
    elif size <= MAX_SIXTEEN_BITS_LENGTH:
        header = bytes([FIRST_BYTE_TEXT, mask_bit | SIXTEEN_BITS_INTEGER_MARKER]) + _UINT16.pack(size)
    else:
        raise OversizedOutgoingMessage(size)

    if mask_key is None:
        return header + payload
    return header + bytes(mask_key) + mask(payload, mask_key)


class FrameDecoder:
    """
    Incremental decoder for client frames.

    Bytes are accumulated with :meth:`feed` across any number of reads; a frame
    is only consumed from the buffer once it is complete, so short reads never
    shift the parse position.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def feed(self, data: bytes) -> None:
        self._buffer.extend(data)

    def next_frame(self) -> Optional[Frame]:
        buf = self._buffer
        if len(buf) < 2:
            return None

        first, second = buf[0], buf[1]
        masked = bool(second & MASK_BIT)
        length_indicator = second & LENGTH_BITS
        offset = 2

        if length_indicator <= SEVEN_BITS_INTEGER_MARKER:
            length = length_indicator
        elif length_indicator == SIXTEEN_BITS_INTEGER_MARKER:
            if len(buf) < offset + 2:
                return None
            (length,) = _UINT16.unpack_from(buf, offset)
            offset += 2
        else:
            raise OversizedIncomingFrame()

        mask_key: Optional[bytes] = None
        if masked:
            if len(buf) < offset + MASK_KEY_LENGTH:
                return None
            mask_key = bytes(buf[offset : offset + MASK_KEY_LENGTH])
            offset += MASK_KEY_LENGTH

        if len(buf) < offset + length:
            return None
        payload = bytes(buf[offset : offset + length])
        del buf[: offset + length]

        if mask_key is not None:
            payload = unmask(payload, mask_key)
        return Frame(
            fin=bool(first & FIN_BIT),
            opcode=first & OPCODE_BITS,
            masked=masked,
            payload=payload,
            mask_key=mask_key,
        )

    def frames(self) -> Iterator[Frame]:
        """Yield every complete frame currently buffered."""
        while True:
            frame = self.next_frame()
            if frame is None:
                return
            yield frame


async def async_decode_frame(reader: asyncio.StreamReader) -> Frame:
    """Read exactly one frame from the stream and decode it."""
    first, second = await reader.readexactly(2)
    masked = bool(second & MASK_BIT)
    length_indicator = second & LENGTH_BITS

    if length_indicator <= SEVEN_BITS_INTEGER_MARKER:
        length = length_indicator
    elif length_indicator == SIXTEEN_BITS_INTEGER_MARKER:
        (length,) = _UINT16.unpack(await reader.readexactly(2))
    else:
        raise OversizedIncomingFrame()

    mask_key = await reader.readexactly(MASK_KEY_LENGTH) if masked else None
    payload = await reader.readexactly(length)
    if mask_key is not None:
        payload = unmask(payload, mask_key)
    return Frame(
        fin=bool(first & FIN_BIT),
        opcode=first & OPCODE_BITS,
        masked=masked,
        payload=payload,
        mask_key=mask_key,
    )


__all__ = ["Frame", "FrameDecoder", "async_decode_frame", "encode_frame"]
