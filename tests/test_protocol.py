from __future__ import annotations

import asyncio

import pytest

from wsshared.protocol import (
    FrameDecoder,
    OversizedIncomingFrame,
    OversizedOutgoingMessage,
    ProtocolError,
    async_decode_frame,
    build_handshake_response,
    derive_accept,
    encode_frame,
    mask,
    unmask,
)

MASK_KEY = b"\x37\xfa\x21\x3d"


def test_derive_accept_matches_rfc_example():
    assert derive_accept("dGhlIHNhbXBsZSBub25jZQ==") == "s3pPLMBiTxaQ9kYGzzhZRbK+xOo="


def test_derive_accept_is_deterministic_for_any_input():
    assert derive_accept("not base64 at all") == derive_accept("not base64 at all")
    assert derive_accept("") != derive_accept("x")


def test_handshake_response_wire_format():
    response = build_handshake_response("dGhlIHNhbXBsZSBub25jZQ==")
    assert response == (
        b"HTTP/1.1 101 Switching Protocols\r\n"
        b"Upgrade: websocket\r\n"
        b"Connection: Upgrade\r\n"
        b"Sec-WebSocket-Accept: s3pPLMBiTxaQ9kYGzzhZRbK+xOo=\r\n"
        b"\r\n"
    )


def test_unmask_rfc_example():
    # RFC 6455 section 5.7: masked "Hello"
    assert unmask(bytes([0x7F, 0x9F, 0x4D, 0x51, 0x58]), MASK_KEY) == b"Hello"


def test_masking_is_self_inverse():
    payload = "héllo wörld, masked twice".encode("utf-8")
    assert mask(payload, MASK_KEY) != payload
    assert unmask(mask(payload, MASK_KEY), MASK_KEY) == payload
    assert unmask(b"", MASK_KEY) == b""


def test_unmask_rejects_bad_key_length():
    with pytest.raises(ProtocolError):
        unmask(b"abc", b"\x01\x02")


def test_encode_short_frame():
    assert encode_frame("Hello") == b"\x81\x05Hello"
    assert encode_frame("") == b"\x81\x00"


@pytest.mark.parametrize("size", [125, 126, 65535])
def test_encode_length_boundaries(size):
    frame = encode_frame("a" * size)
    if size <= 125:
        assert frame[:2] == bytes([0x81, size])
        assert len(frame) == 2 + size
    else:
        assert frame[:2] == bytes([0x81, 126])
        assert int.from_bytes(frame[2:4], "big") == size
        assert len(frame) == 4 + size


def test_encode_counts_utf8_bytes_not_characters():
    frame = encode_frame("é" * 63)  # 126 bytes
    assert frame[1] == 126
    assert int.from_bytes(frame[2:4], "big") == 126


def test_encode_oversized_message_raises():
    with pytest.raises(OversizedOutgoingMessage) as info:
        encode_frame("a" * 65536)
    assert info.value.size == 65536


def test_masked_client_frame_layout():
    frame = encode_frame("Hello", mask_key=MASK_KEY)
    assert frame == bytes([0x81, 0x85]) + MASK_KEY + bytes([0x7F, 0x9F, 0x4D, 0x51, 0x58])


@pytest.mark.parametrize("size", [0, 1, 125, 126, 127, 65535])
def test_decoder_round_trip(size):
    text = "x" * size
    decoder = FrameDecoder()
    decoder.feed(encode_frame(text, mask_key=MASK_KEY))
    frame = decoder.next_frame()
    assert frame is not None
    assert frame.text() == text
    assert frame.fin is True
    assert frame.opcode == 0x1
    assert frame.masked is True
    assert decoder.next_frame() is None
    assert len(decoder) == 0


def test_decoder_handles_byte_by_byte_reads():
    text = "short reads ✓ " * 20
    data = encode_frame(text, mask_key=MASK_KEY)
    decoder = FrameDecoder()
    for i in range(len(data) - 1):
        decoder.feed(data[i : i + 1])
        assert decoder.next_frame() is None
    decoder.feed(data[-1:])
    frame = decoder.next_frame()
    assert frame is not None and frame.text() == text


def test_decoder_yields_back_to_back_frames_in_order():
    decoder = FrameDecoder()
    decoder.feed(encode_frame("one", mask_key=MASK_KEY) + encode_frame("two", mask_key=MASK_KEY) + b"\x81")
    assert [frame.text() for frame in decoder.frames()] == ["one", "two"]
    assert len(decoder) == 1


def test_decoder_reads_unmasked_frame_without_mask_key():
    decoder = FrameDecoder()
    decoder.feed(encode_frame("plain"))
    frame = decoder.next_frame()
    assert frame is not None
    assert frame.masked is False and frame.text() == "plain"


def test_decoder_rejects_64_bit_length_without_consuming():
    decoder = FrameDecoder()
    data = bytes([0x81, 0x80 | 127]) + (70000).to_bytes(8, "big") + MASK_KEY
    decoder.feed(data)
    with pytest.raises(OversizedIncomingFrame):
        decoder.next_frame()
    assert len(decoder) == len(data)


def test_decoder_replaces_invalid_utf8():
    decoder = FrameDecoder()
    decoder.feed(encode_frame(b"ok\xff", mask_key=MASK_KEY))
    assert decoder.next_frame().text() == "ok�"


def _reader_with(data: bytes) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


def test_async_decode_frame_round_trip():
    async def scenario():
        reader = _reader_with(encode_frame("a" * 300, mask_key=MASK_KEY))
        return await async_decode_frame(reader)

    frame = asyncio.run(scenario())
    assert frame.text() == "a" * 300


def test_async_decode_frame_rejects_64_bit_length():
    async def scenario():
        reader = _reader_with(bytes([0x81, 0xFF]) + bytes(8))
        with pytest.raises(OversizedIncomingFrame):
            await async_decode_frame(reader)
        # only the two header bytes were consumed
        return await reader.read()

    assert asyncio.run(scenario()) == bytes(8)


def test_async_decode_frame_incomplete_stream():
    async def scenario():
        reader = _reader_with(encode_frame("truncated", mask_key=MASK_KEY)[:-3])
        await async_decode_frame(reader)

    with pytest.raises(asyncio.IncompleteReadError):
        asyncio.run(scenario())
