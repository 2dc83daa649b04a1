from __future__ import annotations

from .constants import MASK_KEY_LENGTH
from .errors import ErrorCode, ProtocolError, StatusCode


def unmask(payload: bytes, mask_key: bytes) -> bytes:
    """XOR every payload byte with the mask key byte at ``i % 4``."""
    if len(mask_key) != MASK_KEY_LENGTH:
        raise ProtocolError(
            StatusCode.BAD_REQUEST,
            ErrorCode.PROTOCOL_ERROR,
            f"Mask key must be {MASK_KEY_LENGTH} bytes, got {len(mask_key)}",
        )
    return bytes(byte ^ mask_key[i % MASK_KEY_LENGTH] for i, byte in enumerate(payload))


# XOR masking is its own inverse.
mask = unmask

__all__ = ["mask", "unmask"]
